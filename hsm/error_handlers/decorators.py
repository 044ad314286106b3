"""
Error handling decorators

@handle_errors turns the AppException hierarchy into JSON responses for
the assignment and convention endpoints.
"""
from functools import wraps
from flask import jsonify, current_app
from datetime import datetime, timezone
from .exceptions import AppException


def handle_errors(f):
    """
    Convert exceptions raised by an endpoint into JSON responses

    AppException subclasses keep their status code and payload, so a
    ConventionViolationException becomes a 422 that lists every violation.
    Anything else is logged with an error id and answered with a generic 500.

    Place it outside the auth decorators so 401/403 responses are JSON too:

        @shift_assignments_bp.route('', methods=['POST'])
        @handle_errors
        @require_role(Role.ADMIN)
        def create_assignment():
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except AppException as e:
            current_app.logger.warning(
                f"{e.error_type} ({e.status_code}) in {f.__name__}: {e.message}",
                extra={'details': e.details} if e.details else {}
            )
            return jsonify(e.to_dict()), e.status_code

        except Exception as e:
            error_id = datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S_%f')

            current_app.logger.error(
                f"Unexpected error [{error_id}] in {f.__name__}: {str(e)}",
                exc_info=True
            )

            return jsonify({
                'error': 'InternalError',
                'message': 'An unexpected error occurred',
                'error_id': error_id,
                'status_code': 500
            }), 500

    return decorated
