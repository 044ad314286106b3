"""
Shift Assignment API Endpoints

Create, move, remove and list shift assignments. Every create/update is
checked against the assignee's conventions before anything is written.
"""
from flask import Blueprint, current_app, jsonify, request

from hsm.error_handlers import handle_errors
from hsm.error_handlers.exceptions import AuthorizationException, ValidationException
from hsm.extensions import limiter
from hsm.models import Role, get_db, get_models
from hsm.services.assignment_workflow import ShiftAssignmentService
from hsm.services.convention_validator import ConventionValidator
from hsm.utils.validators import parse_date_value, validate_id_fields, validate_required_fields

from .auth import get_current_user, require_authentication, require_role

shift_assignments_bp = Blueprint('shift_assignments', __name__, url_prefix='/api/shift-assignments')


def _service():
    return ShiftAssignmentService(
        get_db().session,
        get_models(),
        serialize_per_user=current_app.config.get('ASSIGNMENT_SERIALIZE_PER_USER', True)
    )


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationException('Request body must be JSON')
    return data


@shift_assignments_bp.route('', methods=['POST'])
@handle_errors
@require_role(Role.ADMIN)
def create_assignment():
    """
    POST /api/shift-assignments

    Body: {"userId": "...", "shiftId": "...", "date": "2025-10-15"}

    Returns 201 with the assignment, 409 on duplicate, 422 with
    "violations" when conventions are broken.
    """
    assignment = _service().create(_json_body(), get_current_user().id)
    return jsonify(assignment.to_dict()), 201


@shift_assignments_bp.route('/bulk', methods=['POST'])
@limiter.limit("30 per minute")
@handle_errors
@require_role(Role.ADMIN)
def bulk_create_assignments():
    """
    POST /api/shift-assignments/bulk

    Body: {"assignments": [{"userId", "shiftId", "date"}, ...]}

    Items are processed independently; the response lists both outcomes.
    """
    data = _json_body()
    results = _service().bulk_create(data.get('assignments'), get_current_user().id)
    return jsonify({
        'successful': [a.to_dict() for a in results['successful']],
        'failed': results['failed'],
    }), 200


@shift_assignments_bp.route('/validate', methods=['POST'])
@handle_errors
@require_authentication()
def validate_assignment():
    """
    POST /api/shift-assignments/validate

    Dry run of the convention check. Nothing is written.
    Body: {"userId": "...", "shiftId": "...", "date": "2025-10-15"}

    Staff may only preview their own assignments.
    """
    data = _json_body()
    validate_required_fields(data, ['userId', 'shiftId', 'date'])
    validate_id_fields(data, ['userId', 'shiftId'])
    user = get_current_user()
    if not user.is_admin and data['userId'] != user.id:
        raise AuthorizationException('You can only validate your own shift assignments')
    validator = ConventionValidator(get_db().session, get_models())
    result = validator.validate(data['userId'], data['shiftId'], parse_date_value(data['date']))
    return jsonify(result.to_dict()), 200


@shift_assignments_bp.route('', methods=['GET'])
@handle_errors
@require_authentication()
def list_assignments():
    """GET /api/shift-assignments?startDate=&endDate=&userId="""
    user = get_current_user()
    assignments = _service().find_all(request.args.to_dict(), user.id, user.is_admin)
    return jsonify([a.to_dict() for a in assignments]), 200


@shift_assignments_bp.route('/monthly/<int:year>/<int:month>', methods=['GET'])
@handle_errors
@require_authentication()
def monthly_assignments(year, month):
    """GET /api/shift-assignments/monthly/2025/10?userId= (calendar view)"""
    user = get_current_user()
    requested = request.args.get('userId')
    target_user_id = requested if user.is_admin and requested else user.id
    assignments = _service().get_monthly_assignments(target_user_id, year, month)
    return jsonify([a.to_dict() for a in assignments]), 200


@shift_assignments_bp.route('/<assignment_id>', methods=['GET'])
@handle_errors
@require_authentication()
def get_assignment(assignment_id):
    user = get_current_user()
    assignment = _service().find_one(assignment_id, user.id, user.is_admin)
    return jsonify(assignment.to_dict()), 200


@shift_assignments_bp.route('/<assignment_id>', methods=['PATCH'])
@handle_errors
@require_role(Role.ADMIN)
def update_assignment(assignment_id):
    """PATCH /api/shift-assignments/<id> with {"date": "..."}; only the date can change"""
    assignment = _service().update(assignment_id, _json_body(), get_current_user().id)
    return jsonify(assignment.to_dict()), 200


@shift_assignments_bp.route('/<assignment_id>', methods=['DELETE'])
@handle_errors
@require_authentication()
def delete_assignment(assignment_id):
    user = get_current_user()
    return jsonify(_service().remove(assignment_id, user.id, user.is_admin)), 200
