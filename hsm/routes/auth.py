"""
Request authentication helpers

Login and token issuance live in the upstream gateway; it forwards the
authenticated user's id in a header (AUTH_USER_HEADER, default X-User-Id).
These helpers resolve that id to an active User and enforce roles.
"""
from functools import wraps
from flask import current_app, request

from hsm.error_handlers.exceptions import AuthenticationException, AuthorizationException
from hsm.models import get_db, get_models


def get_current_user():
    """Get the acting user for this request, or None"""
    header = current_app.config.get('AUTH_USER_HEADER', 'X-User-Id')
    user_id = request.headers.get(header)
    if not user_id:
        return None

    user = get_db().session.get(get_models()['User'], user_id)
    if user is not None and not user.is_active:
        current_app.logger.info(f"Rejected request from inactive user {user_id}")
        return None
    return user


def require_authentication():
    """Decorator to require an identified, active user"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if get_current_user() is None:
                raise AuthenticationException('Authentication required')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def require_role(*roles):
    """Decorator to require one of the given roles"""
    allowed = [getattr(role, 'value', role) for role in roles]

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                raise AuthenticationException('Authentication required')
            if user.role not in allowed:
                raise AuthorizationException('You do not have permission to perform this action')
            return f(*args, **kwargs)
        return decorated_function
    return decorator
