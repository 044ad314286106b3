"""
Routes package for the Hospital Staff Scheduler
Centralizes all route blueprints
"""
from .auth import (
    get_current_user,
    require_authentication,
    require_role
)
from .shift_assignments import shift_assignments_bp
from .conventions import conventions_bp
from .health import health_bp

__all__ = [
    'shift_assignments_bp',
    'conventions_bp',
    'health_bp',
    'get_current_user',
    'require_authentication',
    'require_role'
]
