"""
Unified Error Handling System

Provides centralized, consistent error handling across the application.

Usage:
    from hsm.error_handlers import handle_errors
    from hsm.error_handlers.exceptions import ConflictException

    @api_bp.route('/endpoint')
    @handle_errors
    def my_endpoint():
        if duplicate:
            raise ConflictException('Already assigned')
        return jsonify({'success': True})
"""
from .exceptions import (
    AppException,
    ValidationException,
    PreconditionFailedException,
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    ConflictException,
    ConventionViolationException,
)
from .decorators import handle_errors


__all__ = [
    # Exceptions
    'AppException',
    'ValidationException',
    'PreconditionFailedException',
    'AuthenticationException',
    'AuthorizationException',
    'ResourceNotFoundException',
    'ConflictException',
    'ConventionViolationException',
    # Decorators
    'handle_errors',
    # Setup
    'setup_logging',
    'register_error_handlers',
]


def setup_logging(app):
    """Configure application logging"""
    from hsm.error_handlers import logging as eh_logging
    return eh_logging.setup_logging(app)


def register_error_handlers(app):
    """Register global error handlers for the Flask app"""
    from hsm.error_handlers import logging as eh_logging
    eh_logging.register_error_handlers(app)
