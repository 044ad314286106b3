"""
Custom exception hierarchy for type-safe error handling

Provides a structured exception hierarchy that maps to HTTP status codes
and enables consistent error responses across the application.

Usage:
    from hsm.error_handlers.exceptions import ResourceNotFoundException

    def load_shift(shift_id):
        shift = repo.find_by_id(shift_id)
        if not shift:
            raise ResourceNotFoundException('Shift not found')

Exception Hierarchy:
    AppException (base)
    ├── ValidationException (400)
    ├── PreconditionFailedException (400)
    ├── AuthenticationException (401)
    ├── AuthorizationException (403)
    ├── ResourceNotFoundException (404)
    ├── ConflictException (409)
    └── ConventionViolationException (422)
"""
from typing import Dict, Any, List, Optional


class AppException(Exception):
    """
    Base exception for all application errors

    All custom exceptions should inherit from this class to enable
    consistent error handling and response formatting.

    Attributes:
        status_code: HTTP status code for the error
        error_type: String identifier for the error type
        message: Human-readable error message
        details: Additional context about the error
    """
    status_code = 500
    error_type = 'ApplicationError'

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to JSON-serializable dictionary

        Returns:
            Dictionary suitable for JSON response
        """
        result = {
            'error': self.error_type,
            'message': self.message,
            'status_code': self.status_code
        }

        if self.details:
            result.update(self.details)

        return result

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}('{self.message}', status_code={self.status_code})>"


class ValidationException(AppException):
    """
    Validation errors (HTTP 400)

    Raised when request data is malformed (missing fields, bad dates).

    Example:
        >>> if not data.get('userId'):
        ...     raise ValidationException('userId is required')
    """
    status_code = 400
    error_type = 'ValidationError'


class PreconditionFailedException(AppException):
    """
    Precondition failures (HTTP 400)

    Raised when the request is well formed but the target is in a state
    that forbids it, e.g. assigning shifts to an inactive user.
    """
    status_code = 400
    error_type = 'PreconditionFailed'


class AuthenticationException(AppException):
    """
    Authentication errors (HTTP 401)

    Raised when the acting user cannot be identified.
    """
    status_code = 401
    error_type = 'AuthenticationError'


class AuthorizationException(AppException):
    """
    Authorization errors (HTTP 403)

    Raised when user is authenticated but lacks permission.

    Example:
        >>> if not user.is_admin:
        ...     raise AuthorizationException('Admin access required')
    """
    status_code = 403
    error_type = 'AuthorizationError'


class ResourceNotFoundException(AppException):
    """
    Resource not found (HTTP 404)

    Example:
        >>> user = users.find_by_id(user_id)
        >>> if not user:
        ...     raise ResourceNotFoundException('User not found')
    """
    status_code = 404
    error_type = 'NotFound'


class ConflictException(AppException):
    """
    Conflicting state (HTTP 409)

    Raised for duplicate shift assignments, whether detected up front or
    reported by the database unique constraint.
    """
    status_code = 409
    error_type = 'Conflict'


class ConventionViolationException(AppException):
    """
    Convention violations (HTTP 422)

    Raised when a candidate assignment breaks one or more of the user's
    conventions. Carries the full violation list for display.
    """
    status_code = 422
    error_type = 'ConventionViolation'

    def __init__(self, message: str, violations: List[str],
                 warnings: Optional[List[str]] = None):
        details = {'violations': list(violations)}
        if warnings:
            details['warnings'] = list(warnings)
        super().__init__(message, details=details)
        self.violations = list(violations)
        self.warnings = list(warnings or [])
