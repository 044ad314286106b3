"""
Validation utilities for request payloads

Parsing helpers raise ValidationException so @handle_errors turns bad
input into a 400 response.
"""
from datetime import datetime, date
from typing import Any, Dict, List, Optional

from hsm.error_handlers.exceptions import ValidationException


def parse_date_value(value: Any, param_name: str = 'date') -> date:
    """
    Parse a calendar date from a request value.

    Accepts date/datetime objects, 'YYYY-MM-DD' strings and ISO 8601
    datetimes (a trailing 'Z' is allowed). Any time-of-day is discarded.

    Args:
        value: Raw value from JSON or query string
        param_name: Name of parameter for error messages (default: 'date')

    Returns:
        date: Parsed calendar date

    Raises:
        ValidationException: If the value is missing or not a valid date

    Examples:
        >>> parse_date_value('2025-10-15')
        datetime.date(2025, 10, 15)
        >>> parse_date_value('2025-10-15T22:30:00Z')
        datetime.date(2025, 10, 15)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{param_name} is required (YYYY-MM-DD)")

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        if len(text) == 10:
            return datetime.strptime(text, '%Y-%m-%d').date()
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationException(
            f"Invalid {param_name} format. Use YYYY-MM-DD (e.g., 2025-10-15)"
        )


def parse_optional_date(value: Any, param_name: str) -> Optional[date]:
    """Like parse_date_value but returns None for missing/empty values"""
    if value is None or value == '':
        return None
    return parse_date_value(value, param_name)


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
    """
    Validate that all required fields are present and non-empty.

    Raises:
        ValidationException: If any required field is missing
    """
    if not isinstance(data, dict):
        raise ValidationException('Request body must be a JSON object')

    missing = [field for field in required_fields if data.get(field) in (None, '')]
    if missing:
        raise ValidationException(
            f"Missing required fields: {', '.join(missing)}",
            details={'missing': missing}
        )


def validate_id_fields(data: Dict[str, Any], id_fields: List[str]) -> None:
    """
    Validate that identifier fields are non-empty strings.

    Raises:
        ValidationException: If any identifier is not a string
    """
    invalid = [field for field in id_fields if not isinstance(data.get(field), str) or not data[field].strip()]
    if invalid:
        raise ValidationException(
            f"Invalid identifier for: {', '.join(invalid)}",
            details={'invalid': invalid}
        )
