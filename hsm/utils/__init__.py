"""
Utility modules for the Hospital Staff Scheduler
"""
from .validators import parse_date_value, parse_optional_date, validate_required_fields

__all__ = ['parse_date_value', 'parse_optional_date', 'validate_required_fields']
