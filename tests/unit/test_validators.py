import pytest
from datetime import date, datetime

from hsm.config import TestingConfig, ProductionConfig, get_config
from hsm.error_handlers.exceptions import ValidationException
from hsm.utils.validators import (
    parse_date_value,
    parse_optional_date,
    validate_id_fields,
    validate_required_fields,
)


@pytest.mark.parametrize('value', [
    '2025-10-15',
    '2025-10-15T22:30:00',
    '2025-10-15T22:30:00Z',
    '2025-10-15T08:00:00+02:00',
    date(2025, 10, 15),
    datetime(2025, 10, 15, 23, 59),
])
def test_parse_date_value(value):
    assert parse_date_value(value) == date(2025, 10, 15)


@pytest.mark.parametrize('value', ['', None, '15-10-2025', '2025-13-01', 20251015])
def test_parse_date_value_rejects(value):
    with pytest.raises(ValidationException):
        parse_date_value(value)


def test_parse_optional_date():
    assert parse_optional_date(None, 'startDate') is None
    assert parse_optional_date('', 'startDate') is None
    assert parse_optional_date('2025-10-01', 'startDate') == date(2025, 10, 1)


def test_validate_required_fields():
    validate_required_fields({'userId': 'u', 'shiftId': 's'}, ['userId', 'shiftId'])

    with pytest.raises(ValidationException) as exc_info:
        validate_required_fields({'userId': ''}, ['userId', 'shiftId'])
    assert exc_info.value.details == {'missing': ['userId', 'shiftId']}

    with pytest.raises(ValidationException):
        validate_required_fields(['userId'], ['userId'])


def test_validate_id_fields():
    validate_id_fields({'userId': 'u', 'shiftId': 's'}, ['userId', 'shiftId'])

    with pytest.raises(ValidationException) as exc_info:
        validate_id_fields({'userId': ['u'], 'shiftId': 7}, ['userId', 'shiftId'])
    assert exc_info.value.details == {'invalid': ['userId', 'shiftId']}


def test_get_config():
    assert get_config('testing') is TestingConfig
    assert get_config('unknown').__name__ == 'DevelopmentConfig'
    assert TestingConfig.RATELIMIT_ENABLED is False


def test_production_requires_long_secret(monkeypatch):
    monkeypatch.setenv('SECRET_KEY', 'too-short')
    with pytest.raises(ValueError):
        ProductionConfig.validate()
