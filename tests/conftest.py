"""
Pytest configuration and fixtures for Hospital Staff Scheduler tests.

This module provides shared fixtures for:
- Flask application with test configuration
- Database setup and teardown
- Model factories for creating test data
- Request helpers for the gateway user header
"""
import pytest
from datetime import datetime, timedelta

from hsm import create_app
from hsm.extensions import db as _db
from hsm.models import Role, SelectionType, ConventionType


@pytest.fixture(scope='session')
def app():
    """
    Create application for the tests.

    Uses TestingConfig with in-memory SQLite database.
    Scope is 'session' to reuse the same app across all tests.
    """
    app = create_app('testing')
    return app


@pytest.fixture(scope='function')
def db(app):
    """
    Create database for the tests.

    Creates all tables before each test function and drops them after.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db_session(db):
    return db.session


@pytest.fixture(scope='function')
def client(app, db):
    """Test client sharing the test's app context (and session)"""
    with app.test_client() as client:
        yield client


@pytest.fixture(scope='function')
def models(app, db):
    """All registered model classes"""
    from hsm.models import get_models
    return get_models()


# =============================================================================
# Model Factories
# =============================================================================

@pytest.fixture
def user_factory(models, db):
    """
    Factory for creating User instances.

    Usage:
        nurse = user_factory()
        admin = user_factory(role=Role.ADMIN.value)
    """
    counter = [0]

    def _create_user(**kwargs):
        User = models['User']
        counter[0] += 1
        defaults = {
            'username': f'staff{counter[0]}',
            'role': Role.NURSE.value,
            'is_active': True,
            'department': 'Emergency',
            'section': 'A',
        }
        defaults.update(kwargs)
        user = User(**defaults)
        db.session.add(user)
        db.session.commit()
        return user

    return _create_user


@pytest.fixture
def shift_factory(models, db):
    """
    Factory for creating Shift templates.

    Usage:
        day_shift = shift_factory(start_hour=9, hours=8)
        night_shift = shift_factory(start_hour=22, hours=8)   # ends 06:00 next day
    """
    def _create_shift(start_hour=9, hours=8, **kwargs):
        Shift = models['Shift']
        start = datetime(2025, 1, 1, start_hour, 0)
        defaults = {
            'title': f'{start_hour:02d}:00 shift',
            'start_time': start,
            'end_time': start + timedelta(hours=hours),
        }
        defaults.update(kwargs)
        shift = Shift(**defaults)
        db.session.add(shift)
        db.session.commit()
        return shift

    return _create_shift


@pytest.fixture
def convention_factory(models, db):
    """
    Factory for creating Convention instances.

    Usage:
        convention = convention_factory('No Night Shifts', 'Cannot work night shifts (10 PM - 6 AM)')
    """
    def _create_convention(title='Custom Convention', description=None, **kwargs):
        Convention = models['Convention']
        defaults = {
            'title': title,
            'description': description,
            'type': ConventionType.CUSTOM.value,
            'is_active': True,
        }
        defaults.update(kwargs)
        convention = Convention(**defaults)
        db.session.add(convention)
        db.session.commit()
        return convention

    return _create_convention


@pytest.fixture
def link_convention(models, db):
    """Link a convention to a user directly (bypassing the service)"""
    def _link(user, convention, selection_type=SelectionType.ADMIN_ASSIGNED.value, assigned_by=None):
        UserConvention = models['UserConvention']
        link = UserConvention(
            user_id=user.id,
            convention_id=convention.id,
            selection_type=selection_type,
            assigned_by_id=assigned_by.id if assigned_by else None
        )
        db.session.add(link)
        db.session.commit()
        return link

    return _link


@pytest.fixture
def assignment_factory(models, db):
    """Insert an existing assignment directly (no validation)"""
    def _create_assignment(user, shift, on_date, created_by=None):
        ShiftAssignment = models['ShiftAssignment']
        assignment = ShiftAssignment(
            user_id=user.id,
            shift_id=shift.id,
            date=on_date,
            created_by_id=created_by.id if created_by else None
        )
        db.session.add(assignment)
        db.session.commit()
        return assignment

    return _create_assignment


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def admin(user_factory):
    return user_factory(username='admin', role=Role.ADMIN.value, department=None, section=None)


@pytest.fixture
def nurse(user_factory):
    return user_factory(username='nurse.joy', role=Role.NURSE.value)


@pytest.fixture
def doctor(user_factory):
    return user_factory(username='dr.house', role=Role.DOCTOR.value, department='Diagnostics')


@pytest.fixture
def day_shift(shift_factory):
    """09:00-17:00"""
    return shift_factory(start_hour=9, hours=8, title='Day Shift')


@pytest.fixture
def night_shift(shift_factory):
    """22:00-06:00"""
    return shift_factory(start_hour=22, hours=8, title='Night Shift')


@pytest.fixture
def auth_headers():
    """
    Build the headers the upstream gateway adds for an authenticated user.

    Usage:
        client.get(url, headers=auth_headers(admin))
    """
    def _headers(user):
        return {"X-User-Id": user.id}

    return _headers
