"""
Unit tests for the scheduling models.
"""
import pytest
from datetime import date
from sqlalchemy.exc import IntegrityError

from hsm.models import Role, SelectionType


def test_user_defaults(nurse, admin):
    assert len(nurse.id) == 36
    assert nurse.is_active is True
    assert nurse.is_admin is False
    assert admin.is_admin is True
    assert admin.to_summary() == {'id': admin.id, 'username': 'admin', 'role': Role.ADMIN.value}


def test_username_is_unique(user_factory):
    user_factory(username='duplicate')
    with pytest.raises(IntegrityError):
        user_factory(username='duplicate')


def test_convention_link_is_unique(db, nurse, convention_factory, link_convention):
    convention = convention_factory('No Night Shifts')
    link_convention(nurse, convention)
    with pytest.raises(IntegrityError):
        link_convention(nurse, convention, selection_type=SelectionType.USER_SELECTED.value)
    db.session.rollback()


def test_link_serialization(nurse, admin, convention_factory, link_convention):
    convention = convention_factory('Maximum 40 Hours per Week', 'Legal working time limit')
    link = link_convention(nurse, convention, assigned_by=admin)

    data = link.to_dict()
    assert data['userId'] == nurse.id
    assert data['selectionType'] == SelectionType.ADMIN_ASSIGNED.value
    assert data['assignedById'] == admin.id
    assert data['convention'] == {
        'id': convention.id,
        'title': 'Maximum 40 Hours per Week',
        'description': 'Legal working time limit',
        'type': 'CUSTOM',
        'isActive': True,
    }


def test_relationships(nurse, day_shift, assignment_factory, convention_factory, link_convention):
    assignment = assignment_factory(nurse, day_shift, date(2025, 10, 13))
    link_convention(nurse, convention_factory('No Weekends'))

    assert assignment.shift is day_shift
    assert nurse.shift_assignments == [assignment]
    assert day_shift.assignments == [assignment]
    assert [link.convention.title for link in nurse.user_conventions] == ['No Weekends']


def test_shift_serialization(night_shift):
    data = night_shift.to_dict()
    assert data['title'] == 'Night Shift'
    assert data['startTime'].endswith('T22:00:00')
    assert data['endTime'].endswith('T06:00:00')
    assert data['shiftType'] == 'REGULAR'
    assert data['status'] == 'SCHEDULED'
