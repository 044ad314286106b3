"""
HTTP tests for the JSON API and health endpoints.
"""
import pytest
from datetime import date

from hsm.models import ConventionType


@pytest.fixture
def no_nights(nurse, convention_factory, link_convention):
    convention = convention_factory('No Night Shifts', type=ConventionType.MEDICAL.value)
    link_convention(nurse, convention)
    return convention


def test_health_check(client):
    response = client.get('/health/ping')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'ok'


def test_health_readiness(client):
    response = client.get('/health/ready')
    assert response.status_code == 200
    data = response.get_json()
    assert data['checks'] == {'database': True, 'models': True}


def test_health_status(client):
    response = client.get('/health/status')
    assert response.status_code == 200
    assert response.get_json()['database']['type'] == 'sqlite'


class TestAuthentication:

    def test_missing_header(self, client):
        response = client.get('/api/shift-assignments')
        assert response.status_code == 401
        assert response.get_json()['error'] == 'AuthenticationError'

    def test_unknown_user(self, client):
        response = client.get('/api/shift-assignments', headers={'X-User-Id': 'ghost'})
        assert response.status_code == 401

    def test_inactive_user(self, client, user_factory, auth_headers):
        retired = user_factory(is_active=False)
        response = client.get('/api/shift-assignments', headers=auth_headers(retired))
        assert response.status_code == 401

    def test_staff_cannot_create(self, client, nurse, day_shift, auth_headers):
        response = client.post('/api/shift-assignments', headers=auth_headers(nurse), json={
            'userId': nurse.id, 'shiftId': day_shift.id, 'date': '2025-10-14'
        })
        assert response.status_code == 403


class TestShiftAssignmentApi:

    def test_create(self, client, admin, nurse, day_shift, auth_headers):
        response = client.post('/api/shift-assignments', headers=auth_headers(admin), json={
            'userId': nurse.id, 'shiftId': day_shift.id, 'date': '2025-10-14'
        })

        assert response.status_code == 201
        data = response.get_json()
        assert data['userId'] == nurse.id
        assert data['date'] == '2025-10-14'
        assert data['createdById'] == admin.id

    def test_create_violation(self, client, admin, nurse, night_shift, no_nights, auth_headers):
        response = client.post('/api/shift-assignments', headers=auth_headers(admin), json={
            'userId': nurse.id, 'shiftId': night_shift.id, 'date': '2025-10-14'
        })

        assert response.status_code == 422
        data = response.get_json()
        assert data['error'] == 'ConventionViolation'
        assert data['message'] == 'Shift assignment violates user conventions'
        assert data['violations'] == ['Convention "No Night Shifts" restricts night shifts']

    def test_create_duplicate(self, client, admin, nurse, day_shift, auth_headers):
        payload = {'userId': nurse.id, 'shiftId': day_shift.id, 'date': '2025-10-14'}
        client.post('/api/shift-assignments', headers=auth_headers(admin), json=payload)

        response = client.post('/api/shift-assignments', headers=auth_headers(admin), json=payload)
        assert response.status_code == 409

    def test_create_inactive_user(self, client, admin, user_factory, day_shift, auth_headers):
        retired = user_factory(is_active=False)
        response = client.post('/api/shift-assignments', headers=auth_headers(admin), json={
            'userId': retired.id, 'shiftId': day_shift.id, 'date': '2025-10-14'
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'PreconditionFailed'

    def test_create_requires_json(self, client, admin, auth_headers):
        response = client.post('/api/shift-assignments', headers=auth_headers(admin), data='not json')
        assert response.status_code == 400

    def test_bulk(self, client, admin, nurse, day_shift, night_shift, no_nights, auth_headers):
        response = client.post('/api/shift-assignments/bulk', headers=auth_headers(admin), json={
            'assignments': [
                {'userId': nurse.id, 'shiftId': day_shift.id, 'date': '2025-10-13'},
                {'userId': nurse.id, 'shiftId': night_shift.id, 'date': '2025-10-14'},
                {'userId': nurse.id, 'shiftId': day_shift.id, 'date': '2025-10-15'},
            ]
        })

        assert response.status_code == 200
        data = response.get_json()
        assert [a['date'] for a in data['successful']] == ['2025-10-13', '2025-10-15']
        assert len(data['failed']) == 1
        assert data['failed'][0]['assignment']['date'] == '2025-10-14'

    def test_staff_validate_own_assignment(self, client, nurse, night_shift, no_nights, auth_headers):
        response = client.post('/api/shift-assignments/validate', headers=auth_headers(nurse), json={
            'userId': nurse.id, 'shiftId': night_shift.id, 'date': '2025-10-14'
        })

        assert response.status_code == 200
        assert response.get_json()['isValid'] is False

    def test_staff_cannot_validate_for_others(self, client, nurse, doctor, night_shift, convention_factory,
                                              link_convention, auth_headers):
        link_convention(doctor, convention_factory('No Night Shifts', type=ConventionType.MEDICAL.value))

        response = client.post('/api/shift-assignments/validate', headers=auth_headers(nurse), json={
            'userId': doctor.id, 'shiftId': night_shift.id, 'date': '2025-10-14'
        })

        assert response.status_code == 403
        assert 'violations' not in response.get_json()

    def test_validate_rejects_non_string_ids(self, client, admin, night_shift, auth_headers):
        response = client.post('/api/shift-assignments/validate', headers=auth_headers(admin), json={
            'userId': ['x'], 'shiftId': night_shift.id, 'date': '2025-10-14'
        })
        assert response.status_code == 400

    def test_validate_preview_writes_nothing(self, client, admin, nurse, night_shift, no_nights, auth_headers,
                                             db_session, models):
        response = client.post('/api/shift-assignments/validate', headers=auth_headers(admin), json={
            'userId': nurse.id, 'shiftId': night_shift.id, 'date': '2025-10-14'
        })

        assert response.status_code == 200
        assert response.get_json() == {
            'isValid': False,
            'violations': ['Convention "No Night Shifts" restricts night shifts'],
            'warnings': [],
        }
        assert db_session.query(models['ShiftAssignment']).count() == 0

    def test_list_own_assignments(self, client, nurse, doctor, day_shift, assignment_factory, auth_headers):
        assignment_factory(nurse, day_shift, date(2025, 10, 13))
        assignment_factory(doctor, day_shift, date(2025, 10, 13))

        response = client.get(f'/api/shift-assignments?userId={doctor.id}', headers=auth_headers(nurse))

        assert response.status_code == 200
        assert [a['userId'] for a in response.get_json()] == [nurse.id]

    def test_list_bad_date_filter(self, client, admin, auth_headers):
        response = client.get('/api/shift-assignments?startDate=yesterday', headers=auth_headers(admin))
        assert response.status_code == 400

    def test_monthly(self, client, nurse, day_shift, assignment_factory, auth_headers):
        assignment_factory(nurse, day_shift, date(2025, 10, 13))
        assignment_factory(nurse, day_shift, date(2025, 11, 3))

        response = client.get('/api/shift-assignments/monthly/2025/10', headers=auth_headers(nurse))

        assert response.status_code == 200
        assert [a['date'] for a in response.get_json()] == ['2025-10-13']

    def test_get_update_delete(self, client, admin, nurse, day_shift, assignment_factory, auth_headers):
        assignment = assignment_factory(nurse, day_shift, date(2025, 10, 13))
        url = f'/api/shift-assignments/{assignment.id}'

        assert client.get(url, headers=auth_headers(nurse)).status_code == 200

        response = client.patch(url, headers=auth_headers(admin), json={'date': '2025-10-16'})
        assert response.status_code == 200
        assert response.get_json()['date'] == '2025-10-16'

        assert client.delete(url, headers=auth_headers(nurse)).status_code == 403

        response = client.delete(url, headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Shift assignment deleted successfully'

        assert client.get(url, headers=auth_headers(admin)).status_code == 404


class TestConventionApi:

    def test_admin_assigns_and_lists(self, client, admin, nurse, convention_factory, auth_headers):
        convention = convention_factory('No Night Shifts')

        response = client.post(f'/api/conventions/users/{nurse.id}/assign', headers=auth_headers(admin),
                               json={'conventionIds': [convention.id]})
        assert response.status_code == 201
        assert response.get_json()[0]['selectionType'] == 'ADMIN_ASSIGNED'

        response = client.get(f'/api/conventions/users/{nurse.id}', headers=auth_headers(admin))
        assert [link['convention']['title'] for link in response.get_json()] == ['No Night Shifts']

    def test_staff_cannot_use_admin_endpoints(self, client, nurse, auth_headers):
        response = client.get(f'/api/conventions/users/{nurse.id}', headers=auth_headers(nurse))
        assert response.status_code == 403

    def test_self_service(self, client, admin, nurse, convention_factory, auth_headers):
        chosen = convention_factory('No consecutive shifts')
        imposed = convention_factory('Maximum 40 Hours per Week')
        client.post(f'/api/conventions/users/{nurse.id}/assign', headers=auth_headers(admin),
                    json={'conventionIds': [imposed.id]})

        response = client.post('/api/conventions/my/select', headers=auth_headers(nurse),
                               json={'conventionIds': [chosen.id]})
        assert response.status_code == 201

        response = client.get('/api/conventions/my/stats', headers=auth_headers(nurse))
        assert response.get_json() == {'total': 2, 'adminAssigned': 1, 'userSelected': 1}

        assert client.delete(f'/api/conventions/my/{imposed.id}', headers=auth_headers(nurse)).status_code == 403
        assert client.delete(f'/api/conventions/my/{chosen.id}', headers=auth_headers(nurse)).status_code == 200

        response = client.get('/api/conventions/my', headers=auth_headers(nurse))
        assert [link['conventionId'] for link in response.get_json()] == [imposed.id]

    def test_available_conventions(self, client, nurse, convention_factory, auth_headers):
        active = convention_factory('No Night Shifts')
        convention_factory('Old rule', is_active=False)

        response = client.get('/api/conventions/available', headers=auth_headers(nurse))

        assert response.status_code == 200
        assert [c['id'] for c in response.get_json()] == [active.id]

    def test_empty_selection(self, client, nurse, auth_headers):
        response = client.post('/api/conventions/my/select', headers=auth_headers(nurse), json={})
        assert response.status_code == 400


def test_unknown_api_route_returns_json(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Not Found'
