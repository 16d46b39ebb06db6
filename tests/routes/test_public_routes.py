import pytest
from fastapi.testclient import TestClient

from edvora.database import Base
from edvora.main import create_app
from edvora.routes.stats_routes import QUOTES


def test_quote_is_public_and_from_fixed_list(client) -> None:
    response = client.get('/api/quote')

    assert response.status_code == 200
    assert response.json()['success'] is True
    assert response.json()['quote'] in QUOTES


def test_health_reports_database_mode(client, storage) -> None:
    body = client.get('/health').json()

    assert body['success'] is True
    assert body['status'] == 'OK'
    assert body['database'] == storage.description
    assert body['mode'] == storage.mode
    assert body['timestamp']


def test_root_lists_endpoints(client) -> None:
    body = client.get('/').json()

    assert body['success'] is True
    assert 'POST /api/auth/register' in body['endpoints']['auth']
    assert body['health'] == '/health'


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get('/api/nothing-here')

    assert response.status_code == 404
    assert response.json()['success'] is False


def test_pomodoro_sessions_and_stats(auth_headers, client) -> None:
    headers = auth_headers()

    first = client.post('/api/pomodoro/sessions', headers=headers, json={'taskName': 'Read chapter 3'})
    second = client.post('/api/pomodoro/sessions', headers=headers, json={'duration': 50})
    listed = client.get('/api/pomodoro/sessions', headers=headers)
    stats = client.get('/api/pomodoro/stats', headers=headers)

    assert first.status_code == second.status_code == 201
    assert first.json()['session']['duration'] == 25
    assert first.json()['session']['taskName'] == 'Read chapter 3'
    assert second.json()['session']['taskName'] == 'Focus Session'
    assert len(listed.json()['sessions']) == 2
    assert stats.json()['stats'] == {
        'totalSessions': 2,
        'totalMinutes': 75,
        'todaySessions': 2,
        'todayMinutes': 75,
    }


def test_pomodoro_rejects_non_positive_duration(auth_headers, client) -> None:
    response = client.post('/api/pomodoro/sessions', headers=auth_headers(), json={'duration': 0})

    assert response.status_code == 400


def test_pomodoro_sessions_are_per_user(auth_headers, client) -> None:
    alice = auth_headers()
    bob = auth_headers(username='bob', email='b@x.com')
    client.post('/api/pomodoro/sessions', headers=alice, json={})

    assert client.get('/api/pomodoro/sessions', headers=bob).json()['sessions'] == []


@pytest.mark.parametrize('storage', ['sql'], indirect=True)
def test_database_failure_returns_generic_500(auth_headers, client, storage) -> None:
    headers = auth_headers()
    Base.metadata.drop_all(bind=storage.engine)

    response = client.get('/api/tasks', headers=headers)

    assert response.status_code == 500
    assert response.json() == {'success': False, 'error': 'Database operation failed'}


def test_unexpected_error_returns_generic_500(storage) -> None:
    app = create_app(storage=storage)

    @app.get('/boom')
    def boom():
        raise RuntimeError('secret internal detail')

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get('/boom')

    assert response.status_code == 500
    assert response.json() == {'success': False, 'error': 'Internal server error'}
    assert 'secret' not in response.text
