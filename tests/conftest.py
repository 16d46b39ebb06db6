import pytest
from fastapi.testclient import TestClient

from edvora.database import build_engine
from edvora.main import create_app
from edvora.storage.memory import MemoryStorage
from edvora.storage.sql import SqlStorage


def build_backend(kind: str):
    if kind == 'memory':
        return MemoryStorage()
    return SqlStorage(build_engine('sqlite://'))


@pytest.fixture(params=['memory', 'sql'])
def storage(request):
    backend = build_backend(request.param)
    try:
        yield backend
    finally:
        backend.close()


@pytest.fixture
def client(storage):
    with TestClient(create_app(storage=storage)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    def _register(username='alice', email='a@x.com', password='secret1', name='Alice', **extra):
        payload = {'username': username, 'email': email, 'password': password, 'name': name, **extra}
        return client.post('/api/auth/register', json=payload)

    return _register


@pytest.fixture
def auth_headers(register):
    def _auth_headers(username='alice', email='a@x.com', **extra):
        response = register(username=username, email=email, **extra)
        assert response.status_code == 201, response.text
        return {'Authorization': f"Bearer {response.json()['token']}"}

    return _auth_headers
