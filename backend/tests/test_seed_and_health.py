from fastapi.testclient import TestClient
from student_records.main import app
from student_records.database import seed_default_users

client = TestClient(app)


def test_seed_default_users_is_idempotent():
    assert seed_default_users() == 2
    assert seed_default_users() == 0
    users = client.get('/api/users').json()
    assert sorted((u['username'], u['role']) for u in users) == [('admin', 'ADMIN'), ('user', 'USER')]
    r = client.post('/api/auth/login', json={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 200
    assert r.json()['role'] == 'ADMIN'


def test_seed_skips_taken_usernames():
    client.post('/api/users', json={'username': 'admin', 'password': 'changed', 'role': 'ADMIN'})
    assert seed_default_users() == 1
    assert client.post('/api/auth/login', json={'username': 'admin', 'password': 'changed'}).status_code == 200


def test_health_and_request_id():
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert r.headers['X-Request-ID'] == 'abc123'


def test_unknown_route_uses_message_shape():
    r = client.get('/api/nothing-here')
    assert r.status_code == 404
    assert r.json() == {'message': 'Not Found'}
