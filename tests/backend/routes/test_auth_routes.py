import pytest
from fastapi.testclient import TestClient

from backend.auth import jwt_handler


def _register(client: TestClient, username='alice', email='a@x.com', password='secret1'):
    return client.post(
        '/api/auth/register',
        json={'username': username, 'email': email, 'password': password},
    )


def test_root_reports_liveness(client: TestClient) -> None:
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'message': 'Coding Progress Tracker API is running!'}


def test_register_returns_token_for_new_user(client: TestClient) -> None:
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body['username'] == 'alice'
    assert body['message'] == 'Registration successful'
    assert jwt_handler.verify_access_token(body['token']) == body['user_id']


@pytest.mark.parametrize(
    'payload',
    [
        {'email': 'a@x.com', 'password': 'secret1'},
        {'username': 'alice', 'password': 'secret1'},
        {'username': 'alice', 'email': 'a@x.com'},
        {'username': '', 'email': 'a@x.com', 'password': 'secret1'},
    ],
)
def test_register_rejects_missing_fields(client: TestClient, payload: dict) -> None:
    response = client.post('/api/auth/register', json=payload)

    assert response.status_code == 400
    assert response.json() == {'message': 'Please provide all required fields'}


def test_register_rejects_duplicate_email_case_insensitively(client: TestClient) -> None:
    _register(client)

    response = _register(client, username='alice2', email='A@X.COM')

    assert response.status_code == 400
    assert response.json() == {'message': 'User with this email or username already exists'}


def test_register_rejects_duplicate_username(client: TestClient) -> None:
    _register(client)

    response = _register(client, email='other@x.com')

    assert response.status_code == 400
    assert response.json() == {'message': 'User with this email or username already exists'}


def test_register_rejects_short_username(client: TestClient) -> None:
    response = _register(client, username='al')

    assert response.status_code == 400
    assert response.json() == {'message': 'Username must be at least 3 characters.'}


def test_register_then_login_succeeds(client: TestClient) -> None:
    registered = _register(client).json()

    response = client.post('/api/auth/login', json={'email': 'A@x.com', 'password': 'secret1'})

    assert response.status_code == 200
    body = response.json()
    assert body['user_id'] == registered['user_id']
    assert body['username'] == 'alice'
    assert body['message'] == 'Login successful'
    assert jwt_handler.verify_access_token(body['token']) == registered['user_id']


def test_login_failures_do_not_reveal_which_credential_was_wrong(client: TestClient) -> None:
    _register(client)

    wrong_password = client.post('/api/auth/login', json={'email': 'a@x.com', 'password': 'nope123'})
    unknown_email = client.post('/api/auth/login', json={'email': 'b@x.com', 'password': 'secret1'})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {'message': 'Invalid credentials'}


def test_login_rejects_missing_fields(client: TestClient) -> None:
    response = client.post('/api/auth/login', json={'email': 'a@x.com'})

    assert response.status_code == 400
    assert response.json() == {'message': 'Please provide email and password'}


def test_login_rejects_malformed_body(client: TestClient) -> None:
    response = client.post('/api/auth/login', content='not json', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json() == {'message': 'Invalid input'}
