import pytest
from fastapi.testclient import TestClient

from backend.auth import passwords
from backend.core import config
from backend.main import app


def test_startup_fails_without_signing_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', '')

    with pytest.raises(RuntimeError, match='JWT_SECRET_KEY'):
        with TestClient(app):
            pass


def test_startup_succeeds_with_signing_key() -> None:
    with TestClient(app) as client:
        response = client.get('/')

    assert response.status_code == 200


def test_startup_builds_dummy_hash_before_first_request() -> None:
    passwords.dummy_hash.cache_clear()

    with TestClient(app):
        assert passwords.dummy_hash.cache_info().currsize == 1
