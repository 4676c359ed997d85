import pytest
from fastapi.testclient import TestClient

from backend.database import get_db
from backend.main import app


@pytest.fixture
def override_db(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(override_db):
    return TestClient(app)
