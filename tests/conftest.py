import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app


@pytest.fixture
def settings(tmp_path):
    return Settings(csv_dir=tmp_path / "csv", uploads_dir=tmp_path / "uploads")


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def vedix_payload():
    return {
        "teamName": "Alpha",
        "name1": "Asha",
        "usn": "1AB20CS001",
        "college": "ABC",
        "phone": "9999999999",
        "email": "a@b.com",
        "utrId": "U1",
        "utrNumber": "12345",
    }
