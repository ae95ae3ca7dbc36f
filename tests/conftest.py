import os

# keep test runs from writing a log file into the working tree
os.environ.setdefault("LOG_FILE", "")

import pytest
from fastapi.testclient import TestClient

from dailylog.core.database import ConnectionManager, get_connection_manager
from dailylog.main import app


@pytest.fixture
def manager():
    manager = ConnectionManager("sqlite://")
    yield manager
    manager.dispose()


@pytest.fixture
def client(manager):
    app.dependency_overrides[get_connection_manager] = lambda: manager
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_log(client):
    def _create(content="Went for a run", date="2024-05-01", **extra):
        resp = client.post("/api/logs", json={"content": content, "date": date, **extra})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create
