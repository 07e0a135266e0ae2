import json

import pytest
from fastapi.testclient import TestClient

from flatchat.database.connection import store_dependency
from flatchat.database.json_store import JsonUserStore
from flatchat.main import app
from flatchat.repositories.user_repository import UserRepository


@pytest.fixture
def store(tmp_path):
    return JsonUserStore(tmp_path / "users.json")


@pytest.fixture
def repo(store):
    return UserRepository(store)


@pytest.fixture
def client(store):
    app.dependency_overrides[store_dependency] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def read_users(store):
    def _read():
        return json.loads(store.path.read_text(encoding="utf-8"))
    return _read
