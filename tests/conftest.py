import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app


@pytest.fixture
def store():
    return ProductStore.with_seed_data()


@pytest.fixture
def client(store):
    return TestClient(create_app(settings=Settings(auth_mode="marker"), store=store))


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}
