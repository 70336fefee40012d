import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore, seed_products
from catalog.main import create_app


@pytest.fixture
def store():
    return ProductStore(seed_products())


@pytest.fixture
def app(store):
    return create_app(Settings(), store)


@pytest.fixture
def client(app):
    return TestClient(app)
