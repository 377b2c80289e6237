# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore, seed_products
from app.main import create_app

API_KEY = "test-key"
AUTH = {"x-api-key": API_KEY}


@pytest.fixture
def settings():
    return Settings(API_KEY=API_KEY, LOG_LEVEL="WARNING")


@pytest.fixture
def store():
    # fresh seed per test; nothing leaks between tests
    return ProductStore(seed_products())


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)
