import os

# Must be set before booking_api.core.config is imported
os.environ["POSTGRES_CONNECTION_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from booking_api.main import app
from booking_api.services.db_service import db_service

@pytest.fixture
def client():
    # Entering the context runs the lifespan: fresh in-memory database per test
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def db():
    db_service.init("sqlite://")
    yield db_service
    db_service.dispose()

@pytest.fixture
def booking_body():
    return {
        "time": "2024-01-01T10:00",
        "name": "Alice",
        "roomNumber": "101",
        "numberOfPeople": 4
    }
