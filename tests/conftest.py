import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storefront.core.config import Settings
from storefront.core.context import AppContext
from storefront.main import create_app

TEST_USER = {"name": "Asha", "mobile": "9876543210", "password": "idli-lover"}


@pytest.fixture
def test_settings():
    return Settings(
        ENVIRONMENT="development",
        SECRET_KEY="test-secret-key",
        MONGODB_DB_NAME="storefront_test",
        BCRYPT_ROUNDS=4,
        MAX_WRITE_RETRIES=3,
    )


@pytest.fixture
def app_context(test_settings):
    mongo = AsyncMongoMockClient()
    return AppContext(settings=test_settings, database=mongo[test_settings.MONGODB_DB_NAME])


@pytest.fixture
def app(app_context):
    return create_app(app_context)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signed_in_client(client):
    response = client.post("/api/auth/signup", json=TEST_USER)
    assert response.status_code == 201
    response = client.post(
        "/api/auth/signin",
        json={"mobile": TEST_USER["mobile"], "password": TEST_USER["password"]},
    )
    assert response.status_code == 200
    return client
