import pytest
from fastapi.testclient import TestClient

from callback_server.config import Settings
from callback_server.main import create_app

TEST_PORT = 4567


@pytest.fixture
def test_settings():
    # _env_file=None keeps a developer's .env.local out of the tests
    return Settings(_env_file=None, PORT=TEST_PORT)


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    return TestClient(app)
