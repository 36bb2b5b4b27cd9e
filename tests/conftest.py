import os

# Storage reads DATABASE_URL when `models` is first imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "testing"

import pytest

from api import create_app
from models import storage
from utils.auth_service import AuthService, AuthSettings
from utils.security import CredentialHasher

PASSWORD = "password123"


@pytest.fixture(autouse=True)
def fresh_db():
    storage.reset()
    yield
    storage.close()


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def hasher():
    return CredentialHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def settings():
    return AuthSettings(secret="test-secret")


@pytest.fixture
def session():
    return storage.get_session()


@pytest.fixture
def auth_service(settings, session, hasher):
    return AuthService(settings, session, hasher=hasher)


def register_and_login(client, email="a@b.com", password=PASSWORD, name="A"):
    res = client.post("/register", json={"email": email, "password": password, "name": name})
    assert res.status_code == 201
    res = client.post("/token", json={"email": email, "password": password})
    assert res.status_code == 200
    return res.get_json()


@pytest.fixture
def tokens(client):
    return register_and_login(client)


@pytest.fixture
def auth_headers(tokens):
    return {"Authorization": f"Bearer {tokens['access_token']}"}
