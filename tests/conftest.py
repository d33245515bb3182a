# Shared fixtures for storefront and shop client tests

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.database import Database
from storefront.main import create_app
from shop_client.app import ClientApp
from shop_client.core.config import ClientSettings, StorageBackend, LogoutPolicy
from shop_client.storage import MemoryKeyValueStore


TEST_PASSWORD = "woof-woof-123"


@pytest.fixture
def server_settings():
    return Settings(secret_key="test-secret-key", admin_email=None, admin_password=None)


@pytest.fixture
def db():
    return Database.create()


@pytest.fixture
def server_app(server_settings, db):
    return create_app(settings=server_settings, db=db)


@pytest.fixture
def client(server_app):
    return TestClient(server_app)


@pytest.fixture
def registered_user(client):
    """Register a shopper and return (user json, bearer token)"""
    response = client.post(
        "/api/auth/register",
        json={"email": "shopper@example.com", "password": TEST_PASSWORD, "fullName": "Asha Shopper"},
    )
    assert response.status_code == 201
    data = response.json()
    return data["user"], data["token"]


@pytest.fixture
def auth_headers(registered_user):
    _, token = registered_user
    return {"Authorization": f"Bearer {token}"}


def make_client_settings(**overrides) -> ClientSettings:
    values = {
        "api_base_url": "http://storefront.test",
        "storage_backend": StorageBackend.MEMORY,
        "logout_policy": LogoutPolicy.KEEP,
        "remote_retry_attempts": 1,
        "remote_retry_backoff": 0.0,
    }
    values.update(overrides)
    return ClientSettings(**values)


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
async def shop(server_app, kv_store):
    """A started client app talking to the in-process storefront"""
    app = ClientApp(
        settings=make_client_settings(),
        transport=httpx.ASGITransport(app=server_app),
        kv_store=kv_store,
    )
    await app.start()
    yield app
    await app.close()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request it receives"""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def make_settings():
    return make_client_settings


@pytest.fixture
async def make_offline_app(kv_store):
    """Build a client app whose storefront is a request handler function"""
    apps = []

    def factory(handler, **overrides):
        transport = RecordingTransport(handler)
        app = ClientApp(
            settings=make_client_settings(**overrides),
            transport=transport,
            kv_store=kv_store,
        )
        app.transport = transport
        apps.append(app)
        return app

    yield factory

    for app in apps:
        await app.close()
