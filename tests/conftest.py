"""
Global pytest fixtures for the Thingful test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide isolated in-memory UserStore, UsersService and AuthGate fixtures
    - Provide a helper that builds `Authorization: Bearer <base64(user:pass)>` headers

Why an app factory?
    Using `create_app()` gives each test fresh in-memory state, eliminating
    cross-test flakiness. bcrypt runs at its minimum cost (4) to keep the
    suite fast; hashes stay valid bcrypt hashes.

LLM Prompt Example:
    "Show how to structure pytest fixtures to isolate service state and
    support both integration and unit tests without external dependencies."
"""

import base64

import pytest
from fastapi.testclient import TestClient

from auth.service import AuthGate
from main import create_app
from thingful.storage.storage import UserStore
from thingful.users.users_service import UsersService

FAST_ROUNDS = 4


def encode_credentials(user_name: str, password: str) -> str:
    return base64.b64encode(f"{user_name}:{password}".encode("utf-8")).decode("ascii")


@pytest.fixture
def make_auth_header():
    """Return a builder for bearer headers carrying `user_name:password`."""

    def _make(user_name: str, password: str) -> dict:
        return {"Authorization": f"Bearer {encode_credentials(user_name, password)}"}

    return _make


@pytest.fixture
def store() -> UserStore:
    """Provide a fresh in-memory UserStore."""
    return UserStore()


@pytest.fixture
def users_service(store: UserStore) -> UsersService:
    """Provide a UsersService wired to the store fixture with a cheap bcrypt cost."""
    return UsersService(store=store, rounds=FAST_ROUNDS)


@pytest.fixture
def gate(store: UserStore, users_service: UsersService) -> AuthGate:
    """Provide an AuthGate sharing the store and service fixtures."""
    return AuthGate(store=store, users_service=users_service)


@pytest.fixture
def alice(users_service: UsersService) -> dict:
    """Register `alice` with password `Secret1!` and return her serialized view."""
    return users_service.register(
        {
            "user_name": "alice",
            "full_name": "Alice Liddell",
            "nickname": "Al",
            "password": "Secret1!",
        }
    )


@pytest.fixture
def client(store: UserStore) -> TestClient:
    """
    Provide a fresh TestClient with a new app instance over the store fixture.

    Tests can seed users directly through the `users_service`/`alice`
    fixtures; they share the same store as the app.
    """
    app = create_app(store=store, bcrypt_rounds=FAST_ROUNDS, lookup_timeout=None)
    return TestClient(app)
