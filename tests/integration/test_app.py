"""
End-to-end tests for the Thingful API.

LLM Prompt Example:
    "Show how to test registration and a bearer-protected endpoint in FastAPI,
    including uniform 401 bodies for unknown users and wrong passwords."
"""

import time

from fastapi.testclient import TestClient

from main import create_app
from thingful.storage.storage import UserStore


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_register_user(client):
    response = client.post(
        "/api/users",
        json={
            "full_name": "Alice Liddell",
            "user_name": "alice",
            "nickname": "Al",
            "password": "Secret1!",
        },
    )
    data = response.json()

    assert response.status_code == 201
    assert response.headers["location"] == f"/api/users/{data['id']}"
    assert data["user_name"] == "alice"
    assert data["full_name"] == "Alice Liddell"
    assert data["nickname"] == "Al"
    assert "date_created" in data
    assert "password" not in data


def test_register_then_authenticate(client, make_auth_header):
    client.post(
        "/api/users",
        json={"full_name": "Alice", "user_name": "alice", "password": "Secret1!"},
    )
    response = client.get("/api/users/me", headers=make_auth_header("alice", "Secret1!"))
    assert response.status_code == 200
    assert response.json()["user_name"] == "alice"


def test_register_missing_field(client):
    response = client.post("/api/users", json={"full_name": "Alice", "user_name": "alice"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing 'password' in request body"}


def test_register_policy_violation(client):
    response = client.post(
        "/api/users",
        json={"full_name": "Alice", "user_name": "alice", "password": "alllowercase1!"},
    )
    assert response.status_code == 400
    assert response.json() == {
        "error": "Password must contain 1 upper case, lower case, number and special character"
    }


def test_register_duplicate_user_name(client, alice):
    response = client.post(
        "/api/users",
        json={"full_name": "Other Alice", "user_name": "alice", "password": "Secret1!"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Username already taken"}


def test_register_rejects_colon_in_user_name(client):
    response = client.post(
        "/api/users",
        json={"full_name": "A B", "user_name": "a:b", "password": "Secret1!"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "User name must not contain ':'"}


def test_register_sanitizes_markup(client):
    response = client.post(
        "/api/users",
        json={
            "full_name": "<script>alert(1)</script>",
            "user_name": "mallory",
            "password": "Secret1!",
        },
    )
    assert response.status_code == 201
    assert "<script>" not in response.json()["full_name"]


def test_me_attaches_authenticated_user(client, alice, make_auth_header):
    response = client.get("/api/users/me", headers=make_auth_header("alice", "Secret1!"))
    data = response.json()

    assert response.status_code == 200
    assert data["id"] == alice["id"]
    assert data["user_name"] == "alice"
    assert "password" not in data


def test_me_wrong_password(client, alice, make_auth_header):
    response = client.get("/api/users/me", headers=make_auth_header("alice", "Secret1X"))
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized request"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_me_without_header(client):
    response = client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Missing bearer token"}


def test_lookup_timeout_is_a_server_error_not_a_401(make_auth_header):
    class SlowStore(UserStore):
        def find_by_username(self, user_name):
            time.sleep(1.0)
            return None

    app = create_app(store=SlowStore(), bcrypt_rounds=4, lookup_timeout=0.05)
    client = TestClient(app)
    response = client.get("/api/users/me", headers=make_auth_header("alice", "Secret1!"))
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}
