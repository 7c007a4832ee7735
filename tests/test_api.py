"""
Tests for the admin-user HTTP routes.

The auth service runs against the in-memory store; the FastAPI lifespan
(Redis connection) is not started.
"""

import time

import pytest
from fastapi.testclient import TestClient

from blogadmin import main

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, FakeClock


@pytest.fixture
def clock():
    # Cookies must expire in the real future or the client drops them
    return FakeClock(int(time.time()))


@pytest.fixture
def client(auth_service, monkeypatch):
    monkeypatch.setattr(main, "auth_service", auth_service)
    return TestClient(main.app)


def login(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    return client.put("/users/login", json={"email": email, "password": password})


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_sets_session_cookie(client, provisioned_admin, store):
    response = login(client)

    assert response.status_code == 200
    assert response.json() == {"success": True}

    set_cookie = response.headers["set-cookie"]
    assert "HttpOnly" in set_cookie
    assert "Path=/" in set_cookie
    assert "expires=" in set_cookie.lower()

    cookie = client.cookies.get("adminUser")
    subject_id, token = cookie.split("&")
    assert subject_id == provisioned_admin.id
    assert len(token) == 40


def test_login_failures_are_indistinguishable(client, provisioned_admin):
    wrong_password = login(client, password="wrong")
    unknown_email = login(client, email="b@x.com")

    assert wrong_password.json() == unknown_email.json() == {"success": False}
    assert "set-cookie" not in wrong_password.headers
    assert "set-cookie" not in unknown_email.headers


@pytest.mark.parametrize("body", [{}, {"email": ADMIN_EMAIL}, {"password": ADMIN_PASSWORD}])
def test_login_missing_fields(client, provisioned_admin, body):
    response = client.put("/users/login", json=body)

    assert response.json() == {"success": False}


def test_authenticate_with_cookie(client, provisioned_admin):
    login(client)

    response = client.get("/users/authenticate")

    assert response.json() == {"success": True}


def test_authenticate_without_cookie(client, provisioned_admin):
    assert client.get("/users/authenticate").json() == {"success": False}


@pytest.mark.parametrize("cookie", ["garbage", "&", "id-only&", "&token-only"])
def test_authenticate_malformed_cookie(client, provisioned_admin, cookie):
    client.cookies.set("adminUser", cookie)

    assert client.get("/users/authenticate").json() == {"success": False}


def test_authenticate_storage_fault(client, provisioned_admin, store):
    login(client)
    store.fail_reads = True

    assert client.get("/users/authenticate").json() == {"success": False}


def test_logout_invalidates_session(client, provisioned_admin):
    login(client)

    response = client.put("/users/logout")

    assert response.json() == {"success": True, "authSuccess": True}
    # Logout leaves the cookie in place, but its token is dead
    assert client.cookies.get("adminUser") is not None
    assert client.get("/users/authenticate").json() == {"success": False}


def test_logout_requires_session(client, provisioned_admin):
    assert client.put("/users/logout").json() == {"authSuccess": False}


def test_remove_admin_user_cookie(client, provisioned_admin):
    login(client)

    response = client.put("/users/remove-admin-user-cookie")

    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("adminUser=")
    assert "Max-Age=0" in set_cookie


def test_change_password(client, provisioned_admin):
    login(client)

    response = client.put(
        "/users/change-password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "new-secret"},
    )

    assert response.json() == {"authSuccess": True, "success": True}
    assert login(client, password=ADMIN_PASSWORD).json() == {"success": False}
    assert login(client, password="new-secret").json() == {"success": True}


def test_change_password_wrong_current(client, provisioned_admin):
    login(client)

    response = client.put(
        "/users/change-password",
        json={"currentPassword": "wrong", "newPassword": "new-secret"},
    )

    assert response.json() == {"authSuccess": True, "invalidPasswordCredentialError": True}


def test_change_password_submit_error(client, provisioned_admin, store):
    login(client)
    store.fail_saves = True

    response = client.put(
        "/users/change-password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "new-secret"},
    )

    assert response.json() == {"authSuccess": True, "submitError": True}


def test_change_password_requires_session(client, provisioned_admin):
    response = client.put(
        "/users/change-password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "new-secret"},
    )

    assert response.json() == {"authSuccess": False}


def test_change_password_missing_fields(client, provisioned_admin):
    login(client)

    response = client.put("/users/change-password", json={"currentPassword": ADMIN_PASSWORD})

    assert response.json() == {"success": False}


def test_service_not_initialized(monkeypatch):
    monkeypatch.setattr(main, "auth_service", None)
    client = TestClient(main.app)

    response = client.get("/users/authenticate")

    assert response.status_code == 503
