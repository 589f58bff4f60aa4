"""Integration tests for sign-up, session login and JWT tokens."""

from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.integration

User = get_user_model()


def _signup(**overrides):
    data = {
        "username": "newbie",
        "email": "newbie@mail.com",
        "password": "Newbie123",
        "password_confirm": "Newbie123",
        "phone": "+1 555 0101",
    }
    data.update(overrides)
    return data


class TestRegister:
    def test_register_logs_in(self, api_client):
        response = api_client.post("/api/v1/auth/register/", _signup(), format="json")

        assert response.status_code == 201, response.content
        assert response.json()["username"] == "newbie"
        assert response.json()["is_admin"] is False
        me = api_client.get("/api/v1/auth/me/")
        assert me.status_code == 200
        assert me.json()["email"] == "newbie@mail.com"

    def test_duplicate(self, api_client, user):
        response = api_client.post(
            "/api/v1/auth/register/", _signup(email="BUYER@mail.com"), format="json"
        )
        assert response.status_code == 409

    def test_weak_password(self, api_client):
        response = api_client.post(
            "/api/v1/auth/register/",
            _signup(password="weakpass", password_confirm="weakpass"),
            format="json",
        )
        assert response.status_code == 400
        assert not User.objects.filter(username="newbie").exists()

    def test_password_mismatch(self, api_client):
        response = api_client.post(
            "/api/v1/auth/register/", _signup(password_confirm="Other1234"), format="json"
        )
        assert response.status_code == 400


class TestLogin:
    @pytest.mark.parametrize("identifier", ["buyer", "buyer@mail.com", "+15550100"])
    def test_login_with_any_identifier(self, api_client, user, identifier):
        response = api_client.post(
            "/api/v1/auth/login/",
            {"identifier": identifier, "password": "Buyer123"},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["id"] == str(user.id)

    def test_bad_credentials(self, api_client, user):
        response = api_client.post(
            "/api/v1/auth/login/", {"identifier": "buyer", "password": "nope"}, format="json"
        )
        assert response.status_code == 401

    def test_logout(self, api_client, user):
        api_client.post(
            "/api/v1/auth/login/", {"identifier": "buyer", "password": "Buyer123"}, format="json"
        )
        assert api_client.post("/api/v1/auth/logout/").status_code == 204
        assert api_client.get("/api/v1/auth/me/").status_code in (401, 403)

    def test_me_requires_auth(self, api_client):
        assert api_client.get("/api/v1/auth/me/").status_code == 401

    def test_login_throttled(self, api_client, user):
        statuses = [
            api_client.post(
                "/api/v1/auth/login/", {"identifier": "buyer", "password": "x"}, format="json"
            ).status_code
            for _ in range(11)
        ]
        assert statuses[:10] == [401] * 10
        assert statuses[10] == 429


class TestJWT:
    def test_obtain_and_use_token(self, api_client, admin_user):
        response = api_client.post(
            "/api/v1/auth/token/", {"username": "boss", "password": "Admin123"}, format="json"
        )
        assert response.status_code == 200
        token = response.json()["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        assert api_client.get("/api/v1/admin/dashboard/").status_code == 200
