"""
Authentication endpoint tests.
Covers: register, login, token from header or cookie, profile and password changes.
"""
from __future__ import annotations

import pytest
from httpx import AsyncClient
from jose import jwt

from taskflow.core.config import settings

pytestmark = pytest.mark.asyncio


class TestRegister:
    async def test_register_success(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"name": "Dana", "email": "Dana@Example.com", "password": "secret123"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "dana@example.com"
        assert body["data"]["user"]["role"] == "member"
        assert "hashed_password" not in body["data"]["user"]
        assert body["data"]["token"]

    async def test_token_carries_identity_claims(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"name": "Dana", "email": "dana@example.com", "password": "secret123"},
        )
        data = response.json()["data"]
        claims = jwt.decode(
            data["token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        assert claims["sub"] == data["user"]["id"]
        assert claims["email"] == "dana@example.com"
        assert claims["name"] == "Dana"
        assert claims["exp"] > claims["iat"]

    async def test_register_duplicate_email(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"name": "Other", "email": "ALICE@example.com", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "User with this email already exists",
        }

    async def test_register_validation_errors(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"name": "", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation error"
        fields = {error["field"] for error in body["errors"]}
        assert fields == {"name", "email", "password"}


class TestLogin:
    async def test_login_success(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "secret123"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == alice["id"]
        assert data["token"]

    async def test_login_wrong_password(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    async def test_login_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "secret123"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestCurrentUser:
    async def test_me_with_bearer_token(self, client: AsyncClient, alice: dict) -> None:
        response = await client.get("/api/auth/me", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "alice@example.com"

    async def test_me_with_cookie(self, client: AsyncClient, alice: dict) -> None:
        response = await client.get(
            "/api/auth/me",
            headers={"Cookie": f"{settings.AUTH_COOKIE_NAME}={alice['token']}"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == alice["id"]

    async def test_me_without_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_me_with_invalid_token(self, client: AsyncClient) -> None:
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token. Please log in again."


class TestProfile:
    async def test_update_profile(self, client: AsyncClient, alice: dict) -> None:
        response = await client.put(
            "/api/auth/profile",
            json={"name": "Alice Cooper", "email": "cooper@example.com"},
            headers=alice["headers"],
        )
        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["name"] == "Alice Cooper"
        assert user["email"] == "cooper@example.com"

    async def test_update_profile_email_in_use(
        self, client: AsyncClient, alice: dict, bob: dict
    ) -> None:
        response = await client.put(
            "/api/auth/profile",
            json={"email": "bob@example.com"},
            headers=alice["headers"],
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    async def test_keeping_own_email_is_allowed(self, client: AsyncClient, alice: dict) -> None:
        response = await client.put(
            "/api/auth/profile",
            json={"email": "alice@example.com"},
            headers=alice["headers"],
        )
        assert response.status_code == 200


class TestPassword:
    async def test_change_password(self, client: AsyncClient, alice: dict) -> None:
        response = await client.put(
            "/api/auth/password",
            json={"current_password": "secret123", "new_password": "newsecret456"},
            headers=alice["headers"],
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Password changed successfully",
        }

        old = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "secret123"},
        )
        assert old.status_code == 401
        new = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "newsecret456"},
        )
        assert new.status_code == 200

    async def test_change_password_wrong_current(self, client: AsyncClient, alice: dict) -> None:
        response = await client.put(
            "/api/auth/password",
            json={"current_password": "nope", "new_password": "newsecret456"},
            headers=alice["headers"],
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect"
