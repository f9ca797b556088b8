"""
Notes Backend — Users & Login API Tests
========================================

What:  End-to-end tests for /api/users and /api/login.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noteapp.config import Settings
from noteapp.main import create_app


@pytest_asyncio.fixture
async def lenient_client(database, token_service):
    """Client for an app built with the email-username policy switched off."""
    app = create_app(
        config=Settings(require_email_username=False),
        database=database,
        token_service=token_service,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestRegistration:

    @pytest.mark.asyncio
    async def test_register(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "mluukkai@helsinki.fi", "name": "Matti Luukkainen"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "mluukkai@helsinki.fi"
        assert body["name"] == "Matti Luukkainen"
        assert isinstance(body["id"], int)
        assert "password_hash" not in body

    @pytest.mark.asyncio
    async def test_duplicate_username_is_400(self, test_client):
        body = {"username": "mluukkai@helsinki.fi", "name": "Matti Luukkainen"}
        await test_client.post("/api/users", json=body)

        response = await test_client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == ["username must be unique"]

    @pytest.mark.asyncio
    async def test_non_email_username_is_400(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "not-an-email", "name": "Someone"},
        )

        assert response.status_code == 400
        errors = response.json()["error"]
        assert any("isEmail" in message for message in errors)

    @pytest.mark.asyncio
    async def test_plain_username_allowed_when_policy_off(self, lenient_client):
        response = await lenient_client.post(
            "/api/users",
            json={"username": "plainname", "name": "Plain"},
        )

        assert response.status_code == 201
        assert response.json()["username"] == "plainname"

    @pytest.mark.asyncio
    async def test_overlong_password_is_400(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "hellas@fullstack.org", "name": "Arto Hellas", "password": "x" * 100},
        )

        assert response.status_code == 400
        assert any(message.startswith("password") for message in response.json()["error"])
        assert (await test_client.get("/api/users")).json() == []

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, test_client):
        response = await test_client.post("/api/users", json={"username": "a@helsinki.fi"})

        assert response.status_code == 400
        assert any(message.startswith("name") for message in response.json()["error"])


class TestListUsers:

    @pytest.mark.asyncio
    async def test_users_embed_notes_without_foreign_key(self, test_client, register_user):
        user, header = await register_user("mluukkai@helsinki.fi", "Matti Luukkainen")
        await test_client.post("/api/notes", json={"content": "HTML is easy"}, headers=header)

        users = (await test_client.get("/api/users")).json()

        assert len(users) == 1
        assert users[0]["id"] == user["id"]
        assert [n["content"] for n in users[0]["notes"]] == ["HTML is easy"]
        assert "user_id" not in users[0]["notes"][0]

    @pytest.mark.asyncio
    async def test_get_single_user(self, test_client, register_user):
        user, _ = await register_user("mluukkai@helsinki.fi", "Matti Luukkainen")

        response = await test_client.get(f"/api/users/{user['id']}")

        assert response.status_code == 200
        assert response.json()["notes"] == []

    @pytest.mark.asyncio
    async def test_get_missing_user_is_404(self, test_client):
        assert (await test_client.get("/api/users/9999")).status_code == 404


class TestRename:

    @pytest.mark.asyncio
    async def test_rename_by_username(self, test_client, register_user):
        await register_user("mluukkai@helsinki.fi", "Matti Luukkainen")

        response = await test_client.put(
            "/api/users/mluukkai@helsinki.fi",
            json={"name": "Matti L."},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Matti L."
        assert response.json()["username"] == "mluukkai@helsinki.fi"

    @pytest.mark.asyncio
    async def test_rename_unknown_username_is_404(self, test_client):
        response = await test_client.put("/api/users/nobody@helsinki.fi", json={"name": "X"})
        assert response.status_code == 404


class TestDeleteUser:

    @pytest.mark.asyncio
    async def test_cannot_delete_someone_else(self, test_client, register_user):
        victim, _ = await register_user("mluukkai@helsinki.fi", "Matti Luukkainen")
        _, attacker = await register_user("hellas@fullstack.org", "Arto Hellas")

        response = await test_client.delete(f"/api/users/{victim['id']}", headers=attacker)

        assert response.status_code == 403
        assert (await test_client.get(f"/api/users/{victim['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_deleting_user_keeps_blogs_with_null_owner(self, test_client, register_user):
        user, header = await register_user("mluukkai@helsinki.fi", "Matti Luukkainen")
        created = await test_client.post(
            "/api/blogs",
            json={"author": "Jami Kousa", "title": "Clean React", "url": "https://example.org/1"},
            headers=header,
        )
        blog_id = created.json()["id"]
        assert created.json()["user_id"] == user["id"]

        response = await test_client.delete(f"/api/users/{user['id']}", headers=header)
        assert response.status_code == 204

        fetched = await test_client.get(f"/api/blogs/{blog_id}")
        assert fetched.status_code == 200
        assert fetched.json()["user_id"] is None
        assert (await test_client.get("/api/blogs")).json()[0]["user"] is None


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_with_shared_password(self, test_client):
        await test_client.post(
            "/api/users",
            json={"username": "mluukkai@helsinki.fi", "name": "Matti Luukkainen"},
        )

        response = await test_client.post(
            "/api/login",
            json={"username": "mluukkai@helsinki.fi", "password": "secret"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "mluukkai@helsinki.fi"
        assert body["name"] == "Matti Luukkainen"
        assert body["token"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, test_client):
        await test_client.post(
            "/api/users",
            json={"username": "mluukkai@helsinki.fi", "name": "Matti Luukkainen"},
        )

        response = await test_client.post(
            "/api/login",
            json={"username": "mluukkai@helsinki.fi", "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid username or password"

    @pytest.mark.asyncio
    async def test_unknown_user_is_401(self, test_client):
        response = await test_client.post(
            "/api/login",
            json={"username": "nobody@helsinki.fi", "password": "secret"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_personal_password_replaces_shared_one(self, test_client):
        await test_client.post(
            "/api/users",
            json={"username": "hellas@fullstack.org", "name": "Arto Hellas", "password": "salainen"},
        )

        ok = await test_client.post(
            "/api/login",
            json={"username": "hellas@fullstack.org", "password": "salainen"},
        )
        shared = await test_client.post(
            "/api/login",
            json={"username": "hellas@fullstack.org", "password": "secret"},
        )

        assert ok.status_code == 200
        assert shared.status_code == 401
