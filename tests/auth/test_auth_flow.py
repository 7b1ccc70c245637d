"""End-to-end: register, log in, use the token."""

from calmnest.auth.jwt import verify_token
from tests.conftest import ALICE


class TestAuthFlow:
    async def test_register_login_profile(self, client):
        register = await client.post("/api/auth/register", json=ALICE)
        assert register.status_code == 201
        user_id = register.json()["user"]["id"]

        login = await client.post("/api/auth/login", json={"email": "alice@x.com", "password": "secret1"})
        assert login.status_code == 200
        token = login.json()["token"]
        claims = verify_token(token)
        assert claims.username == "alice"
        assert claims.user_id == user_id

        profile = await client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})
        assert profile.status_code == 200
        data = profile.json()
        assert data["id"] == user_id
        assert data["username"] == "alice"
        assert "password" not in data
        assert "passwordHash" not in data

    async def test_registration_token_is_usable_immediately(self, client):
        register = await client.post("/api/auth/register", json=ALICE)
        token = register.json()["token"]
        profile = await client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})
        assert profile.status_code == 200
        assert profile.json()["email"] == "alice@x.com"
