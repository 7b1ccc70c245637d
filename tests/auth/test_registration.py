"""Tests for POST /api/auth/register."""

import pytest
from sqlalchemy import select

from calmnest.auth.jwt import TokenClaims, verify_token
from calmnest.db.models import User
from tests.conftest import ALICE, register_user


class TestRegister:
    async def test_register_success(self, client):
        response = await client.post("/api/auth/register", json=ALICE)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["tokenType"] == "bearer"
        user = data["user"]
        assert user["username"] == "alice"
        assert user["email"] == "alice@x.com"
        assert user["firstName"] == "Alice"
        assert user["lastName"] == "Liddell"
        assert user["age"] == 29
        assert user["role"] == "user"
        assert user["isVerified"] is False
        assert user["progress"]["sessionsCompleted"] == 0
        assert user["progress"]["totalTimeSpent"] == 0
        assert user["preferences"] == {"favoriteTherapies": [], "musicGenres": [], "bookCategories": []}

    async def test_token_carries_new_identity(self, client):
        response = await client.post("/api/auth/register", json=ALICE)
        data = response.json()
        claims = verify_token(data["token"])
        assert claims == TokenClaims(user_id=data["user"]["id"], username="alice", role="user")

    async def test_response_never_contains_password(self, client):
        response = await client.post("/api/auth/register", json=ALICE)
        body = response.text
        assert "password" not in body.lower()
        assert "secret1" not in body

    async def test_password_stored_hashed(self, client, db_session):
        await client.post("/api/auth/register", json=ALICE)
        user = (await db_session.execute(select(User).where(User.username == "alice"))).scalar_one()
        assert user.password_hash != "secret1"
        assert user.password_hash.startswith("$argon2id$")

    async def test_age_is_optional(self, client):
        payload = {k: v for k, v in ALICE.items() if k != "age"}
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 201
        assert response.json()["user"]["age"] is None

    async def test_email_normalized_to_lowercase(self, client):
        response = await client.post("/api/auth/register", json={**ALICE, "email": "Alice@X.com"})
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "alice@x.com"


class TestRegisterConflicts:
    async def test_duplicate_email(self, client):
        await register_user(client)
        response = await client.post("/api/auth/register", json={**ALICE, "username": "alice2"})
        assert response.status_code == 409
        assert response.json()["detail"] == "User with this email or username already exists"

    async def test_duplicate_email_different_case(self, client):
        await register_user(client)
        response = await client.post("/api/auth/register", json={**ALICE, "username": "alice2", "email": "ALICE@x.com"})
        assert response.status_code == 409

    async def test_duplicate_username(self, client):
        await register_user(client)
        response = await client.post("/api/auth/register", json={**ALICE, "email": "other@x.com"})
        assert response.status_code == 409

    async def test_conflict_leaves_single_record(self, client, db_session):
        await register_user(client)
        await client.post("/api/auth/register", json={**ALICE, "username": "alice2"})
        users = (await db_session.execute(select(User))).scalars().all()
        assert [u.username for u in users] == ["alice"]


class TestRegisterValidation:
    async def test_short_password(self, client):
        response = await client.post("/api/auth/register", json={**ALICE, "password": "12345"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Password must be at least 6 characters long"

    async def test_password_at_minimum_length(self, client):
        response = await client.post("/api/auth/register", json={**ALICE, "password": "123456"})
        assert response.status_code == 201

    @pytest.mark.parametrize("field", ["username", "email", "password", "firstName", "lastName"])
    async def test_missing_field(self, client, field):
        payload = {k: v for k, v in ALICE.items() if k != field}
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert "detail" in response.json()

    @pytest.mark.parametrize("field", ["username", "firstName", "lastName"])
    async def test_blank_field(self, client, field):
        response = await client.post("/api/auth/register", json={**ALICE, field: "   "})
        assert response.status_code == 400
        assert response.json()["detail"] == "All required fields must be provided"

    async def test_invalid_email(self, client):
        response = await client.post("/api/auth/register", json={**ALICE, "email": "not-an-email"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Validation error"

    @pytest.mark.parametrize("username", ["ab", "a" * 31])
    async def test_username_length(self, client, username):
        response = await client.post("/api/auth/register", json={**ALICE, "username": username})
        assert response.status_code == 400

    @pytest.mark.parametrize("age", [12, 121])
    async def test_age_out_of_range(self, client, age):
        response = await client.post("/api/auth/register", json={**ALICE, "age": age})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "age"

    async def test_failed_validation_creates_nothing(self, client, db_session):
        await client.post("/api/auth/register", json={**ALICE, "password": "123"})
        users = (await db_session.execute(select(User))).scalars().all()
        assert users == []


class TestRegisterFieldLengths:
    @pytest.mark.parametrize("field", ["firstName", "lastName"])
    async def test_name_at_column_limit(self, client, field):
        response = await client.post("/api/auth/register", json={**ALICE, field: "N" * 64})
        assert response.status_code == 201

    @pytest.mark.parametrize("field", ["firstName", "lastName"])
    async def test_overlong_name_rejected(self, client, field, db_session):
        response = await client.post("/api/auth/register", json={**ALICE, field: "N" * 65})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field
        users = (await db_session.execute(select(User))).scalars().all()
        assert users == []
