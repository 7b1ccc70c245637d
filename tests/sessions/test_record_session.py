"""Tests for POST /api/sessions."""

import pytest
from sqlalchemy import event, func, select

from calmnest.database import get_engine, get_session_factory
from calmnest.db.models import UserSession
from calmnest.errors import NotFound, ValidationError
from calmnest.sessions.service import SessionService, validate_session
from calmnest.sessions.store import SqlSessionStore
from calmnest.users.store import SqlUserStore

YOGA = {"therapyType": "yoga", "contentId": "c1", "duration": 15, "moodBefore": 4, "moodAfter": 7}


class TestRecordSession:
    async def test_record_success(self, authed_client, registered_user):
        response = await authed_client.post("/api/sessions", json={**YOGA, "notes": "felt good"})
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Session recorded successfully"
        session = data["session"]
        assert session["userId"] == registered_user["user_id"]
        assert session["therapyType"] == "yoga"
        assert session["contentId"] == "c1"
        assert session["duration"] == 15
        assert session["completionStatus"] == "completed"
        assert session["moodBefore"] == 4
        assert session["moodAfter"] == 7
        assert session["notes"] == "felt good"

    async def test_progress_counters_updated(self, authed_client):
        await authed_client.post("/api/sessions", json=YOGA)
        await authed_client.post("/api/sessions", json={**YOGA, "therapyType": "audio", "duration": 10.5})
        profile = (await authed_client.get("/api/user/profile")).json()
        assert profile["progress"]["sessionsCompleted"] == 2
        assert profile["progress"]["totalTimeSpent"] == pytest.approx(25.5)
        assert profile["progress"]["lastActive"] is not None

    async def test_zero_duration_allowed(self, authed_client):
        response = await authed_client.post("/api/sessions", json={**YOGA, "duration": 0})
        assert response.status_code == 201
        profile = (await authed_client.get("/api/user/profile")).json()
        assert profile["progress"]["sessionsCompleted"] == 1
        assert profile["progress"]["totalTimeSpent"] == 0

    async def test_moods_optional(self, authed_client):
        response = await authed_client.post("/api/sessions", json={"therapyType": "talking", "contentId": "x", "duration": 3})
        assert response.status_code == 201
        assert response.json()["session"]["moodBefore"] is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"therapyType": "dancing"},
            {"contentId": ""},
            {"duration": -1},
            {"moodBefore": 0},
            {"moodAfter": 11},
        ],
    )
    async def test_invalid_input_rejected(self, authed_client, overrides):
        response = await authed_client.post("/api/sessions", json={**YOGA, **overrides})
        assert response.status_code == 400

    async def test_rejected_session_does_not_count(self, authed_client):
        await authed_client.post("/api/sessions", json={**YOGA, "duration": -5})
        profile = (await authed_client.get("/api/user/profile")).json()
        assert profile["progress"]["sessionsCompleted"] == 0
        assert profile["progress"]["totalTimeSpent"] == 0

    async def test_missing_field_rejected(self, authed_client):
        response = await authed_client.post("/api/sessions", json={"therapyType": "yoga", "duration": 5})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "contentId"


class TestValidateSession:
    @pytest.mark.parametrize("duration", [float("nan"), float("inf"), True])
    def test_non_numeric_durations(self, duration):
        with pytest.raises(ValidationError):
            validate_session("yoga", "c1", duration, None, None)

    def test_collects_every_bad_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_session("nope", " ", -1, 0, 99)
        fields = [e["field"] for e in exc_info.value.errors]
        assert fields == ["therapyType", "contentId", "duration", "moodBefore", "moodAfter"]

    @pytest.mark.parametrize("therapy_type", ["audio", "reading", "yoga", "laughing", "talking", "child", "spiritual"])
    def test_every_therapy_type_accepted(self, therapy_type):
        validate_session(therapy_type, "c1", 1, 1, 10)


class TestSessionService:
    async def test_unknown_user_is_not_found(self, db_session):
        service = SessionService(SqlSessionStore(db_session), SqlUserStore(db_session))
        with pytest.raises(NotFound):
            await service.record_session(4242, "yoga", "c1", 5)

    async def test_unknown_user_is_not_found_with_foreign_keys_enforced(self, database):
        # SQLite leaves FK checks off per connection; turn them on like PostgreSQL.
        def _enable_foreign_keys(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        engine = get_engine().sync_engine
        event.listen(engine, "connect", _enable_foreign_keys)
        try:
            async with get_session_factory()() as db:
                service = SessionService(SqlSessionStore(db), SqlUserStore(db))
                with pytest.raises(NotFound):
                    await service.record_session(424242, "yoga", "c", 1)
                remaining = await db.execute(select(func.count()).select_from(UserSession))
                assert remaining.scalar_one() == 0
        finally:
            event.remove(engine, "connect", _enable_foreign_keys)


class TestContentIdLength:
    async def test_longest_allowed_content_id(self, authed_client):
        response = await authed_client.post("/api/sessions", json={**YOGA, "contentId": "x" * 64})
        assert response.status_code == 201

    async def test_overlong_content_id_rejected(self, authed_client):
        response = await authed_client.post("/api/sessions", json={**YOGA, "contentId": "x" * 65})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "contentId"

        profile = (await authed_client.get("/api/user/profile")).json()
        assert profile["progress"]["sessionsCompleted"] == 0
