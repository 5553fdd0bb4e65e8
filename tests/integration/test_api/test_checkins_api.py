"""Integration tests for check-in endpoints."""
from datetime import datetime, timedelta, timezone

import pytest

from rollcall.db.models import AttendanceSession, Checkin


def issue_token(client, admin_headers):
    response = client.post("/api/v1/sessions", headers=admin_headers)
    assert response.status_code == 200
    return response.json()["session"]["token"]


@pytest.mark.integration
class TestCheckin:
    """Test POST /api/v1/checkins."""

    def test_requires_auth(self, client):
        response = client.post("/api/v1/checkins", json={"token": "abc"})
        assert response.status_code == 401

    def test_first_checkin(self, client, admin_headers, attendee_headers, db_session):
        token = issue_token(client, admin_headers)

        response = client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Successfully checked in!"
        assert "alreadyCheckedIn" not in data
        assert data["checkin"]["user_id"] == "attendee-0001"
        assert db_session.query(Checkin).count() == 1

    def test_repeat_checkin_same_day(self, client, admin_headers, attendee_headers, db_session):
        token = issue_token(client, admin_headers)
        first = client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers).json()

        response = client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["alreadyCheckedIn"] is True
        assert data["message"] == "You have already checked in today"
        assert data["checkin"]["id"] == first["checkin"]["id"]
        assert db_session.query(Checkin).count() == 1

    def test_repeat_with_rotated_token(self, client, admin_headers, attendee_headers):
        old = issue_token(client, admin_headers)
        client.post("/api/v1/checkins", json={"token": old}, headers=attendee_headers)
        new = issue_token(client, admin_headers)

        response = client.post("/api/v1/checkins", json={"token": new}, headers=attendee_headers)

        assert response.json()["alreadyCheckedIn"] is True

    def test_old_token_still_valid_after_rotation(self, client, admin_headers, attendee_headers):
        old = issue_token(client, admin_headers)
        issue_token(client, admin_headers)

        response = client.post("/api/v1/checkins", json={"token": old}, headers=attendee_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Successfully checked in!"

    def test_unknown_token(self, client, attendee_headers):
        response = client.post(
            "/api/v1/checkins", json={"token": "neverIssuedToken123"}, headers=attendee_headers
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Invalid check-in code. Please scan the QR code again.",
            "code": "token_not_found",
        }

    def test_expired_token(self, client, admin_profile, attendee_headers, db_session):
        now = datetime.now(timezone.utc)
        db_session.add(AttendanceSession(
            token="expiredTokenValue000",
            created_by=admin_profile.user_id,
            created_at=now - timedelta(minutes=10),
            expires_at=now - timedelta(minutes=7),
        ))
        db_session.commit()

        response = client.post(
            "/api/v1/checkins", json={"token": "expiredTokenValue000"}, headers=attendee_headers
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["code"] == "token_expired"
        assert "expired" in data["error"]
        assert db_session.query(Checkin).count() == 0

    @pytest.mark.parametrize(
        "body",
        [
            {}, {"token": None}, {"token": ""}, {"token": "has spaces"},
            {"token": "x" * 101}, {"token": 12345}, {"token": ["a"]},
        ],
    )
    def test_malformed_token(self, client, attendee_headers, body):
        response = client.post("/api/v1/checkins", json=body, headers=attendee_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["code"] == "invalid_token"

    def test_numeric_token_gets_checkin_error_body(self, client, attendee_headers, db_session):
        response = client.post("/api/v1/checkins", json={"token": 12345}, headers=attendee_headers)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Token must be a string",
            "code": "invalid_token",
        }
        assert db_session.query(Checkin).count() == 0

    def test_profile_required(self, client, admin_headers, newcomer_headers, db_session):
        token = issue_token(client, admin_headers)

        response = client.post("/api/v1/checkins", json={"token": token}, headers=newcomer_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "profile_required"
        assert db_session.query(Checkin).count() == 0

    def test_profile_then_checkin(self, client, admin_headers, newcomer_headers):
        token = issue_token(client, admin_headers)
        client.post(
            "/api/v1/users/me",
            json={"full_name": "New Person", "email": "new@example.com"},
            headers=newcomer_headers,
        )

        response = client.post("/api/v1/checkins", json={"token": token}, headers=newcomer_headers)

        assert response.status_code == 200
        assert response.json()["checkin"]["user_id"] == "newcomer-0001"


@pytest.mark.integration
class TestListCheckins:
    """Test GET /api/v1/checkins."""

    def test_own_checkins(self, client, admin_headers, attendee_headers, other_attendee_headers):
        token = issue_token(client, admin_headers)
        client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers)
        client.post("/api/v1/checkins", json={"token": token}, headers=other_attendee_headers)

        response = client.get("/api/v1/checkins", headers=attendee_headers)

        assert response.status_code == 200
        checkins = response.json()["checkins"]
        assert [c["user_id"] for c in checkins] == ["attendee-0001"]
        assert "user" not in checkins[0]

    def test_admin_scope_all_includes_profiles(
        self, client, admin_headers, attendee_headers, other_attendee_headers
    ):
        token = issue_token(client, admin_headers)
        client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers)
        client.post("/api/v1/checkins", json={"token": token}, headers=other_attendee_headers)

        response = client.get("/api/v1/checkins?scope=all", headers=admin_headers)

        assert response.status_code == 200
        checkins = response.json()["checkins"]
        assert {c["user"]["full_name"] for c in checkins} == {"Ada Lovelace", "Alan Turing"}

    def test_attendee_scope_all_forbidden(self, client, attendee_headers):
        response = client.get("/api/v1/checkins?scope=all", headers=attendee_headers)
        assert response.status_code == 403

    def test_bad_scope(self, client, attendee_headers):
        response = client.get("/api/v1/checkins?scope=everyone", headers=attendee_headers)
        assert response.status_code == 422
