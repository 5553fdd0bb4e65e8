"""Integration tests for check-in session endpoints."""
import pytest


@pytest.mark.integration
class TestIssueSession:

    def test_requires_auth(self, client):
        response = client.post("/api/v1/sessions")
        assert response.status_code == 401
        assert response.json()["detail"] == "Missing or invalid authorization header"

    def test_invalid_credential(self, client):
        response = client.post("/api/v1/sessions", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_attendee_forbidden(self, client, attendee_headers):
        response = client.post("/api/v1/sessions", headers=attendee_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions"

    def test_user_without_profile_forbidden(self, client, newcomer_headers):
        response = client.post("/api/v1/sessions", headers=newcomer_headers)
        assert response.status_code == 403

    def test_admin_issues_session(self, client, admin_headers):
        response = client.post("/api/v1/sessions", headers=admin_headers)

        assert response.status_code == 200
        session = response.json()["session"]
        assert len(session["token"]) == 32
        assert session["created_by"] == "admin-0001"
        assert session["expires_at"] > session["created_at"]

    def test_each_call_mints_new_token(self, client, admin_headers):
        first = client.post("/api/v1/sessions", headers=admin_headers).json()["session"]
        second = client.post("/api/v1/sessions", headers=admin_headers).json()["session"]

        assert first["id"] != second["id"]
        assert first["token"] != second["token"]


@pytest.mark.integration
class TestCurrentSession:

    def test_null_when_none_issued(self, client, admin_headers):
        response = client.get("/api/v1/sessions/current", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"session": None}

    def test_returns_newest(self, client, admin_headers):
        client.post("/api/v1/sessions", headers=admin_headers)
        newest = client.post("/api/v1/sessions", headers=admin_headers).json()["session"]

        response = client.get("/api/v1/sessions/current", headers=admin_headers)

        assert response.json()["session"]["token"] == newest["token"]

    def test_attendee_forbidden(self, client, attendee_headers):
        response = client.get("/api/v1/sessions/current", headers=attendee_headers)
        assert response.status_code == 403


@pytest.mark.integration
class TestCurrentSessionQr:

    def test_404_when_none_issued(self, client, admin_headers):
        response = client.get("/api/v1/sessions/current/qr", headers=admin_headers)
        assert response.status_code == 404

    def test_svg_for_live_session(self, client, admin_headers):
        client.post("/api/v1/sessions", headers=admin_headers)

        response = client.get("/api/v1/sessions/current/qr", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.headers["cache-control"] == "no-store"
        assert b"<svg" in response.content

    def test_attendee_forbidden(self, client, attendee_headers):
        response = client.get("/api/v1/sessions/current/qr", headers=attendee_headers)
        assert response.status_code == 403
