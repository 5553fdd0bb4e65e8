"""Integration tests for the stats endpoint."""
import pytest


@pytest.mark.integration
class TestStats:

    def test_admin_gets_stats(self, client, admin_headers, attendee_headers):
        token = client.post("/api/v1/sessions", headers=admin_headers).json()["session"]["token"]
        client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers)
        client.post("/api/v1/checkins", json={"token": token}, headers=attendee_headers)

        response = client.get("/api/v1/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "stats": {
                "total_users": 2,
                "total_checkins": 1,
                "checkins_today": 1,
                "unique_checkins_today": 1,
            }
        }

    def test_attendee_forbidden(self, client, attendee_headers):
        assert client.get("/api/v1/stats", headers=attendee_headers).status_code == 403
