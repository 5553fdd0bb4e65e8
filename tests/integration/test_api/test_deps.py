"""Integration tests for the shared auth dependencies."""
import pytest
import structlog
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from rollcall.api.deps import get_current_identity, get_db, require_roles
from rollcall.core.constants import ROLE_ADMIN
from rollcall.core.security import create_access_token
from rollcall.middleware import LoggingMiddleware
from rollcall.services.identity import Identity

ADMIN_ID = "admin-0001"
ATTENDEE_ID = "attendee-0001"


@pytest.fixture
def deps_client(db_session):
    """A bare app whose routes report the logging context they run under."""
    deps_app = FastAPI()
    deps_app.add_middleware(LoggingMiddleware)

    @deps_app.get("/whoami")
    async def whoami(identity: Identity = Depends(get_current_identity)):
        return {"identity": identity.id, "context": structlog.contextvars.get_contextvars()}

    @deps_app.get("/admin-only")
    async def admin_only(identity: Identity = Depends(require_roles(ROLE_ADMIN))):
        return {"identity": identity.id, "context": structlog.contextvars.get_contextvars()}

    def override_get_db():
        yield db_session

    deps_app.dependency_overrides[get_db] = override_get_db
    with TestClient(deps_app) as test_client:
        yield test_client
    structlog.contextvars.clear_contextvars()


@pytest.mark.integration
class TestIdentityLogContext:
    """The resolved caller is bound into the log context the endpoint sees."""

    def test_user_id_bound_for_endpoint(self, deps_client, attendee_headers):
        response = deps_client.get("/whoami", headers=attendee_headers)

        assert response.status_code == 200
        context = response.json()["context"]
        assert context["user_id"] == ATTENDEE_ID
        assert "request_id" in context

    def test_user_id_bound_through_role_gate(self, deps_client, admin_headers):
        response = deps_client.get("/admin-only", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["context"]["user_id"] == ADMIN_ID


@pytest.mark.integration
class TestBearerCredential:
    """Test parsing of the Authorization header."""

    @pytest.mark.parametrize("scheme", ["Bearer", "bearer", "BEARER"])
    def test_scheme_is_case_insensitive(self, deps_client, attendee_profile, scheme):
        token = create_access_token(ATTENDEE_ID)

        response = deps_client.get("/whoami", headers={"Authorization": f"{scheme} {token}"})

        assert response.status_code == 200
        assert response.json()["identity"] == ATTENDEE_ID

    @pytest.mark.parametrize("header", ["", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "Token abc"])
    def test_rejected_headers(self, deps_client, header):
        response = deps_client.get("/whoami", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_missing_header(self, deps_client):
        response = deps_client.get("/whoami")

        assert response.status_code == 401
