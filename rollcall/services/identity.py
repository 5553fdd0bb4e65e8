"""Identity resolution and role gating."""
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.db.models import Profile
from rollcall.core.constants import DEFAULT_ROLE, ROLE_ADMIN
from rollcall.core.exceptions import ForbiddenError, ResolutionFailedError
from rollcall.core.logging_config import get_logger
from rollcall.core.security import verify_credential

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as seen by the core: a stable external id and a role."""

    id: str
    role: str
    has_profile: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def resolve_identity(
    db: Session,
    credential: Optional[str],
    verifier: Callable[[Optional[str]], str] = verify_credential,
) -> Identity:
    """
    Resolve a bearer credential to an Identity.

    The credential is handed to the identity provider; the stored profile (if
    any) supplies the role. A missing profile means ``attendee`` and is NOT
    created here; profile creation belongs to the profile endpoints.

    Args:
        db: Database session
        credential: Raw bearer credential (without the "Bearer " prefix)
        verifier: Identity provider port returning the principal id

    Raises:
        InvalidCredentialError: Credential cannot be resolved to a principal
        ResolutionFailedError: Profile store failed; surfaced, not retried
    """
    principal_id = verifier(credential)

    try:
        profile = db.query(Profile).filter(Profile.user_id == principal_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("identity_resolution_failed", user_id=principal_id, error=str(e))
        raise ResolutionFailedError() from e

    if profile is None:
        return Identity(id=principal_id, role=DEFAULT_ROLE, has_profile=False)

    return Identity(id=principal_id, role=profile.role or DEFAULT_ROLE, has_profile=True)


def authorize(identity: Identity, allowed_roles: Optional[Iterable[str]] = None) -> None:
    """
    Role gate. Passes silently or raises ForbiddenError.

    An empty or absent allow-list admits any authenticated identity. Always
    evaluated against the persisted role; never cached between calls.
    """
    roles = set(allowed_roles or ())
    if roles and identity.role not in roles:
        raise ForbiddenError()
