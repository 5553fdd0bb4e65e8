from .checkin import CheckinResult, list_checkins, record_checkin
from .identity import Identity, authorize, resolve_identity
from .profiles import get_profile, save_profile
from .sessions import get_current_session, issue_session, prune_sessions, validate_token
from .stats import get_stats

__all__ = [
    # identity
    "Identity",
    "authorize",
    "resolve_identity",
    # sessions
    "issue_session",
    "get_current_session",
    "validate_token",
    "prune_sessions",
    # checkins
    "CheckinResult",
    "record_checkin",
    "list_checkins",
    # profiles
    "get_profile",
    "save_profile",
    # stats
    "get_stats",
]
