"""Domain exceptions.

Services raise these; the API layer translates them to HTTP responses.
Validation and auth errors subclass ValueError so callers that only care about
"bad input" can keep catching ValueError.
"""


class RollcallError(Exception):
    """Base class for all domain errors."""

    code = "error"
    message = "An error occurred"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


# --- Authentication / authorization -----------------------------------------

class AuthError(RollcallError):
    """Caller could not be authenticated or authorized."""

    status_code = 401


class InvalidCredentialError(AuthError, ValueError):
    """Bearer credential is missing, malformed, expired or not signed by the provider."""

    code = "invalid_credential"
    message = "Invalid or expired credential"


class ResolutionFailedError(AuthError):
    """Profile lookup failed for a transient backend reason. Never retried."""

    code = "resolution_failed"
    message = "Authentication failed"
    status_code = 500


class ForbiddenError(AuthError):
    """Resolved identity's role is not allowed for this operation."""

    code = "forbidden"
    message = "Insufficient permissions"
    status_code = 403


# --- Session token validation -----------------------------------------------

class SessionValidationError(RollcallError, ValueError):
    """Presented check-in token cannot be redeemed."""

    status_code = 400


class SessionNotFoundError(SessionValidationError):
    code = "token_not_found"
    message = "Invalid check-in code. Please scan the QR code again."


class SessionExpiredError(SessionValidationError):
    code = "token_expired"
    message = "QR code has expired. Please scan the current QR code."


# --- Store ------------------------------------------------------------------

class StoreError(RollcallError):
    """Durable store failure. Details are logged, never returned to callers."""

    code = "internal_error"
    message = "Internal server error"
    status_code = 500


class StoreUnavailableError(StoreError):
    pass


class ConstraintViolationError(StoreError):
    pass
