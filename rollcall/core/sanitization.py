"""Input sanitization utilities."""
import re
from typing import Optional

from rollcall.core.constants import MAX_EMAIL_LENGTH, MAX_FULL_NAME_LENGTH

# Check-in tokens are 32 chars of URL-safe base64; anything far longer is junk
MAX_TOKEN_LENGTH = 100

_TOKEN_RE = re.compile(r'^[A-Za-z0-9_-]+$')
_EMAIL_RE = re.compile(r'^[^@\s<>]+@[^@\s<>]+\.[^@\s<>]+$')


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize free text to prevent markup injection.

    Strips HTML tags and normalizes whitespace. Does NOT escape entities; the
    frontend escapes on render and double-escaping shows "&lt;" literally.

    Raises:
        ValueError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Malformed tags or encoded attacks survive the strip above
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_full_name(full_name: str) -> str:
    """Sanitize a display name submitted on first check-in or profile edit."""
    sanitized = sanitize_text(full_name, max_length=MAX_FULL_NAME_LENGTH)

    if not sanitized:
        raise ValueError("Full name cannot be empty")

    return sanitized


def validate_email(email: str) -> str:
    """Trim, lowercase and shape-check an email address."""
    if not isinstance(email, str):
        raise ValueError("Email must be a string")

    email = email.strip().lower()

    if not email:
        raise ValueError("Email cannot be empty")

    if len(email) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email exceeds maximum length of {MAX_EMAIL_LENGTH} characters")

    if not _EMAIL_RE.match(email):
        raise ValueError("Email format is invalid")

    return email


def validate_token_format(token: str) -> str:
    """
    Validate check-in token format before touching the database.

    Tokens are compared byte-for-byte against issued sessions, so nothing is
    trimmed or case folded here; stray whitespace simply fails the format check.

    Raises:
        ValueError: If token format is invalid
    """
    if not isinstance(token, str):
        raise ValueError("Token must be a string")

    if not token:
        raise ValueError("Missing session token")

    if len(token) > MAX_TOKEN_LENGTH:
        raise ValueError(f"Token exceeds maximum length of {MAX_TOKEN_LENGTH} characters")

    # URL-safe base64 uses: A-Z, a-z, 0-9, -, _
    if not _TOKEN_RE.match(token):
        raise ValueError("Token format is invalid (must be URL-safe base64)")

    return token
