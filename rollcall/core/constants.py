"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Roles
# Profiles carry exactly one of these; unknown identities resolve to attendee
ROLE_ADMIN = "admin"
ROLE_ATTENDEE = "attendee"
ROLES = (ROLE_ADMIN, ROLE_ATTENDEE)
DEFAULT_ROLE = ROLE_ATTENDEE

# Session Token Configuration
# Raw random bytes per token (encodes to 32 URL-safe base64 characters)
SESSION_TOKEN_BYTES = 24
# Attempts before giving up on a (practically impossible) token collision
SESSION_TOKEN_MAX_ATTEMPTS = 3

# Session lifetime in seconds (3 minutes + 5 second buffer over the rotation)
SESSION_TTL_SECONDS = 185
# How often the presenter mints a fresh token
ROTATION_INTERVAL_SECONDS = 180

# Profile Configuration
MAX_FULL_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 320
