"""
Bearer-token authentication for the mail relay.

The presented token is compared against the configured shared secret. Every
failure mode (missing header, wrong scheme, empty token, unconfigured secret,
mismatch) collapses to None so the caller answers with a single 401.
"""

import hashlib
import secrets
from typing import NewType, Optional

from app.config import Settings

Principal = NewType("Principal", str)

_FINGERPRINT_LENGTH = 12


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from a "Bearer <token>" header, or None if malformed."""
    if not authorization:
        return None

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None

    return parts[1]


def authenticate(authorization: Optional[str], settings: Settings) -> Optional[Principal]:
    """
    Verify the Authorization header against settings.auth_secret.

    Args:
        authorization: Raw Authorization header value (may be None)
        settings: Runtime configuration holding the expected secret

    Returns:
        An opaque Principal on success, otherwise None.
    """
    if not settings.auth_secret:
        return None

    token = _extract_bearer_token(authorization)
    if token is None:
        return None

    if not secrets.compare_digest(token.encode(), settings.auth_secret.encode()):
        return None

    digest = hashlib.sha256(token.encode()).hexdigest()
    return Principal(digest[:_FINGERPRINT_LENGTH])
