"""
ID token helpers — credential extraction and verification.
Never import Firestore here — keep this layer pure.
"""
import logging
from typing import Any

from firebase_admin import App, auth
from firebase_admin.exceptions import FirebaseError
from starlette.requests import Request

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
SESSION_COOKIE = "__session"


def extract_credential(request: Request) -> str | None:
    """
    Return the raw ID token carried by *request*, or None.

    The ``Authorization: Bearer <token>`` header wins over the
    ``__session`` cookie.
    """
    header = request.headers.get("authorization")
    if header and header.startswith(BEARER_PREFIX):
        return header.split(BEARER_PREFIX, 1)[1]
    return request.cookies.get(SESSION_COOKIE) or None


class TokenVerifier:
    """Verifies Firebase ID tokens against the identity service."""

    def __init__(self, app: App, check_revoked: bool = False) -> None:
        self.app = app
        self.check_revoked = check_revoked

    def verify(self, token: str) -> dict[str, Any] | None:
        """
        Decode *token* and return its claims.
        Returns None on any error (malformed, expired, revoked, disabled).
        """
        try:
            return auth.verify_id_token(
                token,
                app=self.app,
                check_revoked=self.check_revoked,
            )
        except (ValueError, FirebaseError) as exc:
            logger.info("Rejected ID token: %s", type(exc).__name__)
            return None
