"""
Auth dependency — shared across all protected endpoints.

Usage in any route:
    from app.deps.auth import AuthenticatedUser, get_current_user

    @router.get("/protected")
    def protected(user: AuthenticatedUser = Depends(get_current_user)):
        ...
"""
import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import Depends, HTTPException, Request, status

from app.core.errors import UNAUTHORIZED
from app.core.security import SESSION_COOKIE, TokenVerifier, extract_credential
from app.db.client import get_token_verifier

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedUser:
    """Decoded ID token claims for the caller."""

    uid: str
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)


def get_current_user(
    request: Request,
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedUser:
    """
    Verify the caller's ID token and return their claims.

    Raises 401 on any failure. When no credential is present the identity
    service is not contacted.
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED,
    )

    token = extract_credential(request)
    if not token:
        logger.error(
            "No ID token was passed as a Bearer token in the Authorization header "
            "or as a %r cookie (%s %s)",
            SESSION_COOKIE,
            request.method,
            request.url.path,
        )
        raise unauthorized

    claims = verifier.verify(token)
    if claims is None:
        raise unauthorized

    uid = claims.get("uid") or claims.get("sub")
    if not uid:
        raise unauthorized

    user = AuthenticatedUser(uid=uid, email=claims.get("email"), claims=claims)
    request.state.user = user
    return user
