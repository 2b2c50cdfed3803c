"""
Auth business logic — password sign-in against Firebase Authentication.

The Admin SDK cannot check passwords, so sign-in goes through the Identity
Toolkit REST API with the project's web API key. Nothing is persisted here;
the identity provider owns the user record.
"""
import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

INCORRECT_CREDENTIALS = "Incorrect user name or password"
TOKEN_UNAVAILABLE = "Error retrieving user token"


class LoginError(Exception):
    """Raised when sign-in fails; the message is safe to return to clients."""


class IdentityConfigError(Exception):
    """Raised when the identity client is used without a web API key."""


class IdentityToolkitClient:
    """
    Thin async wrapper around the Identity Toolkit v1 API.
    Uses httpx for HTTP — non-blocking in async FastAPI context.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.FIREBASE_WEB_API_KEY
        if not self.api_key:
            raise IdentityConfigError(
                "FIREBASE_WEB_API_KEY is not set. "
                "Add it to your .env file or pass it explicitly."
            )
        self.base_url = (base_url or settings.IDENTITY_TOOLKIT_URL).rstrip("/")
        self.timeout = timeout or settings.IDENTITY_TIMEOUT_SECONDS
        self.transport = transport

    async def sign_in(self, email: str, password: str) -> dict:
        """
        Exchange email + password for an ID token.

        Returns the raw response, shaped like:
        {"localId": "...", "email": "...", "idToken": "...", "refreshToken": "...", ...}
        """
        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/accounts:signInWithPassword",
                    params={"key": self.api_key},
                    json=payload,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.info(
                "Sign-in rejected for %r (status %s)",
                email,
                exc.response.status_code,
            )
            raise LoginError(INCORRECT_CREDENTIALS) from exc
        except httpx.RequestError as exc:
            logger.warning("Sign-in request failed: %s", exc)
            raise LoginError(INCORRECT_CREDENTIALS) from exc

        try:
            result = response.json()
        except ValueError as exc:
            logger.error("Sign-in returned a non-JSON body (status %s)", response.status_code)
            raise LoginError(TOKEN_UNAVAILABLE) from exc
        if not isinstance(result, dict):
            raise LoginError(TOKEN_UNAVAILABLE)
        return result


async def login(username: str, password: str, client: IdentityToolkitClient | None = None) -> dict:
    """
    Sign in and return ``{"email", "token"}``.

    Raises LoginError on bad credentials, upstream failure, or a missing token.
    """
    if client is None:
        try:
            client = IdentityToolkitClient()
        except IdentityConfigError as exc:
            logger.error("Login unavailable: %s", exc)
            raise LoginError(INCORRECT_CREDENTIALS) from exc

    result = await client.sign_in(username, password)
    token = result.get("idToken")
    if not token:
        logger.error("Sign-in for %r succeeded without an ID token", username)
        raise LoginError(TOKEN_UNAVAILABLE)

    return {"email": result.get("email") or "", "token": token}
