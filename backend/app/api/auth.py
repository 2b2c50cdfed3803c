"""
Auth API
────────
Endpoints:
  POST /login   — Sign in with username (email) + password, return ID token
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.deps.body import read_body
from app.schemas.auth import LoginResponse
from app.services.auth_service import LoginError, login

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def post_login(body: dict[str, Any] = Depends(read_body)) -> dict:
    """
    Authenticate against Firebase Authentication.

    Accepts a form-encoded (or JSON) body with *username* and *password*.
    Returns 400 with a message on any failure.
    """
    username = body.get("username")
    password = body.get("password")
    if not isinstance(username, str) or not username.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username is required")
    if not isinstance(password, str) or not password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password is required")

    try:
        user = await login(username.strip(), password)
    except LoginError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return {"user": user}
