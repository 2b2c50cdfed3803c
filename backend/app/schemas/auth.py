"""
Auth response schemas.
"""
from pydantic import BaseModel


class UserDetails(BaseModel):
    """Returned once at login; not persisted."""

    email: str
    token: str


class LoginResponse(BaseModel):
    user: UserDetails
