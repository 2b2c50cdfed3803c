"""
Request body dependency — accepts JSON or form-encoded bodies.

Clients post watchlist and login payloads either way, so handlers read a
plain dict and validate fields themselves.
"""
import json
from typing import Any

from fastapi import HTTPException, Request, status

from app.core.errors import INVALID_REQUEST

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> dict[str, Any]:
    """Return the request body as a dict; empty bodies give ``{}``."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_TYPES:
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REQUEST) from exc
    if not isinstance(data, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REQUEST)
    return data
