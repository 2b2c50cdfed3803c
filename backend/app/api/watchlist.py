"""
Watchlist API — /watchlist
───────────────────────────
Every route requires an ID token (Bearer header or __session cookie).

Endpoints:
  GET    /watchlist          — Caller's entries joined with their movies
  POST   /watchlist          — Add {bookmark, movie_id}
  PATCH  /watchlist          — Set bookmark; movie_id names the entry to update
  DELETE /watchlist/{id}     — Remove an entry (missing ids succeed)
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from google.cloud.firestore import Client

from app.core.config import settings
from app.core.errors import INVALID_REQUEST, StoreError
from app.db.client import get_db
from app.deps.auth import AuthenticatedUser, get_current_user
from app.deps.body import read_body
from app.schemas.watchlist import MessageResponse, WatchlistResponse
from app.services.watchlist_service import (
    WatchlistValidationError,
    add_watchlist_item,
    delete_watchlist_item,
    get_watchlist,
    update_watchlist_item,
)

router = APIRouter()


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.get("", response_model=WatchlistResponse)
def read_watchlist(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Client = Depends(get_db),
) -> dict:
    try:
        items = get_watchlist(
            db,
            current_user.uid,
            keep_unresolved=settings.WATCHLIST_KEEP_UNRESOLVED,
        )
    except StoreError as exc:
        raise _bad_request(INVALID_REQUEST) from exc
    return {"data": items}


@router.post("", response_model=MessageResponse)
def add_item(
    current_user: AuthenticatedUser = Depends(get_current_user),
    body: dict[str, Any] = Depends(read_body),
    db: Client = Depends(get_db),
) -> dict:
    try:
        add_watchlist_item(db, current_user.uid, body.get("bookmark"), body.get("movie_id"))
    except WatchlistValidationError as exc:
        raise _bad_request(str(exc)) from exc
    except StoreError as exc:
        raise _bad_request(INVALID_REQUEST) from exc
    return {"message": "Watchlist item added"}


@router.patch("", response_model=MessageResponse)
def update_item(
    current_user: AuthenticatedUser = Depends(get_current_user),
    body: dict[str, Any] = Depends(read_body),
    db: Client = Depends(get_db),
) -> dict:
    try:
        update_watchlist_item(db, current_user.uid, body.get("bookmark"), body.get("movie_id"))
    except WatchlistValidationError as exc:
        raise _bad_request(str(exc)) from exc
    except StoreError as exc:
        raise _bad_request(INVALID_REQUEST) from exc
    return {"message": "Watchlist item updated"}


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Client = Depends(get_db),
) -> dict:
    try:
        delete_watchlist_item(db, current_user.uid, item_id)
    except WatchlistValidationError as exc:
        raise _bad_request(str(exc)) from exc
    except StoreError as exc:
        raise _bad_request(INVALID_REQUEST) from exc
    return {"message": "Watchlist item deleted"}
