"""
Watchlist business logic.

Entries live under ``userdata/{uid}/watchlist`` and reference a movie by
document id. Reads join entries against ``movies`` with one batched lookup.
"""
import logging
import math
from typing import Any

from google.cloud.firestore import Client

from app.core.errors import StoreError
from app.db.models import (
    MalformedDocumentError,
    WatchlistEntryDocument,
    movie_ref,
    parse_document,
    watchlist_ref,
)
from app.services.catalog_service import STORE_ERRORS, movie_from_snapshot

logger = logging.getLogger(__name__)

BOOKMARK_REQUIRED = "Bookmark is required"
BOOKMARK_NOT_A_NUMBER = "Bookmark must be a number"
MOVIE_ID_REQUIRED = "Movie id is required"
ITEM_ID_REQUIRED = "Watchlist item id is required"

# Firestore stores integers as int64
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Malformed ids (e.g. containing "/") raise ValueError in the client
DOCUMENT_ERRORS = STORE_ERRORS + (ValueError,)


class WatchlistValidationError(Exception):
    """Raised when a watchlist request is missing or has an invalid field."""


# ── Input normalisation ──────────────────────────────────────────────────────


def normalize_bookmark(value: Any) -> int | float:
    """
    Coerce a bookmark from a JSON or form body to a number.

    Zero and empty values count as missing.
    """
    if value is None or value is False:
        raise WatchlistValidationError(BOOKMARK_REQUIRED)
    if value is True:
        raise WatchlistValidationError(BOOKMARK_NOT_A_NUMBER)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise WatchlistValidationError(BOOKMARK_REQUIRED)
        try:
            number: int | float = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise WatchlistValidationError(BOOKMARK_NOT_A_NUMBER) from None
    elif isinstance(value, (int, float)):
        number = value
    else:
        raise WatchlistValidationError(BOOKMARK_NOT_A_NUMBER)

    if isinstance(number, float) and not math.isfinite(number):
        raise WatchlistValidationError(BOOKMARK_NOT_A_NUMBER)
    if isinstance(number, int) and not INT64_MIN <= number <= INT64_MAX:
        raise WatchlistValidationError(BOOKMARK_NOT_A_NUMBER)
    if not number:
        raise WatchlistValidationError(BOOKMARK_REQUIRED)
    return number


def normalize_document_id(value: Any, message: str) -> str:
    """Trim *value*; raise with *message* if nothing is left."""
    if not isinstance(value, str) or not value.strip():
        raise WatchlistValidationError(message)
    return value.strip()


# ── Service functions ────────────────────────────────────────────────────────


def get_watchlist(db: Client, uid: str, keep_unresolved: bool = False) -> list[dict]:
    """
    Return the user's watchlist joined with movie details.

    Entries whose movie does not exist are dropped unless *keep_unresolved*,
    in which case they are returned with ``movie=None``. Malformed entries,
    entries with an unusable movie id and malformed movies are treated the
    same way as missing movies; only store failures fail the read.
    """
    try:
        snapshots = list(watchlist_ref(db, uid).stream())
    except STORE_ERRORS as exc:
        logger.exception("Failed to read watchlist for user %s", uid)
        raise StoreError("watchlist unavailable") from exc

    entries: list[tuple[str, WatchlistEntryDocument]] = []
    for snapshot in snapshots:
        try:
            entries.append((snapshot.id, parse_document(WatchlistEntryDocument, snapshot)))
        except MalformedDocumentError as exc:
            logger.warning("Skipping watchlist entry of user %s: %s", uid, exc)

    if not entries:
        return []

    refs = {}
    for entry_id, entry in entries:
        if not entry.movie_id or entry.movie_id in refs:
            continue
        try:
            refs[entry.movie_id] = movie_ref(db, entry.movie_id)
        except ValueError:
            logger.warning(
                "Watchlist entry %s of user %s has invalid movie id %r",
                entry_id,
                uid,
                entry.movie_id,
            )

    movies: dict[str, dict] = {}
    if refs:
        try:
            movie_snapshots = list(db.get_all(list(refs.values())))
        except STORE_ERRORS as exc:
            logger.exception("Failed to resolve watchlist movies for user %s", uid)
            raise StoreError("watchlist unavailable") from exc

        for snapshot in movie_snapshots:
            if not snapshot.exists:
                continue
            try:
                movies[snapshot.id] = movie_from_snapshot(snapshot)
            except MalformedDocumentError as exc:
                logger.warning("Ignoring movie in watchlist join: %s", exc)

    items = []
    for entry_id, entry in entries:
        movie = movies.get(entry.movie_id)
        if movie is None:
            logger.warning(
                "Watchlist entry %s of user %s references missing movie %r",
                entry_id,
                uid,
                entry.movie_id,
            )
            if not keep_unresolved:
                continue
        items.append({"id": entry_id, "bookmark": entry.bookmark, "movie": movie})
    return items


def add_watchlist_item(db: Client, uid: str, bookmark: Any, movie_id: Any) -> str:
    """Append an entry and return its generated id."""
    bookmark = normalize_bookmark(bookmark)
    movie_id = normalize_document_id(movie_id, MOVIE_ID_REQUIRED)

    try:
        _, ref = watchlist_ref(db, uid).add({"bookmark": bookmark, "movie_id": movie_id})
    except DOCUMENT_ERRORS as exc:
        logger.exception("Failed to add movie %r to watchlist of user %s", movie_id, uid)
        raise StoreError("watchlist write failed") from exc
    return ref.id


def update_watchlist_item(db: Client, uid: str, bookmark: Any, entry_id: Any) -> None:
    """Set the bookmark of an existing entry. Missing entries are a store error."""
    bookmark = normalize_bookmark(bookmark)
    entry_id = normalize_document_id(entry_id, MOVIE_ID_REQUIRED)

    try:
        watchlist_ref(db, uid).document(entry_id).update({"bookmark": bookmark})
    except DOCUMENT_ERRORS as exc:
        logger.exception("Failed to update watchlist entry %r of user %s", entry_id, uid)
        raise StoreError("watchlist write failed") from exc


def delete_watchlist_item(db: Client, uid: str, entry_id: Any) -> None:
    """Delete an entry by id. Deleting a missing entry succeeds."""
    entry_id = normalize_document_id(entry_id, ITEM_ID_REQUIRED)

    try:
        watchlist_ref(db, uid).document(entry_id).delete()
    except DOCUMENT_ERRORS as exc:
        logger.exception("Failed to delete watchlist entry %r of user %s", entry_id, uid)
        raise StoreError("watchlist write failed") from exc
