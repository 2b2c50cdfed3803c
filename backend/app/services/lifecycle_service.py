"""
Auth lifecycle hooks — seed and purge per-user data.

Invoked by the hosting runtime when Firebase Authentication creates or
deletes a user. Hooks are fire-and-forget: failures are logged, never
raised and never retried.
"""
import logging
from typing import Any

from google.cloud.firestore import Client

from app.core.config import settings
from app.db.models import MOVIES, user_ref, watchlist_ref
from app.services.catalog_service import STORE_ERRORS

logger = logging.getLogger(__name__)

USER_CREATED = "providers/firebase.auth/eventTypes/user.create"
USER_DELETED = "providers/firebase.auth/eventTypes/user.delete"


def on_user_created(
    db: Client,
    uid: str,
    seed_size: int | None = None,
    bookmark: int | None = None,
) -> bool:
    """
    Seed a new user's watchlist with the first catalog movies.

    All entries are written in one atomic batch. Returns True on commit.
    """
    seed_size = settings.WATCHLIST_SEED_SIZE if seed_size is None else seed_size
    bookmark = settings.WATCHLIST_SEED_BOOKMARK if bookmark is None else bookmark

    try:
        movies = list(db.collection(MOVIES).limit(seed_size).stream())
        batch = db.batch()
        entries = watchlist_ref(db, uid)
        for movie in movies:
            batch.set(entries.document(), {"bookmark": bookmark, "movie_id": movie.id})
        batch.commit()
    except STORE_ERRORS:
        logger.exception("Failed to seed watchlist for new user %s", uid)
        return False

    logger.info("Seeded %d watchlist entries for user %s", len(movies), uid)
    return True


def on_user_deleted(db: Client, uid: str) -> bool:
    """
    Remove every watchlist entry and the user's root record atomically.
    Returns True on commit.
    """
    try:
        batch = db.batch()
        count = 0
        for entry in watchlist_ref(db, uid).stream():
            batch.delete(entry.reference)
            count += 1
        batch.delete(user_ref(db, uid))
        batch.commit()
    except STORE_ERRORS:
        logger.exception("Failed to purge data for deleted user %s", uid)
        return False

    logger.info("Purged %d watchlist entries for user %s", count, uid)
    return True


def dispatch_auth_event(db: Client, event_type: str, data: dict[str, Any]) -> bool:
    """Route an auth event payload (``{"uid": ...}``) to its hook."""
    uid = (data or {}).get("uid")
    if not uid:
        logger.error("Auth event %s without uid ignored", event_type)
        return False

    if event_type == USER_CREATED:
        return on_user_created(db, uid)
    if event_type == USER_DELETED:
        return on_user_deleted(db, uid)

    logger.warning("Unhandled auth event type %s", event_type)
    return False
