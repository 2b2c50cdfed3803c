"""
Catalog business logic — read-only access to categories and movies.
"""
import logging

from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.cloud.firestore import Client, DocumentSnapshot
from google.cloud.firestore_v1.base_query import FieldFilter

from app.core.errors import StoreError
from app.db.models import (
    CATEGORIES,
    MOVIES,
    CategoryDocument,
    MalformedDocumentError,
    MovieDocument,
    parse_document,
)

logger = logging.getLogger(__name__)

STORE_ERRORS = (GoogleAPICallError, RetryError, MalformedDocumentError)


def movie_from_snapshot(snapshot: DocumentSnapshot) -> dict:
    """Project a movie document to its public shape."""
    movie = parse_document(MovieDocument, snapshot)
    return {
        "id": snapshot.id,
        "title": movie.title,
        "description": movie.description,
        "image": movie.image,
        "video": movie.video,
    }


def list_categories(db: Client) -> list[dict]:
    """Return every category as ``{title, filter}`` in store order."""
    try:
        results = []
        for snapshot in db.collection(CATEGORIES).stream():
            category = parse_document(CategoryDocument, snapshot)
            results.append({"title": category.title, "filter": category.filter})
        return results
    except STORE_ERRORS as exc:
        logger.exception("Failed to list categories")
        raise StoreError("categories unavailable") from exc


def list_movies(db: Client, category: str | None = None) -> list[dict]:
    """
    Return movies in store order.

    With *category*, only movies whose ``categories`` array contains it.
    """
    query = db.collection(MOVIES)
    if category:
        query = query.where(filter=FieldFilter("categories", "array_contains", category))

    try:
        return [movie_from_snapshot(snapshot) for snapshot in query.stream()]
    except STORE_ERRORS as exc:
        logger.exception("Failed to list movies (category=%r)", category)
        raise StoreError("movies unavailable") from exc
