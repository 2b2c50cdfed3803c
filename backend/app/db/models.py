"""
Firestore document models.

Collections:
  categories/{id}                 — CategoryDocument
  movies/{id}                     — MovieDocument
  userdata/{uid}                  — per-user root record (no fields read here)
  userdata/{uid}/watchlist/{id}   — WatchlistEntryDocument

Every snapshot read by a service goes through *parse_document* so a bad
document surfaces as MalformedDocumentError instead of a half-filled dict.
"""
from typing import Any, TypeVar

from google.cloud.firestore import Client, CollectionReference, DocumentReference, DocumentSnapshot
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CATEGORIES = "categories"
MOVIES = "movies"
USERDATA = "userdata"
WATCHLIST = "watchlist"

DocumentT = TypeVar("DocumentT", bound=BaseModel)


class MalformedDocumentError(Exception):
    """Raised when a stored document does not match its model."""

    def __init__(self, path: str, errors: str) -> None:
        self.path = path
        super().__init__(f"Malformed document {path}: {errors}")


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CategoryDocument(_Document):
    title: str
    filter: str


class MovieDocument(_Document):
    title: str
    description: str | None = None
    image: str | None = None
    video: str | None = None
    categories: list[str] = Field(default_factory=list)


class WatchlistEntryDocument(_Document):
    bookmark: int | float
    movie_id: str

    @field_validator("movie_id")
    @classmethod
    def strip_movie_id(cls, value: str) -> str:
        return value.strip()


def parse_document(model: type[DocumentT], snapshot: DocumentSnapshot) -> DocumentT:
    """Validate *snapshot* against *model*."""
    data: dict[str, Any] = snapshot.to_dict() or {}
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedDocumentError(snapshot.reference.path, str(exc)) from exc


# ── References ────────────────────────────────────────────────────────────────

def user_ref(db: Client, uid: str) -> DocumentReference:
    return db.collection(USERDATA).document(uid)


def watchlist_ref(db: Client, uid: str) -> CollectionReference:
    return user_ref(db, uid).collection(WATCHLIST)


def movie_ref(db: Client, movie_id: str) -> DocumentReference:
    return db.collection(MOVIES).document(movie_id)
