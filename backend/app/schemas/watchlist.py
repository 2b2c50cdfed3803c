"""
Watchlist request/response schemas.
"""
from pydantic import BaseModel

from app.schemas.catalog import MovieResponse


class WatchlistItemResponse(BaseModel):
    """A watchlist entry joined with its movie."""

    id: str
    bookmark: int | float
    movie: MovieResponse | None = None


class WatchlistResponse(BaseModel):
    data: list[WatchlistItemResponse]


class MessageResponse(BaseModel):
    message: str
