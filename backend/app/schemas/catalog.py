"""
Catalog response schemas.
"""
from pydantic import BaseModel


class CategoryResponse(BaseModel):
    """A browsable category; *filter* is the value passed to GET /movies."""

    title: str
    filter: str


class MovieResponse(BaseModel):
    """Public movie payload."""

    id: str
    title: str
    description: str | None = None
    image: str | None = None
    video: str | None = None


class CategoryListResponse(BaseModel):
    data: list[CategoryResponse]


class MovieListResponse(BaseModel):
    data: list[MovieResponse]
