"""
Catalog API — public, no auth
──────────────────────────────
Endpoints:
  GET /categories            — All categories as {title, filter}
  GET /movies?category=...   — All movies, or those in one category
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from google.cloud.firestore import Client

from app.core.errors import INVALID_REQUEST, StoreError
from app.db.client import get_db
from app.schemas.catalog import CategoryListResponse, MovieListResponse
from app.services.catalog_service import list_categories, list_movies

router = APIRouter()


@router.get("/categories", response_model=CategoryListResponse)
def get_categories(db: Client = Depends(get_db)) -> dict:
    try:
        return {"data": list_categories(db)}
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REQUEST) from exc


@router.get("/movies", response_model=MovieListResponse)
def get_movies(
    category: str | None = Query(None, description="Only movies tagged with this category filter"),
    db: Client = Depends(get_db),
) -> dict:
    """Movies in store order, optionally narrowed to one category."""
    try:
        return {"data": list_movies(db, category=category)}
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_REQUEST) from exc
