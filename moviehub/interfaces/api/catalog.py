"""Catalog API routes: TMDb proxy and the genre table."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from moviehub.application.services.catalog_service import fetch_movies, list_genres
from moviehub.domain.schemas.catalog import Genre
from moviehub.infrastructure.tmdb_api import TMDbClient
from moviehub.interfaces.deps import get_tmdb_client

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/movies")
async def movies_by_genre(
    genre: Optional[str] = Query(None, description="TMDb genre ID"),
    client: TMDbClient = Depends(get_tmdb_client),
):
    """Return TMDb's discover payload for an allow-listed genre, unchanged."""
    data = await fetch_movies(client, genre)
    return JSONResponse(content=data)


@router.get("/genres", response_model=List[Genre])
def genres():
    return list_genres()
