"""Catalog service: the genre table and genre validation for the proxy."""

from typing import Dict, List, Optional

import structlog

from moviehub.core.exceptions import ConfigurationError, InvalidGenreError, MissingGenreError
from moviehub.domain.schemas.catalog import Genre
from moviehub.infrastructure.tmdb_api import TMDbClient

logger = structlog.get_logger(__name__)

GENRES: Dict[str, Genre] = {
    "ai": Genre(key="ai", id=878, name="AI Movies", element="ai-movies"),
    "food": Genre(key="food", id=528, name="Food Movies", element="food-movies"),
    "drama": Genre(key="drama", id=18, name="Drama", element="drama-movies"),
    "horror": Genre(key="horror", id=27, name="Horror", element="horror-movies"),
    "comedy": Genre(key="comedy", id=35, name="Comedy", element="comedy-movies"),
}

ALLOWED_GENRE_IDS = frozenset(genre.id for genre in GENRES.values())


def list_genres() -> List[Genre]:
    return list(GENRES.values())


def parse_genre(raw: Optional[str]) -> int:
    """Turn the ``genre`` query value into an allow-listed provider ID."""
    if raw is None or not raw.strip():
        raise MissingGenreError()
    try:
        genre_id = int(raw.strip())
    except ValueError:
        raise InvalidGenreError()
    if genre_id not in ALLOWED_GENRE_IDS:
        raise InvalidGenreError()
    return genre_id


async def fetch_movies(client: TMDbClient, raw_genre: Optional[str]) -> dict:
    """Validate the genre and return TMDb's discover payload for it.

    A missing API key is reported before anything about the genre, so a
    misconfigured proxy fails the same way for every request.
    """
    logger.info("Catalog request", genre=raw_genre, api_key_configured=client.configured)
    if not client.configured:
        logger.error("TMDB API key not configured")
        raise ConfigurationError("TMDB API key not configured")

    genre_id = parse_genre(raw_genre)
    return await client.discover_by_genre(genre_id)
