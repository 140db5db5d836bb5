"""TMDb (The Movie Database) HTTP client.

Only the discover endpoint is used: one page of movies for a genre, most
popular first. The payload is handed back untouched so the proxy can return
it verbatim.
"""

import logging
from typing import Optional

import httpx

from moviehub.config import Settings, get_settings
from moviehub.core.exceptions import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

DISCOVER_SORT = "popularity.desc"
DISCOVER_PAGE = 1


class TMDbClient:
    """Client for the TMDb v3 API."""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = settings or get_settings()
        self.base_url = settings.TMDB_BASE_URL.rstrip("/")
        self.api_key = settings.TMDB_API_KEY
        self.language = settings.TMDB_LANGUAGE
        self.timeout = settings.TMDB_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def discover_by_genre(self, genre_id: int) -> dict:
        """
        Fetch the first page of popular movies for a genre.

        Raises ConfigurationError when no API key is set and UpstreamError
        when TMDb answers with a non-2xx status or cannot be reached.
        """
        if not self.configured:
            raise ConfigurationError("TMDB API key not configured")

        url = f"{self.base_url}/discover/movie"
        params = {
            "api_key": self.api_key,
            "with_genres": genre_id,
            "sort_by": DISCOVER_SORT,
            "page": DISCOVER_PAGE,
            "language": self.language,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"TMDb request for genre {genre_id} failed: {e}")
            raise UpstreamError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.warning(
                f"TMDb API error for genre {genre_id}: {response.status_code} {response.reason_phrase}"
            )
            raise UpstreamError(
                f"TMDb API error: {response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"TMDb returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamError("TMDb returned an unexpected payload")

        logger.info(f"Fetched {len(data.get('results') or [])} movies for genre {genre_id}")
        return data
