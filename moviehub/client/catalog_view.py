"""Catalog view controller: one independently loaded section per genre."""

from enum import Enum
from typing import Dict, Iterable, List, Optional

import httpx
import structlog
from pydantic import BaseModel

from moviehub.application.services.catalog_service import list_genres
from moviehub.config import Settings, get_settings
from moviehub.core.exceptions import UpstreamError
from moviehub.domain.schemas.catalog import DiscoverPage, Genre, Movie, MovieCard

logger = structlog.get_logger(__name__)

MOVIES_PATH = "/api/movies"
NO_DESCRIPTION = "No description available"
NO_MOVIES = "No movies found"


class SectionState(str, Enum):
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"
    ERRORED = "errored"


class CatalogSection(BaseModel):
    genre: Genre
    state: SectionState = SectionState.LOADING
    cards: List[MovieCard] = []
    message: Optional[str] = None


class MoviePreview(BaseModel):
    title: str
    overview: str


class CatalogView:
    """Loads each genre section on its own; one failing genre never blocks the rest."""

    def __init__(self, http: httpx.Client, settings: Optional[Settings] = None, genres: Optional[Iterable[Genre]] = None):
        settings = settings or get_settings()
        self.http = http
        self.image_base_url = settings.TMDB_IMAGE_BASE_URL.rstrip("/")
        self.placeholder_url = settings.POSTER_PLACEHOLDER_URL
        self.sections: Dict[str, CatalogSection] = {
            genre.key: CatalogSection(genre=genre) for genre in (genres or list_genres())
        }
        self.preview: Optional[MoviePreview] = None

    def load_all(self) -> Dict[str, CatalogSection]:
        """Load every section in order, waiting for each before starting the next."""
        for section in self.sections.values():
            try:
                self.load_section(section)
            except Exception:
                logger.exception("Error loading genre", genre=section.genre.name)
                self._fail(section, f"Failed to load {section.genre.name}")
        return self.sections

    def load_section(self, section: CatalogSection) -> CatalogSection:
        genre = section.genre
        logger.debug("Fetching movies", genre_id=genre.id)
        try:
            response = self.http.get(MOVIES_PATH, params={"genre": genre.id})
            if not response.is_success:
                raise UpstreamError(
                    f"HTTP error! status: {response.status_code} - {response.text}"
                )
            page = DiscoverPage.model_validate(response.json())
        except UpstreamError as exc:
            return self._fail(section, f"Failed to load movies: {exc.details}")
        except (httpx.HTTPError, ValueError) as exc:
            return self._fail(section, f"Failed to load movies: {exc}")

        if page.results:
            section.cards = [self.card_for(movie) for movie in page.results]
            section.message = None
            section.state = SectionState.POPULATED
        else:
            section.cards = []
            section.message = NO_MOVIES
            section.state = SectionState.EMPTY
        logger.info("Genre loaded", genre=genre.name, count=len(section.cards))
        return section

    def card_for(self, movie: Movie) -> MovieCard:
        poster = f"{self.image_base_url}{movie.poster_path}" if movie.poster_path else self.placeholder_url
        return MovieCard(
            title=movie.title or "",
            overview=movie.overview or NO_DESCRIPTION,
            poster_url=poster,
        )

    def open_preview(self, section_key: str, index: int) -> MoviePreview:
        """Show the preview for one card of a loaded section.

        Raises KeyError for an unknown section and IndexError for a card that
        is not there.
        """
        card = self.sections[section_key].cards[index]
        self.preview = MoviePreview(title=card.title, overview=card.overview)
        return self.preview

    def close_preview(self) -> None:
        self.preview = None

    def _fail(self, section: CatalogSection, message: str) -> CatalogSection:
        logger.warning("Genre failed to load", genre=section.genre.name, reason=message)
        section.cards = []
        section.message = message
        section.state = SectionState.ERRORED
        return section
