"""Pydantic schemas for the genre table and rendered movie cards."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Genre(BaseModel):
    key: str
    id: int
    name: str
    element: str

    model_config = ConfigDict(frozen=True)


class Movie(BaseModel):
    """The subset of a TMDb discover result the catalog view renders."""

    id: Optional[int] = None
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class MovieCard(BaseModel):
    title: str
    overview: str
    poster_url: str


class DiscoverPage(BaseModel):
    page: int = 1
    results: List[Movie] = []

    model_config = ConfigDict(extra="ignore")
