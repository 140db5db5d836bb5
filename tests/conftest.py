from typing import Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from moviehub.config import Settings, get_settings
from moviehub.infrastructure.repositories.memory_user_repository import InMemoryUserRepository
from moviehub.infrastructure.tmdb_api import TMDbClient
from moviehub.interfaces.deps import get_tmdb_client, get_user_repository
from moviehub.main import app


def discover_payload(genre_id: int) -> dict:
    return {
        "page": 1,
        "total_pages": 1,
        "total_results": 2,
        "results": [
            {
                "id": genre_id * 10 + 1,
                "title": f"Popular {genre_id}",
                "overview": "A very popular movie.",
                "poster_path": f"/poster-{genre_id}.jpg",
                "genre_ids": [genre_id],
            },
            {
                "id": genre_id * 10 + 2,
                "title": f"Obscure {genre_id}",
                "overview": "",
                "poster_path": None,
                "genre_ids": [genre_id],
            },
        ],
    }


class FakeTMDb:
    """Stands in for api.themoviedb.org behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.failures: Dict[int, int] = {}
        self.empty: set = set()
        self.network_down = False
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.network_down:
            raise httpx.ConnectError("Connection refused", request=request)
        genre_id = int(request.url.params["with_genres"])
        if genre_id in self.failures:
            return httpx.Response(self.failures[genre_id], json={"status_message": "nope"})
        if genre_id in self.empty:
            return httpx.Response(200, json={"page": 1, "results": []})
        return httpx.Response(200, json=discover_payload(genre_id))


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, TMDB_API_KEY="test-key")


@pytest.fixture
def tmdb() -> FakeTMDb:
    return FakeTMDb()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def client(settings, tmdb, user_repository):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_tmdb_client] = lambda: TMDbClient(settings, transport=tmdb.transport)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
