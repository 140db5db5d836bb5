"""MovieHub: Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # TMDb provider
    TMDB_API_KEY: str = ""
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_LANGUAGE: str = "en-US"
    TMDB_TIMEOUT_SECONDS: float = 10.0
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"
    POSTER_PLACEHOLDER_URL: str = "https://via.placeholder.com/200x300/333/fff?text=No+Image"

    # Account store: "memory" (process-local) or "database"
    USER_STORE: str = "memory"
    DATABASE_URL: str = "sqlite:///./data/moviehub.db"

    # Client
    API_BASE_URL: str = "http://localhost:8000"
    CLIENT_STORAGE_PATH: str = "./data/client_storage.json"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
