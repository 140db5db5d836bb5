"""
API Dependencies.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from moviehub.config import Settings, get_settings
from moviehub.application.services.account_service import AccountStore
from moviehub.domain.repositories.user_repository import UserRepository
from moviehub.infrastructure.database import get_db
from moviehub.infrastructure.repositories.memory_user_repository import InMemoryUserRepository
from moviehub.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from moviehub.infrastructure.tmdb_api import TMDbClient


@lru_cache
def get_memory_user_repository() -> InMemoryUserRepository:
    """Process-wide store; survives only as long as this worker."""
    return InMemoryUserRepository()


def get_user_repository(
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> UserRepository:
    """Get the user repository selected by USER_STORE.

    The session from get_db connects lazily, so the memory store never touches it.
    """
    if settings.USER_STORE == "database":
        return SQLAlchemyUserRepository(db)
    return get_memory_user_repository()


def get_account_store(repo: UserRepository = Depends(get_user_repository)) -> AccountStore:
    return AccountStore(repo)


def get_tmdb_client(settings: Settings = Depends(get_settings)) -> TMDbClient:
    return TMDbClient(settings)
