"""
Process-local implementation of the User Repository.

Entries live only as long as the process; a cold start sees an empty store.
"""

from typing import Dict, Optional

from moviehub.domain.models.user import User
from moviehub.domain.repositories.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """User repository backed by a dict keyed on normalized email."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    def get_by_email(self, email: str) -> Optional[User]:
        return self._users.get(email)

    def create(self, user: User) -> User:
        self._users[user.email] = user
        return user

    def __len__(self) -> int:
        return len(self._users)
