"""
User Repository Interface.
Defines the data access operations the Account Store relies on.
"""

from typing import Optional, Protocol

from moviehub.domain.models.user import User


class UserRepository(Protocol):
    """Interface for user storage. Emails are passed already normalized."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a single user by normalized email."""
        ...

    def create(self, user: User) -> User:
        """Store a new user and return it."""
        ...
