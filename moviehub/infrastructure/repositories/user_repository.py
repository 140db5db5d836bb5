"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from moviehub.domain.models.user import User
from moviehub.domain.repositories.user_repository import UserRepository


class SQLAlchemyUserRepository(UserRepository):
    """User repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
