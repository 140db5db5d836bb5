"""Account service: signup and login rules over an injected user repository."""

import re
import uuid
from datetime import datetime, timezone
from typing import Optional

import structlog
from passlib.context import CryptContext

from moviehub.core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidEmailError,
    MissingFieldsError,
    WeakPasswordError,
)
from moviehub.domain.models.user import User
from moviehub.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


class AccountStore:
    """Creates and authenticates users.

    Rules are checked in a fixed order and the first failure wins, so a
    duplicate email is reported before a malformed one.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def create_user(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> User:
        if _blank(name) or _blank(email) or not password:
            raise MissingFieldsError()

        normalized = normalize_email(email)
        if self.repository.get_by_email(normalized) is not None:
            raise DuplicateUserError()

        if not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError()

        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError()

        user = User(
            id=uuid.uuid4().hex,
            name=name.strip(),
            email=normalized,
            password_hash=hash_password(password),
            created_at=datetime.now(timezone.utc),
        )
        user = self.repository.create(user)
        logger.info("User created", user_id=user.id)
        return user

    def verify_credentials(self, email: Optional[str], password: Optional[str]) -> User:
        if _blank(email) or not password:
            raise MissingFieldsError("Email and password are required")

        user = self.repository.get_by_email(normalize_email(email))
        # Unknown email and wrong password must be indistinguishable to callers.
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected")
            raise InvalidCredentialsError()

        logger.info("User logged in", user_id=user.id)
        return user
