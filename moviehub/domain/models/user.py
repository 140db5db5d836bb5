"""User domain model: maps to the 'users' table."""

from sqlalchemy import Column, String, DateTime

from moviehub.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"
