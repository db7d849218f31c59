# tracker/models/user.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.orm import relationship, validates

from tracker.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_identity(value: str) -> str:
    """Usernames and emails are compared trimmed and lower-cased."""
    return (value or "").strip().lower()


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(length=64), unique=True, index=True, nullable=False)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=255), nullable=False)
    # Persisted but never issued: no refresh endpoint exists
    refresh_token = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    transactions = relationship(
        "Transaction",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("username", "email")
    def _normalize(self, key, value):
        return normalize_identity(value)

    def __repr__(self):
        return f"<User username={self.username} email={self.email}>"
