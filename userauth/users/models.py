"""
SQLAlchemy models for the user directory.

Models:
- User: account record with credentials, profile and token state
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Subscription(enum.Enum):
    """Subscription plan enum."""

    STARTER = "starter"
    PRO = "pro"
    BUSINESS = "business"


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User account record."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String(128), nullable=False)

    # Profile
    gender = Column(String(20))
    avatar_url = Column(String(512))
    subscription = Column(String(20), nullable=False, default=Subscription.STARTER.value)

    # Token state
    verification_token = Column(String(64), index=True)
    token = Column(String(1024))

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self):
        return f"<User(email='{self.email}', subscription='{self.subscription}')>"

    def to_record(self) -> "UserRecord":
        return UserRecord(
            id=self.id,
            email=self.email,
            password_hash=self.password_hash,
            gender=self.gender,
            avatar_url=self.avatar_url,
            subscription=self.subscription,
            verification_token=self.verification_token,
            token=self.token,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class UserRecord:
    """Detached snapshot of a :class:`User` row."""

    id: str
    email: str
    password_hash: str
    gender: Optional[str] = None
    avatar_url: Optional[str] = None
    subscription: str = Subscription.STARTER.value
    verification_token: Optional[str] = None
    token: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_verified(self) -> bool:
        return self.verification_token is None

    @property
    def is_logged_in(self) -> bool:
        return self.token is not None

    def public_profile(self) -> dict:
        """Profile fields safe to return from the register endpoint."""
        return {
            "email": self.email,
            "subscription": self.subscription,
            "gender": self.gender,
            "avatarURL": self.avatar_url,
        }


def create_db_engine(db_url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(db_url, echo=False)


def init_db(engine: Engine) -> None:
    """Initialize database and create tables."""
    Base.metadata.create_all(engine)
