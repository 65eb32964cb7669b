"""
User directory: the persistence boundary for user accounts.

``SqlUserDirectory`` stores users through SQLAlchemy; ``InMemoryUserDirectory``
keeps them in a dict for tests and local experiments. Both return detached
:class:`UserRecord` snapshots and normalise emails the same way.
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from userauth.errors import DuplicateEmailError
from userauth.users.models import Subscription, User, UserRecord

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserDirectory(ABC):
    """Lookup and update operations the auth service relies on."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def find_by_verification_token(self, verification_token: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def create(
        self,
        email: str,
        password_hash: str,
        gender: Optional[str] = None,
        avatar_url: Optional[str] = None,
        verification_token: Optional[str] = None,
    ) -> UserRecord:
        """
        Create a user with no session token.

        Raises DuplicateEmailError if the email is already taken.
        """

    @abstractmethod
    def update_token(self, user_id: str, token: Optional[str]) -> Optional[UserRecord]:
        """Set or clear the session token. Returns None for an unknown id."""

    @abstractmethod
    def clear_verification_token(self, user_id: str) -> Optional[UserRecord]:
        """Null out the verification token. Returns None for an unknown id."""


class SqlUserDirectory(UserDirectory):
    """SQLAlchemy-backed directory; one session per operation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _find_one(self, *criteria) -> Optional[UserRecord]:
        session = self._session_factory()
        try:
            user = session.query(User).filter(*criteria).first()
            return user.to_record() if user else None
        finally:
            session.close()

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find_one(User.email == normalize_email(email))

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._find_one(User.id == user_id)

    def find_by_verification_token(self, verification_token: str) -> Optional[UserRecord]:
        return self._find_one(User.verification_token == verification_token)

    def create(
        self,
        email: str,
        password_hash: str,
        gender: Optional[str] = None,
        avatar_url: Optional[str] = None,
        verification_token: Optional[str] = None,
    ) -> UserRecord:
        session = self._session_factory()
        try:
            user = User(
                email=normalize_email(email),
                password_hash=password_hash,
                gender=gender,
                avatar_url=avatar_url,
                subscription=Subscription.STARTER.value,
                verification_token=verification_token,
                token=None,
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            logger.info(f"Created user: {user.email}")
            return user.to_record()
        except IntegrityError:
            session.rollback()
            raise DuplicateEmailError(normalize_email(email))
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _update(self, user_id: str, **fields) -> Optional[UserRecord]:
        session = self._session_factory()
        try:
            user = session.get(User, user_id)
            if user is None:
                return None
            for name, value in fields.items():
                setattr(user, name, value)
            session.commit()
            session.refresh(user)
            return user.to_record()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def update_token(self, user_id: str, token: Optional[str]) -> Optional[UserRecord]:
        return self._update(user_id, token=token)

    def clear_verification_token(self, user_id: str) -> Optional[UserRecord]:
        return self._update(user_id, verification_token=None)


class InMemoryUserDirectory(UserDirectory):
    """Dict-backed directory keyed by user id."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def _first(self, predicate) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if predicate(user):
                    return user
        return None

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        email = normalize_email(email)
        return self._first(lambda u: u.email == email)

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def find_by_verification_token(self, verification_token: str) -> Optional[UserRecord]:
        return self._first(lambda u: u.verification_token == verification_token)

    def create(
        self,
        email: str,
        password_hash: str,
        gender: Optional[str] = None,
        avatar_url: Optional[str] = None,
        verification_token: Optional[str] = None,
    ) -> UserRecord:
        email = normalize_email(email)
        with self._lock:
            if any(u.email == email for u in self._users.values()):
                raise DuplicateEmailError(email)
            user = UserRecord(
                id=str(uuid.uuid4()),
                email=email,
                password_hash=password_hash,
                gender=gender,
                avatar_url=avatar_url,
                verification_token=verification_token,
                token=None,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
        logger.info(f"Created user: {email}")
        return user

    def _update(self, user_id: str, **fields) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, **fields)
            self._users[user_id] = updated
            return updated

    def update_token(self, user_id: str, token: Optional[str]) -> Optional[UserRecord]:
        return self._update(user_id, token=token)

    def clear_verification_token(self, user_id: str) -> Optional[UserRecord]:
        return self._update(user_id, verification_token=None)
