"""
Session token issuing and verification.

Tokens are HS256 JWTs whose ``id`` claim holds the user id. They carry an
``exp`` claim only when a lifetime is configured.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from userauth.errors import InvalidTokenError

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Signs and verifies session tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration_hours: Optional[int] = None,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expiration_hours = expiration_hours

    def issue(self, user_id: str) -> str:
        """Create a signed token for ``user_id``."""
        now = datetime.now(timezone.utc)
        # jti keeps two tokens issued within the same second distinct
        payload = {"id": user_id, "iat": now, "jti": uuid.uuid4().hex}
        if self.expiration_hours:
            payload["exp"] = now + timedelta(hours=self.expiration_hours)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Return the user id embedded in ``token``.

        Raises InvalidTokenError on a bad signature, malformed token,
        expiry, or a missing ``id`` claim.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired")
            raise InvalidTokenError("Token expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            raise InvalidTokenError(str(e))

        user_id = payload.get("id")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Token payload has no user id")
        return user_id
