"""
Authentication service for user management.

Handles:
- Registration with email verification
- Login and single-session token storage
- Bearer token authorization
- Logout
- Verification token consumption

Blocking work (bcrypt, database, email) runs in worker threads.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from userauth.auth.avatar import AvatarGenerator, GravatarAvatarGenerator
from userauth.auth.email import EmailSender, build_email_sender
from userauth.auth.passwords import PasswordHasher
from userauth.auth.tokens import TokenIssuer
from userauth.config import AuthConfig
from userauth.errors import (
    BadRequestError,
    ConflictError,
    DuplicateEmailError,
    InternalError,
    InvalidTokenError,
    NotFoundError,
    NotificationError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from userauth.users.directory import UserDirectory
from userauth.users.models import UserRecord

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
WRONG_CREDENTIALS = "Email or password is wrong"
TOKEN_NOT_FOUND = "Token not found"
NOT_AUTHORIZED = "Not authorized"


@dataclass(frozen=True)
class AuthContext:
    """The authorized user and the token they presented."""

    user: UserRecord
    token: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: UserRecord

    def to_response(self) -> dict:
        return {
            "token": self.token,
            "user": {
                "email": self.user.email,
                "subscription": self.user.subscription,
            },
        }


def generate_verification_token() -> str:
    """Generate a random verification token."""
    return str(uuid.uuid4())


class AuthService:
    """Register, login, authorize, logout and verify flows."""

    def __init__(
        self,
        config: AuthConfig,
        directory: UserDirectory,
        email_sender: Optional[EmailSender] = None,
        avatar_generator: Optional[AvatarGenerator] = None,
        hasher: Optional[PasswordHasher] = None,
        tokens: Optional[TokenIssuer] = None,
    ):
        self.config = config
        self.directory = directory
        if email_sender is None:
            email_sender = build_email_sender(config)
        if avatar_generator is None:
            avatar_generator = GravatarAvatarGenerator()
        if hasher is None:
            hasher = PasswordHasher(config.bcrypt_cost_factor)
        if tokens is None:
            tokens = TokenIssuer(
                config.jwt_secret,
                algorithm=config.jwt_algorithm,
                expiration_hours=config.jwt_expiration_hours,
            )
        self.email_sender = email_sender
        self.avatar_generator = avatar_generator
        self.hasher = hasher
        self.tokens = tokens

    async def register(
        self, email: str, password: str, gender: Optional[str] = None
    ) -> UserRecord:
        """
        Create a new, unverified user and send the verification email.

        Raises ConflictError if the email is already registered. A failed
        email send is logged and does not fail the registration.
        """
        existing = await asyncio.to_thread(self.directory.find_by_email, email)
        if existing:
            raise ConflictError("Email in use")

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        avatar_url = self.avatar_generator.generate(email)

        try:
            user = await asyncio.to_thread(
                self.directory.create,
                email=email,
                password_hash=password_hash,
                gender=gender,
                avatar_url=avatar_url,
                verification_token=generate_verification_token(),
            )
        except DuplicateEmailError:
            raise ConflictError("Email in use") from None

        await self._send_verification_email(user)
        return user

    async def _send_verification_email(self, user: UserRecord) -> bool:
        link = self.config.verification_link(user.verification_token)
        try:
            return await asyncio.to_thread(
                self.email_sender.send_verification, user.email, link
            )
        except NotificationError as e:
            logger.warning(f"Verification email to {user.email} not sent: {e}")
            return False

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and start a new session.

        Any previous session token of the user stops authorizing.
        """
        user = await asyncio.to_thread(self.directory.find_by_email, email)
        if not user:
            logger.debug(f"User not found: {email}")
            raise UnauthorizedError(WRONG_CREDENTIALS)

        valid = await asyncio.to_thread(self.hasher.compare, password, user.password_hash)
        if not valid:
            logger.debug(f"Invalid password for: {email}")
            raise UnauthorizedError(WRONG_CREDENTIALS)

        token = self.tokens.issue(user.id)
        updated = await asyncio.to_thread(self.directory.update_token, user.id, token)
        if updated is None:
            raise UnauthorizedError(WRONG_CREDENTIALS)

        logger.info(f"User logged in: {updated.email}")
        return LoginResult(token=token, user=updated)

    async def authorize(self, authorization: Optional[str]) -> AuthContext:
        """
        Resolve an ``Authorization`` header to the current user.

        The token must verify and must equal the user's stored session
        token. Every failure raises UnauthorizedError.
        """
        if not authorization:
            raise UnauthorizedError(TOKEN_NOT_FOUND)

        token = authorization.replace(BEARER_PREFIX, "", 1)

        try:
            user_id = self.tokens.verify(token)
        except InvalidTokenError:
            raise UnauthorizedError(NOT_AUTHORIZED)

        user = await asyncio.to_thread(self.directory.find_by_id, user_id)
        if not user or user.token != token:
            raise UnauthorizedError(NOT_AUTHORIZED)

        return AuthContext(user=user, token=token)

    async def logout(self, context: AuthContext) -> None:
        """Clear the session token of the authorized user."""
        await asyncio.to_thread(self.directory.update_token, context.user.id, None)
        logger.info(f"User logged out: {context.user.email}")

    async def verify_email(self, verification_token: str) -> UserRecord:
        """
        Consume a verification token.

        Raises NotFoundError for unknown (or already consumed) tokens.
        """
        user = await asyncio.to_thread(
            self.directory.find_by_verification_token, verification_token
        )
        if not user:
            raise NotFoundError("User not found")

        updated = await asyncio.to_thread(self.directory.clear_verification_token, user.id)
        if not updated:
            raise InternalError("Internal server error")

        logger.info(f"Email verified: {updated.email}")
        return updated

    async def resend_verification(self, email: str) -> UserRecord:
        """
        Re-send the verification email with the existing token.

        Raises ServiceUnavailableError when the email was not sent.
        """
        user = await asyncio.to_thread(self.directory.find_by_email, email)
        if not user:
            raise NotFoundError("User not found")
        if user.is_verified:
            raise BadRequestError("Verification has already been passed")
        if not await self._send_verification_email(user):
            raise ServiceUnavailableError("Verification email could not be sent")
        return user
