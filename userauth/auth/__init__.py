"""
Authentication module for userauth.

Provides:
- Password hashing and verification
- JWT session token creation and validation
- Email verification
- The AuthService that ties them to the user directory
"""

from .passwords import PasswordHasher
from .tokens import TokenIssuer
from .avatar import GravatarAvatarGenerator
from .email import (
    EmailSender,
    LoggingEmailSender,
    SendGridEmailSender,
    SmtpEmailSender,
    build_email_sender,
)
from .service import AuthContext, AuthService, LoginResult, generate_verification_token

__all__ = [
    'PasswordHasher',
    'TokenIssuer',
    'GravatarAvatarGenerator',
    'EmailSender',
    'LoggingEmailSender',
    'SendGridEmailSender',
    'SmtpEmailSender',
    'build_email_sender',
    'AuthContext',
    'AuthService',
    'LoginResult',
    'generate_verification_token',
]
