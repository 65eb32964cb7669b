"""User directory: account model and persistence backends."""

from .models import Subscription, User, UserRecord, init_db
from .directory import (
    InMemoryUserDirectory,
    SqlUserDirectory,
    UserDirectory,
    normalize_email,
)

__all__ = [
    'Subscription',
    'User',
    'UserRecord',
    'init_db',
    'InMemoryUserDirectory',
    'SqlUserDirectory',
    'UserDirectory',
    'normalize_email',
]
