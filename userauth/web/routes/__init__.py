"""
Route modules for the userauth API.

This package contains modular route definitions split by functionality.
"""

from .auth import router as auth_router
from .users import router as users_router
from .system import router as system_router

__all__ = [
    'auth_router',
    'users_router',
    'system_router',
]
