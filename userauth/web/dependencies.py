"""
Shared FastAPI dependencies for authentication/authorization.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from userauth.auth.service import AuthContext, AuthService


def get_auth_service(request: Request) -> AuthService:
    """The AuthService instance attached to the app at startup."""
    return request.app.state.auth_service


async def authorize(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    service: AuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Gate a route behind a ``Bearer <token>`` header.

    Raises UnauthorizedError (rendered as 401) before the route body runs.
    On success the user and token are also stored on ``request.state``.
    """
    context = await service.authorize(authorization)
    request.state.user = context.user
    request.state.token = context.token
    return context

