"""
FastAPI web server for userauth.

``create_app`` wires configuration, the user directory and the email sender
into an AuthService and mounts the routers. Run it with
``uvicorn --factory userauth.web.server:create_app`` or ``userauth serve``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from userauth import __version__
from userauth.auth.email import EmailSender
from userauth.auth.service import AuthService
from userauth.config import AuthConfig, load_auth_config
from userauth.errors import AuthError
from userauth.users.directory import SqlUserDirectory, UserDirectory
from userauth.users.models import create_db_engine, init_db
from userauth.web.routes import auth_router, system_router, users_router
from userauth.web.schemas import message_response

logger = logging.getLogger(__name__)


def build_sql_directory(database_url: str) -> SqlUserDirectory:
    """Create tables if needed and return a directory bound to ``database_url``."""
    from sqlalchemy.orm import sessionmaker

    engine = create_db_engine(database_url)
    init_db(engine)
    return SqlUserDirectory(sessionmaker(bind=engine, expire_on_commit=False))


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(
        message_response(exc.message),
        status_code=exc.status_code,
        headers=exc.headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(message_response("Internal server error"), status_code=500)


def create_app(
    config: Optional[AuthConfig] = None,
    directory: Optional[UserDirectory] = None,
    email_sender: Optional[EmailSender] = None,
) -> FastAPI:
    """Build the application; unspecified collaborators come from config."""
    if config is None:
        config = load_auth_config()
    if directory is None:
        directory = build_sql_directory(config.database_url)

    app = FastAPI(
        title="userauth",
        description="Email/password authentication with single-session bearer tokens",
        version=__version__,
    )
    app.state.config = config
    app.state.auth_service = AuthService(config, directory, email_sender=email_sender)

    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    return app
