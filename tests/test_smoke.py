"""
Smoke tests for userauth.

Quick validation tests that verify:
- All modules import correctly
- FastAPI app starts without errors
- Key routes are registered
- Service entry points are async
"""

import inspect

import pytest


class TestImports:
    """Test that all main modules import without errors."""

    def test_config_imports(self):
        from userauth import config

        assert hasattr(config, "AuthConfig")
        assert hasattr(config, "load_auth_config")

    def test_auth_imports(self):
        from userauth import auth

        assert hasattr(auth, "AuthService")
        assert hasattr(auth, "PasswordHasher")
        assert hasattr(auth, "TokenIssuer")

    def test_users_imports(self):
        from userauth import users

        assert hasattr(users, "SqlUserDirectory")
        assert hasattr(users, "InMemoryUserDirectory")

    def test_web_imports(self):
        from userauth.web import routes, server

        assert hasattr(server, "create_app")
        assert hasattr(routes, "auth_router")


class TestFastAPIApp:
    """Test FastAPI app configuration."""

    def test_app_creates_with_sql_directory(self, auth_config):
        from userauth.users.directory import SqlUserDirectory
        from userauth.web.server import create_app

        app = create_app(auth_config)

        assert app.title == "userauth"
        assert isinstance(app.state.auth_service.directory, SqlUserDirectory)

    def test_app_keeps_injected_empty_directory(self, auth_config):
        from userauth.users.directory import InMemoryUserDirectory
        from userauth.web.server import create_app

        directory = InMemoryUserDirectory()
        app = create_app(auth_config, directory=directory)

        assert app.state.auth_service.directory is directory

    def test_routes_registered(self, client):
        route_paths = {route.path for route in client.app.routes}

        for path in (
            "/health",
            "/auth/register",
            "/auth/login",
            "/auth/logout",
            "/auth/verify",
            "/auth/verify/{verification_token}",
            "/users/current",
        ):
            assert path in route_paths


class TestAsyncService:
    """Service flows are coroutines."""

    @pytest.mark.parametrize(
        "name", ["register", "login", "authorize", "logout", "verify_email", "resend_verification"]
    )
    def test_service_methods_are_async(self, name):
        from userauth.auth.service import AuthService

        assert inspect.iscoroutinefunction(getattr(AuthService, name))

    def test_route_handlers_are_async(self):
        from userauth.web.routes import auth, users

        assert inspect.iscoroutinefunction(auth.register)
        assert inspect.iscoroutinefunction(auth.login)
        assert inspect.iscoroutinefunction(auth.logout)
        assert inspect.iscoroutinefunction(auth.verify)
        assert inspect.iscoroutinefunction(users.current_user)


if __name__ == "__main__":
    # Run with: python -m pytest tests/test_smoke.py -v
    pytest.main([__file__, "-v"])
