"""Tests for the userauth CLI."""

import asyncio

import pytest
from typer.testing import CliRunner

from userauth.main import app

runner = CliRunner()


@pytest.fixture
def db_env(monkeypatch, tmp_path):
    """Point the CLI at a throwaway SQLite file."""
    url = f"sqlite:///{tmp_path}/users.db"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("JWT_SECRET", "cli-secret")
    monkeypatch.setenv("BCRYPT_COST_FACTOR", "4")
    monkeypatch.delenv("SENDGRID_API_KEY", raising=False)
    monkeypatch.delenv("SMTP_USER", raising=False)
    return url


def _register(email="a@x.com"):
    from userauth.auth.email import LoggingEmailSender
    from userauth.auth.service import AuthService
    from userauth.config import load_auth_config
    from userauth.web.server import build_sql_directory

    config = load_auth_config()
    service = AuthService(
        config,
        build_sql_directory(config.database_url),
        email_sender=LoggingEmailSender(config.email_from),
    )
    return asyncio.run(service.register(email, "p1"))


class TestCli:
    """Tests for CLI commands."""

    def test_init_db(self, db_env):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database initialized" in result.output

    def test_users_show(self, db_env):
        _register()

        result = runner.invoke(app, ["users", "show", "a@x.com"])

        assert result.exit_code == 0
        assert "a@x.com" in result.output
        assert "starter" in result.output

    def test_users_show_unknown(self, db_env):
        runner.invoke(app, ["init-db"])

        result = runner.invoke(app, ["users", "show", "b@x.com"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_users_verify(self, db_env):
        user = _register()

        result = runner.invoke(app, ["users", "verify", user.verification_token])
        assert result.exit_code == 0
        assert "Verified a@x.com" in result.output

        again = runner.invoke(app, ["users", "verify", user.verification_token])
        assert again.exit_code == 1
        assert "User not found" in again.output
