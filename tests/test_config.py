"""Tests for configuration loading."""

from pathlib import Path

import pytest


class TestLoadAuthConfig:
    """Tests for load_auth_config."""

    def test_env_values(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        monkeypatch.setenv("JWT_SECRET", "env-secret")
        monkeypatch.setenv("JWT_EXPIRATION_HOURS", "12")
        monkeypatch.setenv("BCRYPT_COST_FACTOR", "8")
        monkeypatch.setenv("HOST_NAME", "https://auth.example.com")
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.key")

        config = load_auth_config(tmp_path / "missing.yaml")

        assert config.jwt_secret == "env-secret"
        assert config.jwt_expiration_hours == 12
        assert config.bcrypt_cost_factor == 8
        assert config.public_base_url == "https://auth.example.com"
        assert config.sendgrid_configured

    def test_defaults(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        for key in ("JWT_EXPIRATION_HOURS", "BCRYPT_COST_FACTOR", "HOST_NAME", "SENDGRID_API_KEY",
                    "SMTP_USER", "SMTP_PASSWORD", "JWT_ALGORITHM"):
            monkeypatch.delenv(key, raising=False)

        config = load_auth_config(tmp_path / "missing.yaml")

        assert config.jwt_algorithm == "HS256"
        assert config.jwt_expiration_hours is None
        assert config.bcrypt_cost_factor == 6
        assert config.public_base_url == "http://localhost:8000"
        assert not config.sendgrid_configured
        assert not config.smtp_configured

    def test_missing_secret_is_random(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        monkeypatch.delenv("JWT_SECRET", raising=False)

        first = load_auth_config(tmp_path / "missing.yaml")
        second = load_auth_config(tmp_path / "missing.yaml")

        assert len(first.jwt_secret) == 64
        assert first.jwt_secret != second.jwt_secret

    def test_bad_integer_falls_back(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        monkeypatch.setenv("BCRYPT_COST_FACTOR", "lots")

        assert load_auth_config(tmp_path / "missing.yaml").bcrypt_cost_factor == 6

    @pytest.mark.parametrize("value", ["2", "40", "-1"])
    def test_cost_factor_outside_bcrypt_range_falls_back(self, monkeypatch, tmp_path, value):
        from userauth.config import load_auth_config

        monkeypatch.setenv("BCRYPT_COST_FACTOR", value)

        assert load_auth_config(tmp_path / "missing.yaml").bcrypt_cost_factor == 6

    def test_cost_factor_range_edges_accepted(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        monkeypatch.setenv("BCRYPT_COST_FACTOR", "4")
        assert load_auth_config(tmp_path / "missing.yaml").bcrypt_cost_factor == 4

        monkeypatch.setenv("BCRYPT_COST_FACTOR", "31")
        assert load_auth_config(tmp_path / "missing.yaml").bcrypt_cost_factor == 31

    def test_yaml_cost_factor_outside_range_falls_back(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        monkeypatch.delenv("BCRYPT_COST_FACTOR", raising=False)
        config_file = Path(tmp_path) / "config.yaml"
        config_file.write_text("auth:\n  bcrypt_cost_factor: 99\n")

        assert load_auth_config(config_file).bcrypt_cost_factor == 6

    def test_yaml_file(self, monkeypatch, tmp_path):
        from userauth.config import load_auth_config

        monkeypatch.delenv("HOST_NAME", raising=False)
        monkeypatch.delenv("BCRYPT_COST_FACTOR", raising=False)
        config_file = Path(tmp_path) / "config.yaml"
        config_file.write_text(
            "auth:\n  bcrypt_cost_factor: 10\nserver:\n  public_base_url: https://yaml.example.com\n"
        )

        config = load_auth_config(config_file)

        assert config.bcrypt_cost_factor == 10
        assert config.public_base_url == "https://yaml.example.com"


def test_verification_link():
    from userauth.config import AuthConfig

    config = AuthConfig(jwt_secret="s", public_base_url="https://h.example.com/")

    assert config.verification_link("vt-1") == "https://h.example.com/auth/verify/vt-1"
