"""
Configuration management for userauth.

Loads settings from config.yaml and environment variables.
Environment variables always win over the YAML file.
"""

from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_FILE = PROJECT_ROOT / "config.yaml"
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_COST_FACTOR = 6
BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration from YAML file."""
    path = path or CONFIG_FILE
    if path.exists():
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    return get_default_config()


def get_default_config() -> dict[str, Any]:
    """Return default configuration if config.yaml doesn't exist."""
    return {
        "auth": {
            "jwt_algorithm": "HS256",
            "jwt_expiration_hours": None,
            "bcrypt_cost_factor": 6,
        },
        "server": {
            "public_base_url": "http://localhost:8000",
        },
        "email": {
            "from": "noreply@localhost",
            "smtp_host": "smtp.gmail.com",
            "smtp_port": 587,
            "smtp_use_tls": True,
        },
    }


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def _get_int(key: str, default: Optional[int]) -> Optional[int]:
    """Read an integer env var, falling back to ``default`` on bad input."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {key}: {raw!r}, using {default}")
        return default


def _cost_factor(value: Any) -> int:
    """bcrypt accepts 4..31 rounds; anything else falls back to the default."""
    try:
        rounds = int(value)
    except (TypeError, ValueError):
        rounds = None
    if rounds is None or not BCRYPT_MIN_ROUNDS <= rounds <= BCRYPT_MAX_ROUNDS:
        logger.warning(
            f"BCRYPT_COST_FACTOR {value!r} outside {BCRYPT_MIN_ROUNDS}..{BCRYPT_MAX_ROUNDS}, "
            f"using {DEFAULT_COST_FACTOR}"
        )
        return DEFAULT_COST_FACTOR
    return rounds


def _get_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _get_str(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key, "").strip()
    return value or default


@dataclass(frozen=True)
class AuthConfig:
    """Process-wide settings, built once and passed to the services."""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: Optional[int] = None
    bcrypt_cost_factor: int = 6
    public_base_url: str = "http://localhost:8000"
    database_url: str = f"sqlite:///{DATA_DIR}/users.db"

    # Email delivery
    sendgrid_api_key: Optional[str] = None
    email_from: str = "noreply@localhost"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True

    @property
    def sendgrid_configured(self) -> bool:
        return bool(self.sendgrid_api_key)

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_user and self.smtp_password)

    def verification_link(self, verification_token: str) -> str:
        """Build the public link that consumes ``verification_token``."""
        return f"{self.public_base_url.rstrip('/')}/auth/verify/{verification_token}"


def load_auth_config(path: Optional[Path] = None) -> AuthConfig:
    """
    Build an :class:`AuthConfig` from config.yaml and the environment.

    A missing ``JWT_SECRET`` yields a random per-process secret, so tokens
    stop verifying after a restart.
    """
    config = load_config(path)
    auth = _section(config, "auth")
    server = _section(config, "server")
    email = _section(config, "email")

    jwt_secret = _get_str("JWT_SECRET")
    if not jwt_secret:
        logger.warning("JWT_SECRET not set - using a random secret for this process")
        jwt_secret = secrets.token_hex(32)

    return AuthConfig(
        jwt_secret=jwt_secret,
        jwt_algorithm=_get_str("JWT_ALGORITHM", auth.get("jwt_algorithm", "HS256")),
        jwt_expiration_hours=_get_int(
            "JWT_EXPIRATION_HOURS", auth.get("jwt_expiration_hours")
        ),
        bcrypt_cost_factor=_cost_factor(
            _get_int("BCRYPT_COST_FACTOR", auth.get("bcrypt_cost_factor", DEFAULT_COST_FACTOR))
        ),
        public_base_url=_get_str(
            "HOST_NAME", server.get("public_base_url", "http://localhost:8000")
        ),
        database_url=get_database_url(),
        sendgrid_api_key=_get_str("SENDGRID_API_KEY"),
        email_from=_get_str("EMAIL_FROM", email.get("from", "noreply@localhost")),
        smtp_host=_get_str("SMTP_HOST", email.get("smtp_host", "smtp.gmail.com")),
        smtp_port=_get_int("SMTP_PORT", email.get("smtp_port", 587)),
        smtp_user=_get_str("SMTP_USER"),
        smtp_password=_get_str("SMTP_PASSWORD"),
        smtp_use_tls=_get_bool("SMTP_USE_TLS", email.get("smtp_use_tls", True)),
    )


def get_database_url() -> str:
    """Get database URL from environment or default."""
    default_db = f"sqlite:///{DATA_DIR}/users.db"
    url = os.getenv("DATABASE_URL", default_db)
    if url == default_db:
        DATA_DIR.mkdir(exist_ok=True)
    return url
