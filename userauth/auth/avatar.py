"""Default avatar URLs for new accounts."""

from __future__ import annotations

import hashlib
from typing import Protocol
from urllib.parse import urlencode


class AvatarGenerator(Protocol):
    def generate(self, email: str) -> str:
        ...


class GravatarAvatarGenerator:
    """Gravatar identicon keyed on the MD5 of the normalised email."""

    BASE_URL = "https://www.gravatar.com/avatar"

    def __init__(self, size: int = 250, default: str = "identicon"):
        self.size = size
        self.default = default

    def generate(self, email: str) -> str:
        digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
        query = urlencode({"s": self.size, "d": self.default})
        return f"{self.BASE_URL}/{digest}?{query}"
