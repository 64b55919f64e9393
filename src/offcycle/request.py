"""Read-only request view over a renderer environment."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from offcycle.environment import ROUTES_KEY, VARIANT_KEY


class Request:
    """Minimal request built from an environ mapping.

    Only exposes what templates and controllers commonly need while
    rendering; nothing is parsed from a body or query string.

    Example:
        >>> request = Request({"HTTP_HOST": "example.org", "HTTPS": "on"})
        >>> request.base_url
        'https://example.org'
    """

    __slots__ = ("env",)

    def __init__(self, env: Mapping[str, Any]):
        self.env = env

    @property
    def method(self) -> str:
        return self.env.get("REQUEST_METHOD", "GET")

    @property
    def host(self) -> str:
        return self.env.get("HTTP_HOST", "")

    @property
    def script_name(self) -> str:
        return self.env.get("SCRIPT_NAME", "")

    @property
    def is_secure(self) -> bool:
        return self.env.get("HTTPS") == "on"

    @property
    def scheme(self) -> str:
        return "https" if self.is_secure else "http"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}{self.script_name}"

    @property
    def variant(self) -> tuple[str, ...]:
        """Request variants, highest priority first (empty if none)."""
        return tuple(self.env.get(VARIANT_KEY, ()))

    @property
    def routes(self) -> object:
        return self.env.get(ROUTES_KEY)

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.base_url}>"
