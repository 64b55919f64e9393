"""Request environment for rendering outside a request.

A renderer needs something that looks like a WSGI environ so controllers can
build their request object. Defaults and overrides are given with
keyword-style keys and normalized to environ keys:

    >>> normalize_env_keys({"http_host": "example.com", "method": "post", "https": True})
    {'HTTP_HOST': 'example.com', 'HTTPS': 'on', 'REQUEST_METHOD': 'POST'}

Keys that are not Python identifiers (``"wsgi.input"``) and keys that are
already upper-case (``"HTTP_ACCEPT"``) are passed through unchanged.

"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

ROUTES_KEY = "offcycle.routes"
VARIANT_KEY = "offcycle.variant"

DEFAULT_ENV: Mapping[str, Any] = MappingProxyType(
    {
        "http_host": "example.org",
        "https": False,
        "method": "get",
        "script_name": "",
        "wsgi.input": b"",
    }
)


def _environ_key(key: object) -> object:
    if isinstance(key, str) and key.isidentifier():
        return key.upper()
    return key


def normalize_env_keys(env: Mapping[str, Any] | None) -> dict[str, Any]:
    """Convert keyword-style keys to environ keys.

    Also maps ``method`` to an upper-case ``REQUEST_METHOD``, ``https`` to
    ``"on"``/``"off"``, and ``variant`` to a tuple under ``offcycle.variant``.
    """
    new_env = {_environ_key(key): value for key, value in (env or {}).items()}
    _handle_method_key(new_env)
    _handle_https_key(new_env)
    _handle_variant_key(new_env)
    return new_env


def _handle_method_key(env: dict[str, Any]) -> None:
    method = env.pop("METHOD", None)
    if method:
        env["REQUEST_METHOD"] = str(method).upper()


def _handle_https_key(env: dict[str, Any]) -> None:
    if "HTTPS" in env:
        env["HTTPS"] = "on" if env["HTTPS"] else "off"


def _handle_variant_key(env: dict[str, Any]) -> None:
    if "VARIANT" not in env:
        return
    variant = env.pop("VARIANT")
    if variant is None:
        env[VARIANT_KEY] = ()
    elif isinstance(variant, str):
        env[VARIANT_KEY] = (variant,)
    else:
        env[VARIANT_KEY] = tuple(variant)


def build_env(
    defaults: Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
    routes: object = None,
) -> dict[str, Any]:
    """Merge normalized defaults with normalized overrides.

    Args:
        defaults: Renderer defaults (keyword-style or environ keys)
        overrides: Per-renderer environment, wins over defaults
        routes: Controller routes, stored opaquely under ``offcycle.routes``

    Returns:
        Fresh environ dict
    """
    env = normalize_env_keys(defaults)
    env.update(normalize_env_keys(overrides))
    env[ROUTES_KEY] = routes
    return env
