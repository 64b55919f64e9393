"""Name conversions for controllers and partials."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """Convert a CamelCase class name to snake_case.

    Example:
        >>> underscore("AdminUsers")
        'admin_users'
        >>> underscore("HTMLPage")
        'html_page'
    """
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def controller_path_for(class_name: str) -> str:
    """Derive the view directory for a controller class name.

    Example:
        >>> controller_path_for("UsersController")
        'users'
    """
    return underscore(class_name.removesuffix("Controller"))


def partial_path_for(obj: object) -> str:
    """Partial path for a model-like object.

    Uses the object's ``to_partial_path()`` when it has one, otherwise the
    pluralized snake_case class name (``User`` -> ``users/user``).
    """
    to_partial_path = getattr(obj, "to_partial_path", None)
    if callable(to_partial_path):
        return str(to_partial_path())
    singular = underscore(type(obj).__name__)
    return f"{singular}s/{singular}"
