"""Exceptions for offcycle rendering.

Exception Hierarchy:
RenderError (base)
├── InvalidLayoutError        # Layout option of an unrecognized type
├── UnsupportedOptionError    # Option with no meaning outside a request
├── MissingControllerError    # Renderer has no controller bound
├── DoubleRenderError         # Controller rendered twice in one cycle
└── TemplateMissingError      # No template matched any candidate name
    └── MissingLayoutError    # Forced default layout could not be found

Each error carries an optional `ErrorCode`, so callers can match on a stable
identifier instead of parsing messages:

    >>> try:
    ...     renderer.render("show", layout=42)
    ... except RenderError as e:
    ...     print(e.format_compact())
    OC-OPT-001: String, callable, DEFAULT_LAYOUT, True, or False expected for 'layout'; you passed 42

"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class ErrorCode(Enum):
    """Searchable error codes for offcycle errors.

    Format: OC-{CATEGORY}-{NUMBER}
    Categories: OPT (option normalization), CTL (controller binding),
    VEW (view lookup)
    """

    # Option normalization (OC-OPT-xxx)
    INVALID_LAYOUT = "OC-OPT-001"
    UNSUPPORTED_OPTION = "OC-OPT-002"

    # Controller binding (OC-CTL-xxx)
    MISSING_CONTROLLER = "OC-CTL-001"
    DOUBLE_RENDER = "OC-CTL-002"

    # View lookup (OC-VEW-xxx)
    TEMPLATE_MISSING = "OC-VEW-001"
    MISSING_LAYOUT = "OC-VEW-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'options', 'controller', 'view')."""
        prefix = self.value.split("-")[1]
        return {
            "OPT": "options",
            "CTL": "controller",
            "VEW": "view",
        }.get(prefix, "unknown")


class RenderError(Exception):
    """Base exception for all offcycle errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-line summary prefixed with its code.

        Returns:
            The message, prefixed with the error code when one is set.
        """
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class InvalidLayoutError(RenderError, TypeError):
    """Layout option is not a string, callable, sentinel, or boolean.

    Example:
        >>> normalize_render_args("show", {"layout": 42})
        InvalidLayoutError: String, callable, DEFAULT_LAYOUT, True, or False
        expected for 'layout'; you passed 42
    """

    code = ErrorCode.INVALID_LAYOUT

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            "String, callable, DEFAULT_LAYOUT, True, or False expected for "
            f"'layout'; you passed {value!r}"
        )


class UnsupportedOptionError(RenderError, ValueError):
    """Render option that only makes sense inside a request cycle."""

    code = ErrorCode.UNSUPPORTED_OPTION

    def __init__(self, option: str, reason: str):
        self.option = option
        self.reason = reason
        super().__init__(f"Unsupported render option '{option}': {reason}")


class MissingControllerError(RenderError, RuntimeError):
    """Renderer was asked to render without a controller binding."""

    code = ErrorCode.MISSING_CONTROLLER

    def __init__(self, message: str = "missing controller"):
        super().__init__(message)


class DoubleRenderError(RenderError, RuntimeError):
    """A controller instance rendered its response more than once."""

    code = ErrorCode.DOUBLE_RENDER

    def __init__(self, controller_name: str):
        super().__init__(
            f"Render was called multiple times on {controller_name}; "
            "a controller may only render once per instance"
        )


class TemplateMissingError(RenderError, LookupError):
    """No template matched any candidate name.

    Attributes:
        name: Logical template name that was requested
        tried: Concrete names the loader was asked for, in order
    """

    code = ErrorCode.TEMPLATE_MISSING

    def __init__(self, name: str, tried: Sequence[str] = (), kind: str = "template"):
        self.name = name
        self.tried = tuple(tried)
        msg = f"Missing {kind} '{name}'"
        if self.tried:
            msg += f"; tried: {', '.join(self.tried)}"
        super().__init__(msg)


class MissingLayoutError(TemplateMissingError):
    """Default layout was required but none could be found."""

    code = ErrorCode.MISSING_LAYOUT

    def __init__(self, controller_name: str, tried: Sequence[str] = ()):
        self.controller_name = controller_name
        super().__init__(f"default layout for {controller_name}", tried, kind="layout")
