"""Layout selection for canonical render options.

A `layout` option arrives in one of several shapes and leaves as one of:

- ``str``: a layout template name, always under ``layouts/``
- callable: resolved later against the controller instance
- `DeferredLayout`: resolved later by the controller's default-layout lookup
- ``None``: render without a layout

Deferred resolution is plain data (`ResolverKind`), not a closure, so
normalized options stay comparable and can be inspected in tests.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from offcycle.exceptions import InvalidLayoutError
from offcycle.utils.constants import LAYOUTS_DIR

logger = logging.getLogger(__name__)

_LAYOUTS_RE = re.compile(rf"\b{LAYOUTS_DIR}")


class _DefaultLayout:
    """Sentinel for "no layout option given"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DEFAULT_LAYOUT"

    def __reduce__(self) -> str:
        return "DEFAULT_LAYOUT"


DEFAULT_LAYOUT: Final = _DefaultLayout()


class ResolverKind(Enum):
    """Which default-layout lookup a deferred layout runs."""

    DEFAULT = "default"
    FORCE_DEFAULT = "force_default"

    @property
    def require(self) -> bool:
        """Whether a missing layout is an error for this lookup."""
        return self is ResolverKind.FORCE_DEFAULT


@dataclass(frozen=True, slots=True)
class DeferredLayout:
    """Layout chosen by the controller at render time.

    Attributes:
        kind: DEFAULT tolerates a missing layout, FORCE_DEFAULT does not
    """

    kind: ResolverKind

    @property
    def require(self) -> bool:
        return self.kind.require


ResolvedLayout = str | Callable[..., Any] | DeferredLayout | None


def prefix_layout_name(name: str) -> str:
    """Place a bare layout name under ``layouts/``.

    Names that already mention the layouts directory are kept as given.

    Example:
        >>> prefix_layout_name("admin")
        'layouts/admin'
        >>> prefix_layout_name("layouts/admin")
        'layouts/admin'
    """
    if _LAYOUTS_RE.search(name):
        return name
    return f"{LAYOUTS_DIR}/{name}"


def resolve_layout_option(layout: object = DEFAULT_LAYOUT) -> ResolvedLayout:
    """Resolve a raw ``layout`` option into its canonical form.

    Args:
        layout: Raw option value, `DEFAULT_LAYOUT` when the caller gave none

    Returns:
        Layout name, callable, `DeferredLayout`, or None

    Raises:
        InvalidLayoutError: If the value is none of the accepted shapes
    """
    # bool before callable: True/False are never layouts to call
    if layout is True:
        return DeferredLayout(ResolverKind.FORCE_DEFAULT)
    if layout is False or layout is None:
        return None
    if layout is DEFAULT_LAYOUT:
        return DeferredLayout(ResolverKind.DEFAULT)
    if isinstance(layout, str):
        return prefix_layout_name(layout)
    if callable(layout):
        return layout
    raise InvalidLayoutError(layout)


def apply_layout(options: dict[str, Any]) -> dict[str, Any]:
    """Pop the raw ``layout`` option and store its resolved form.

    Mutates and returns ``options``.
    """
    resolved = resolve_layout_option(options.pop("layout", DEFAULT_LAYOUT))
    logger.debug(f"Resolved layout option to {resolved!r}")
    options["layout"] = resolved
    return options
