"""Render argument normalization.

Turns the loose calling conventions of ``render`` into one canonical options
dict that the view layer can consume without guessing:

    >>> normalize_render_args("users/show")
    {'template': 'users/show', 'layout': DeferredLayout(kind=<ResolverKind.DEFAULT: 'default'>)}
    >>> normalize_render_args("show", prefixes=["users"])
    {'action': 'show', 'prefixes': ['users'], 'template': 'show', 'layout': ...}
    >>> normalize_render_args(None, {"partial": "card"})
    {'partial': 'card', 'template': ''}

The first positional argument decides what governs resolution:

======================  ==========================================
Argument                Effect
======================  ==========================================
``None``                options used as given
mapping                 replaces the options entirely
``str`` / str enum      ``template`` if it contains ``/``, else ``action``
anything else           ``partial`` (a model-like object or identifier)
======================  ==========================================

Thread-Safety:
Pure function over call-local data. Input mappings are never mutated.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum, auto
from typing import Any

from markupsafe import escape

from offcycle.exceptions import UnsupportedOptionError
from offcycle.layout import apply_layout
from offcycle.utils.constants import EXPLICIT_SOURCE_KEYS, LAYOUTLESS_KEYS


class ActionKind(Enum):
    """Shape of the positional argument to ``render``."""

    EMPTY = auto()
    OPTIONS_OVERRIDE = auto()
    NAME_LIKE = auto()
    OPAQUE_IDENTIFIER = auto()


def classify_action(action: object) -> ActionKind:
    """Classify the positional ``render`` argument.

    String-valued enum members count as names, standing in for symbols.
    """
    if action is None:
        return ActionKind.EMPTY
    if isinstance(action, Mapping):
        return ActionKind.OPTIONS_OVERRIDE
    if isinstance(action, str) or (isinstance(action, Enum) and isinstance(action.value, str)):
        return ActionKind.NAME_LIKE
    return ActionKind.OPAQUE_IDENTIFIER


def _name_of(value: object) -> str:
    # StrEnum members are str instances, but str() of a plain Enum is "Cls.member"
    if isinstance(value, Enum):
        return str(value.value)
    if value is None:
        return ""
    return str(value)


def _unset(value: object) -> bool:
    return value is None or value is False


def normalize_render_args(
    action: object = None,
    options: Mapping[str, Any] | None = None,
    *,
    variant: Iterable[str] | str = (),
    prefixes: Iterable[str] = (),
    action_name: str | None = None,
) -> dict[str, Any]:
    """Build canonical render options from a ``render`` call.

    Args:
        action: Positional argument to ``render`` (see module docs)
        options: Keyword options of the call
        variant: Request variants, highest priority first. A bare string is one variant
        prefixes: Default view-path prefixes of the controller
        action_name: Current action, used by ``partial=True``

    Returns:
        Fresh options dict with ``template`` defaulted and, unless the render
        is a partial or inline, ``layout`` resolved.

    Raises:
        InvalidLayoutError: If ``layout`` has an unrecognized type
        UnsupportedOptionError: For ``nothing=True``, or ``partial=True``
            without an action name
    """
    opts: dict[str, Any] = dict(options) if options else {}

    kind = classify_action(action)
    if kind is ActionKind.OPTIONS_OVERRIDE:
        opts = dict(action)  # type: ignore[call-overload]
    elif kind is ActionKind.NAME_LIKE:
        name = _name_of(action)
        opts["template" if "/" in name else "action"] = name
    elif kind is ActionKind.OPAQUE_IDENTIFIER:
        opts["partial"] = action

    variants = [variant] if isinstance(variant, str) else list(variant)
    if variants:
        opts["variant"] = variants

    _normalize_parity_options(opts, action_name)

    if not (opts.keys() & EXPLICIT_SOURCE_KEYS) and _unset(opts.get("prefixes")):
        opts["prefixes"] = list(prefixes)

    if _unset(opts.get("template")):
        opts["template"] = _name_of(opts.get("action"))

    if not (opts.keys() & LAYOUTLESS_KEYS) or "layout" in opts:
        apply_layout(opts)

    return opts


def _normalize_parity_options(opts: dict[str, Any], action_name: str | None) -> None:
    """Handle base-controller options whose meaning changes off-cycle."""
    if opts.pop("nothing", False):
        raise UnsupportedOptionError(
            "nothing",
            "rendering nothing produces no output outside a request; use body=''",
        )

    if opts.get("partial") is True:
        if not action_name:
            raise UnsupportedOptionError(
                "partial",
                "partial=True needs an action name, and renderer-built controllers have none",
            )
        opts["partial"] = action_name

    if opts.get("html") is not None:
        opts["html"] = escape(opts["html"])
