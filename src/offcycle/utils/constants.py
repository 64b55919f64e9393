"""Shared constants for offcycle.

Option keys and defaults used by both the normalizer and the view layer.
"""

from __future__ import annotations

# Text formats that bypass template lookup, highest priority first
RENDER_FORMATS_IN_PRIORITY: tuple[str, ...] = ("body", "text", "plain", "html")

# Conventional directory holding layout templates
LAYOUTS_DIR = "layouts"

# Any of these keys means the caller named the template source directly,
# so controller prefixes are not needed for lookup
EXPLICIT_SOURCE_KEYS: frozenset[str] = frozenset({"partial", "file", "template"})

# Renders that are not wrapped in a layout unless one is asked for
LAYOUTLESS_KEYS: frozenset[str] = frozenset({"inline", "partial"})

# Template formats tried when the options do not name any
DEFAULT_FORMATS: tuple[str, ...] = ("html",)
