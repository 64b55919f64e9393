"""View rendering for canonical render options.

Consumes the dict produced by `normalize_render_args` and turns it into
output using Jinja2. Template parsing and compilation stay in Jinja2; this
module only decides *which* template to load and how to wrap it.

Lookup order:
1. Text formats (``body``, ``text``, ``plain``, ``html``) bypass templates
2. ``inline`` source
3. ``file`` path on disk
4. ``partial`` (string name or model-like object, optionally a ``collection``)
5. ``template`` (under each prefix unless it already contains ``/``)

Candidate names for a logical name ``users/show`` with variant ``phone``:
    users/show+phone.html, users/show.html, users/show

Layouts:
The body is exposed to the layout as ``content``. Template output and
``html`` are passed as safe markup; ``body``, ``text`` and ``plain`` are
escaped first:

    <html><body>{{ content }}</body></html>

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2
from markupsafe import Markup, escape

from offcycle.exceptions import InvalidLayoutError, TemplateMissingError
from offcycle.layout import DeferredLayout, resolve_layout_option
from offcycle.utils.constants import DEFAULT_FORMATS, RENDER_FORMATS_IN_PRIORITY
from offcycle.utils.naming import partial_path_for

if TYPE_CHECKING:
    from offcycle.controller import Controller

logger = logging.getLogger(__name__)


class ViewRenderer:
    """Jinja2-backed renderer for canonical options.

    Attributes:
        jinja_env: Underlying Jinja2 environment
        formats: Template formats tried when options name none

    Example:
        >>> view = ViewRenderer(jinja2.DictLoader({"users/show.html": "Hi {{ name }}"}))
        >>> view.render(controller, {"template": "show", "prefixes": ["users"],
        ...                          "locals": {"name": "Ada"}, "layout": None})
        'Hi Ada'
    """

    __slots__ = ("formats", "jinja_env")

    def __init__(
        self,
        loader: jinja2.BaseLoader,
        *,
        autoescape: bool = True,
        formats: Iterable[str] = DEFAULT_FORMATS,
    ):
        self.jinja_env = jinja2.Environment(
            loader=loader,
            autoescape=autoescape,
            undefined=jinja2.StrictUndefined,
        )
        self.formats = tuple(formats)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def candidates(
        self,
        name: str,
        *,
        variant: Iterable[str] = (),
        formats: Iterable[str] | None = None,
    ) -> list[str]:
        """Concrete template names for a logical name, most specific first."""
        variants = tuple(variant)
        names: list[str] = []
        for fmt in formats or self.formats:
            names.extend(f"{name}+{v}.{fmt}" for v in variants)
            names.append(f"{name}.{fmt}")
        names.append(name)
        return names

    def find_template(
        self,
        names: Iterable[str],
        options: Mapping[str, Any],
        *,
        kind: str = "template",
    ) -> jinja2.Template:
        """Load the first existing template among the logical ``names``.

        Raises:
            TemplateMissingError: If no candidate exists
        """
        logical = list(names)
        tried = [
            candidate
            for name in logical
            for candidate in self.candidates(
                name,
                variant=_as_tuple(options.get("variant")),
                formats=_as_tuple(options.get("formats")) or None,
            )
        ]
        try:
            template = self.jinja_env.select_template(tried)
        except jinja2.TemplatesNotFound as e:
            raise TemplateMissingError(
                logical[0] if logical else "", tried, kind=kind
            ) from e
        logger.debug(f"Resolved {kind} {logical!r} to {template.name}")
        return template

    def exists(self, name: str, options: Mapping[str, Any]) -> bool:
        """Whether any candidate for ``name`` can be loaded."""
        try:
            self.find_template([name], options)
        except TemplateMissingError:
            return False
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, controller: Controller, options: Mapping[str, Any]) -> str:
        """Render canonical options for ``controller``.

        Args:
            controller: Controller instance the render runs for
            options: Output of `normalize_render_args`

        Returns:
            Rendered output, wrapped in the layout when one resolves

        Raises:
            TemplateMissingError: If the template or an explicit layout is missing
            MissingLayoutError: If a forced default layout is missing
        """
        context = self._context(controller, options)
        body = self._render_body(controller, options, context)

        layout = self._layout_template(controller, options)
        if layout is None:
            return body
        # Only html= and template output count as markup inside a layout
        fmt = _text_format(options)
        content = escape(body) if fmt is not None and fmt != "html" else Markup(body)
        return layout.render({**context, "content": content})

    def _context(self, controller: Controller, options: Mapping[str, Any]) -> dict[str, Any]:
        context: dict[str, Any] = {"controller": controller, "request": controller.request}
        context.update(options.get("assigns") or {})
        context.update(options.get("locals") or {})
        return context

    def _render_body(
        self,
        controller: Controller,
        options: Mapping[str, Any],
        context: dict[str, Any],
    ) -> str:
        fmt = _text_format(options)
        if fmt is not None:
            return str(options[fmt])

        if options.get("inline") is not None:
            return self.jinja_env.from_string(options["inline"]).render(context)

        if options.get("file") is not None:
            return self._render_file(options["file"], context)

        prefixes = options.get("prefixes") or controller._prefixes

        if options.get("partial") is not None:
            return self._render_partial(options, prefixes, context)

        name = options.get("template") or ""
        if not name:
            raise TemplateMissingError("", kind="template")
        names = [name] if "/" in name or not prefixes else [f"{p}/{name}" for p in prefixes]
        return self.find_template(names, options).render(context)

    def _render_file(self, path: str | Path, context: dict[str, Any]) -> str:
        file = Path(path)
        if not file.is_file():
            raise TemplateMissingError(str(path), [str(path)], kind="file")
        return self.jinja_env.from_string(file.read_text("utf-8")).render(context)

    def _render_partial(
        self,
        options: Mapping[str, Any],
        prefixes: list[str],
        context: dict[str, Any],
    ) -> str:
        partial = options["partial"]
        collection = options.get("collection")
        path = partial if isinstance(partial, str) else partial_path_for(partial)
        head, _, base = path.rpartition("/")

        if head:
            names = [f"{head}/_{base}"]
        elif prefixes:
            names = [f"{p}/_{base}" for p in prefixes]
        else:
            names = [f"_{base}"]
        template = self.find_template(names, options, kind="partial")

        if collection is not None:
            return "".join(template.render({**context, base: item}) for item in collection)
        if not isinstance(partial, str):
            context = {**context, base: partial}
        return template.render(context)

    def _layout_template(
        self,
        controller: Controller,
        options: Mapping[str, Any],
    ) -> jinja2.Template | None:
        name = _layout_name(controller, options.get("layout"), options)
        if name is None:
            return None
        return self.find_template([name], options, kind="layout")


def _layout_name(
    controller: Controller,
    layout: object,
    options: Mapping[str, Any],
) -> str | None:
    """Evaluate a resolved layout option down to a template name (or None)."""
    if callable(layout):
        layout = resolve_layout_option(layout(controller))
        if callable(layout):
            raise InvalidLayoutError(layout)
    if isinstance(layout, DeferredLayout):
        return controller._default_layout(layout.require, options)
    if layout is not None and not isinstance(layout, str):
        raise InvalidLayoutError(layout)
    return layout


def _text_format(options: Mapping[str, Any]) -> str | None:
    for fmt in RENDER_FORMATS_IN_PRIORITY:
        if options.get(fmt) is not None:
            return fmt
    return None


def _as_tuple(value: object) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)  # type: ignore[call-overload]
