"""Minimal controller for rendering views.

Concrete controllers subclass `Controller` and configure themselves with
plain class attributes:

    class ApplicationController(Controller):
        view_paths = ["app/views"]

    class UsersController(ApplicationController):
        layout = "admin"

    UsersController.render("show", locals={"user": user})

Class Attributes:
    controller_path: View directory, derived from the class name
        (``UsersController`` -> ``users``) unless set explicitly
    abstract: Abstract controllers contribute no view prefix
    view_paths: Directories searched by the Jinja2 FileSystemLoader
    view_loader: Explicit Jinja2 loader, takes precedence over view_paths
    layout: None (look up ``layouts/<prefix>``), a name, False, or a callable
        taking the controller instance
    routes: Opaque routes object copied into the render environment

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

import jinja2

from offcycle.exceptions import DoubleRenderError, MissingLayoutError
from offcycle.layout import prefix_layout_name
from offcycle.options import normalize_render_args
from offcycle.renderer import Renderer, RendererConfig
from offcycle.request import Request
from offcycle.utils.constants import LAYOUTS_DIR
from offcycle.utils.naming import controller_path_for
from offcycle.view import ViewRenderer

logger = logging.getLogger(__name__)


class Controller:
    """Base class for controllers that render views.

    Attributes:
        request: Request the controller was built for
        action_name: Current action; None for renderer-built instances
        response_body: Body stored by `render_response`, None until rendered
    """

    controller_path: ClassVar[str] = ""
    abstract: ClassVar[bool] = True
    view_paths: ClassVar[list[str]] = []
    view_loader: ClassVar[jinja2.BaseLoader | None] = None
    layout: ClassVar[str | bool | Callable[..., Any] | None] = None
    routes: ClassVar[object] = None

    _renderer_config: ClassVar[RendererConfig]
    _view_renderer: ClassVar[ViewRenderer | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "controller_path" not in cls.__dict__:
            cls.controller_path = controller_path_for(cls.__name__)
        if "abstract" not in cls.__dict__:
            cls.abstract = False
        cls._renderer_config = RendererConfig(controller=cls)
        cls._view_renderer = None

    def __init__(self, request: Request | None = None, action_name: str | None = None):
        self.request = request if request is not None else Request({})
        self.action_name = action_name
        self.response_body: str | None = None

    # ------------------------------------------------------------------
    # Class-level rendering
    # ------------------------------------------------------------------

    @classmethod
    def build_with_env(cls, env: Mapping[str, Any]) -> Controller:
        """Build an instance whose request wraps ``env``."""
        return cls(Request(env))

    @classmethod
    def renderer(cls) -> Renderer:
        """Renderer bound to this controller with default environment."""
        return Renderer(cls._renderer_config)

    @classmethod
    def render(cls, action: object = None, /, **options: Any) -> str:
        """Render a view outside a request (shortcut for ``renderer().render``)."""
        return cls.renderer().render(action, **options)

    @classmethod
    def view_renderer(cls) -> ViewRenderer:
        """Jinja2 view renderer for this controller, built on first use."""
        view = cls.__dict__.get("_view_renderer")
        if view is None:
            loader = cls.view_loader
            if loader is None:
                loader = jinja2.FileSystemLoader(cls.view_paths)
            view = ViewRenderer(loader)
            cls._view_renderer = view
        return view

    # ------------------------------------------------------------------
    # Lookup context
    # ------------------------------------------------------------------

    @property
    def _prefixes(self) -> list[str]:
        """View directories searched for bare names, most specific first."""
        return [
            klass.controller_path
            for klass in type(self).__mro__
            if issubclass(klass, Controller)
            and not klass.__dict__.get("abstract", False)
        ]

    def _default_layout(
        self,
        require: bool = False,
        options: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Resolve this controller's ``layout`` setting to a template name.

        Args:
            require: Raise instead of returning None when nothing is found
            options: Render options, for variant and format of the lookup

        Returns:
            Layout template name, or None for no layout

        Raises:
            MissingLayoutError: If ``require`` is set and no layout resolves
        """
        options = options or {}
        setting = type(self).layout
        tried: list[str] = []
        name: str | None = None

        if setting is None:
            view = self.view_renderer()
            for prefix in self._prefixes:
                candidate = f"{LAYOUTS_DIR}/{prefix}"
                tried.append(candidate)
                if view.exists(candidate, options):
                    name = candidate
                    break
        elif isinstance(setting, str):
            name = prefix_layout_name(setting)
        elif callable(setting):
            result = setting(self)
            if isinstance(result, str):
                name = prefix_layout_name(result)

        if name is None and require:
            raise MissingLayoutError(type(self).__name__, tried)
        logger.debug(f"Default layout for {type(self).__name__}: {name!r}")
        return name

    # ------------------------------------------------------------------
    # In-cycle rendering
    # ------------------------------------------------------------------

    def render_response(self, action: object = None, /, **options: Any) -> str:
        """Render and store the response body.

        Raises:
            DoubleRenderError: If this instance already rendered
        """
        if self.response_body is not None:
            raise DoubleRenderError(type(self).__name__)
        normalized = normalize_render_args(
            action,
            options,
            variant=self.request.variant,
            prefixes=self._prefixes,
            action_name=self.action_name,
        )
        self.response_body = self.render_to_body(normalized)
        return self.response_body

    def render_to_string(self, action: object = None, /, **options: Any) -> str:
        """Render like `render_response` but leave no response body behind."""
        body = self.render_response(action, **options)
        self.response_body = None
        return body

    def render_to_body(self, options: Mapping[str, Any]) -> str:
        """Render canonical options through the view layer."""
        return self.view_renderer().render(self, options)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.request!r}>"


Controller._renderer_config = RendererConfig(controller=Controller)
