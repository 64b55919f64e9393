"""offcycle: render controller views outside the request/response cycle.

Builds a minimal request environment for a controller class and turns loose
``render(...)`` calls into canonical options for the view layer.

Quickstart:
    >>> from offcycle import Controller
    >>> class ApplicationController(Controller):
    ...     view_paths = ["templates/"]
    >>> class UsersController(ApplicationController):
    ...     pass
    >>> UsersController.render("show", locals={"user": user})
    >>> UsersController.render("users/show")            # template path
    >>> UsersController.render(user)                    # partial users/_user
    >>> UsersController.render(inline="Hi {{ name }}", locals={"name": "Ada"})

Custom environment:
    >>> renderer = UsersController.renderer().new(https=True, variant="phone")
    >>> renderer.render("show")                         # tries users/show+phone.html first

Normalization on its own:
    >>> from offcycle import normalize_render_args
    >>> normalize_render_args("show", {"layout": "admin"}, prefixes=["users"])
    {'action': 'show', 'prefixes': ['users'], 'template': 'show', 'layout': 'layouts/admin'}

Architecture:
render(args) → normalize_render_args → canonical options → ViewRenderer → Jinja2

Thread-Safety:
Normalization is a pure function. Renderer configs are frozen, and each
render builds its own controller instance.

"""

from offcycle.controller import Controller
from offcycle.environment import DEFAULT_ENV, build_env, normalize_env_keys
from offcycle.exceptions import (
    DoubleRenderError,
    ErrorCode,
    InvalidLayoutError,
    MissingControllerError,
    MissingLayoutError,
    RenderError,
    TemplateMissingError,
    UnsupportedOptionError,
)
from offcycle.layout import (
    DEFAULT_LAYOUT,
    DeferredLayout,
    ResolverKind,
    prefix_layout_name,
    resolve_layout_option,
)
from offcycle.options import ActionKind, classify_action, normalize_render_args
from offcycle.renderer import Renderer, RendererConfig
from offcycle.request import Request
from offcycle.view import ViewRenderer

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ENV",
    "DEFAULT_LAYOUT",
    "ActionKind",
    "Controller",
    "DeferredLayout",
    "DoubleRenderError",
    "ErrorCode",
    "InvalidLayoutError",
    "MissingControllerError",
    "MissingLayoutError",
    "RenderError",
    "Renderer",
    "RendererConfig",
    "Request",
    "ResolverKind",
    "TemplateMissingError",
    "UnsupportedOptionError",
    "ViewRenderer",
    "build_env",
    "classify_action",
    "normalize_env_keys",
    "normalize_render_args",
    "prefix_layout_name",
    "resolve_layout_option",
]
