"""Render controller views without a controller action.

A `Renderer` pairs an immutable `RendererConfig` (controller class plus
environment defaults) with one concrete request environment:

    >>> renderer = UsersController.renderer()
    >>> renderer.render("users/show", locals={"user": user})

    >>> secure = renderer.new(https=True, method="post")
    >>> secure.env["HTTPS"], secure.env["REQUEST_METHOD"]
    ('on', 'POST')

Two render paths exist:

- `Renderer.render` (fast): normalizes the arguments itself and hands the
  canonical options straight to ``render_to_body``.
- `Renderer.slow_render`: goes through the controller's full
  ``render_to_string`` cycle.

Both produce the same output for the same arguments.

Thread-Safety:
Configs and renderers are never mutated after construction. Each render
builds its own controller instance.

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from offcycle.environment import DEFAULT_ENV, build_env
from offcycle.exceptions import MissingControllerError
from offcycle.options import normalize_render_args

if TYPE_CHECKING:
    from offcycle.controller import Controller

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RendererConfig:
    """Per-controller renderer configuration.

    Attributes:
        controller: Controller class to render with (None means unbound)
        defaults: Environment defaults, read-only
    """

    controller: type[Controller] | None = None
    defaults: Mapping[str, Any] = field(default_factory=lambda: dict(DEFAULT_ENV))

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    def with_defaults(self, **defaults: Any) -> RendererConfig:
        """Return a config with ``defaults`` merged over the current ones."""
        return replace(self, defaults={**self.defaults, **defaults})


class Renderer:
    """Renders templates for a controller class outside a request.

    Attributes:
        config: Controller binding and environment defaults
        env: Normalized environ the controller instance is built with
    """

    __slots__ = ("_overrides", "config", "env")

    def __init__(self, config: RendererConfig, env: Mapping[str, Any] | None = None):
        self.config = config
        self._overrides = dict(env or {})
        controller = config.controller
        routes = controller.routes if controller is not None else None
        self.env = build_env(config.defaults, self._overrides, routes)

    @classmethod
    def for_controller(cls, controller: type[Controller]) -> Renderer:
        """Renderer bound to ``controller`` with the default environment."""
        return cls(RendererConfig(controller=controller))

    @property
    def controller(self) -> type[Controller] | None:
        return self.config.controller

    def new(self, env: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Renderer:
        """Renderer with the same config and a different environment.

        Example:
            >>> renderer.new(http_host="shop.example.com", https=True)
        """
        return type(self)(self.config, {**(env or {}), **kwargs})

    def with_defaults(self, **defaults: Any) -> Renderer:
        """Renderer whose config merges ``defaults``, keeping this env's overrides."""
        return type(self)(self.config.with_defaults(**defaults), self._overrides)

    def _build_instance(self) -> Controller:
        controller = self.config.controller
        if controller is None:
            raise MissingControllerError()
        return controller.build_with_env(self.env)

    def render(self, action: object = None, /, **options: Any) -> str:
        """Render a template with any options ``render_to_string`` accepts.

        Args:
            action: Template path, action name, options mapping, or partial object
            **options: Render options (``template``, ``layout``, ``locals``, ...)

        Returns:
            Rendered output

        Raises:
            MissingControllerError: If the config has no controller
            InvalidLayoutError: If ``layout`` has an unrecognized type
            TemplateMissingError: If no template matches
        """
        instance = self._build_instance()
        normalized = normalize_render_args(
            action,
            options,
            variant=instance.request.variant,
            prefixes=instance._prefixes,
            action_name=instance.action_name,
        )
        logger.debug(f"Rendering {type(instance).__name__} with options {sorted(normalized)}")
        return instance.render_to_body(normalized)

    def slow_render(self, action: object = None, /, **options: Any) -> str:
        """Render through the controller's ``render_to_string`` cycle."""
        instance = self._build_instance()
        return instance.render_to_string(action, **options)

    def __repr__(self) -> str:
        name = self.controller.__name__ if self.controller is not None else None
        return f"<Renderer controller={name}>"
