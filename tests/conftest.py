"""Pytest configuration and fixtures for offcycle tests."""

import jinja2
import pytest

from offcycle import Controller, Renderer, RendererConfig

VIEWS = {
    "users/show.html": "<p>{{ user }}</p>",
    "users/show+phone.html": "<p>phone {{ user }}</p>",
    "users/show.txt": "text {{ user }}",
    "users/index.html": "{% for u in users %}{{ u }};{% endfor %}",
    "users/_card.html": "[card {{ title }}]",
    "users/_user.html": "[user {{ user.name }}]",
    "application/about.html": "About {{ request.host }}",
    "application/_footer.html": "(footer)",
    "test/hello_world.html": "Hello world!",
    "layouts/application.html": "<main>{{ content }}</main>",
    "layouts/admin.html": "<admin>{{ content }}</admin>",
    "layouts/admin+phone.html": "<admin-phone>{{ content }}</admin-phone>",
}

VIEW_LOADER = jinja2.DictLoader(VIEWS)


class ApplicationController(Controller):
    view_loader = VIEW_LOADER
    routes = {"root": "/"}


class UsersController(ApplicationController):
    pass


class AdminController(ApplicationController):
    layout = "admin"


class BareController(Controller):
    """Controller with no layout of its own and no application prefix."""

    view_loader = VIEW_LOADER


class User:
    """Model-like object rendered through users/_user."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"User({self.name!r})"


@pytest.fixture
def users_controller():
    """UsersController class (prefixes: users, application)."""
    return UsersController


@pytest.fixture
def admin_controller():
    """AdminController class with an explicit ``admin`` layout."""
    return AdminController


@pytest.fixture
def bare_controller():
    """Controller with no implied layout."""
    return BareController


@pytest.fixture
def renderer():
    """Renderer bound to UsersController with default environment."""
    return UsersController.renderer()


@pytest.fixture
def unbound_renderer():
    """Renderer whose config has no controller."""
    return Renderer(RendererConfig())


@pytest.fixture
def user():
    return User("Ada")


def assert_same_render(renderer: Renderer, *args: object, **options: object) -> str:
    """Assert the fast and slow render paths agree, returning the output.

    Args:
        renderer: Renderer to exercise
        args: Positional ``render`` argument (zero or one)
        options: Render options
    """
    fast = renderer.render(*args, **options)
    slow = renderer.slow_render(*args, **options)
    assert fast == slow, (
        f"Render paths disagree:\n  render: {fast!r}\n  slow_render: {slow!r}"
    )
    return fast
