from __future__ import annotations

from pathlib import Path

import pytest

from offcycle import Controller, Renderer

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class ApplicationController(Controller):
    view_paths = [str(TEMPLATE_DIR)]


class PostsController(ApplicationController):
    pass


class Post:
    def __init__(self, title: str, tags: list[str]):
        self.title = title
        self.tags = tags


@pytest.fixture(scope="session")
def renderer() -> Renderer:
    """Renderer bound to PostsController, warmed so template loading is excluded."""
    renderer = PostsController.renderer()
    renderer.render(template="test/hello_world")
    return renderer


@pytest.fixture(scope="session")
def post() -> Post:
    return Post("Benchmarks", ["python", "jinja2", "offcycle"])


@pytest.fixture(scope="session")
def posts() -> list[Post]:
    return [Post(f"Post {i}", []) for i in range(100)]
