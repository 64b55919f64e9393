"""Partials -- render fragments for e-mails, jobs, or websocket pushes.

A model-like object renders through its partial (``comments/_comment``)
and never gets a layout unless one is asked for.

Run:
    python app.py
"""

import jinja2

from offcycle import Controller

templates = {
    "layouts/application.html": "<html>{{ content }}</html>",
    "comments/_comment.html": "<li>{{ comment.author }}: {{ comment.body }}</li>",
}


class Comment:
    def __init__(self, author: str, body: str):
        self.author = author
        self.body = body


class ApplicationController(Controller):
    view_loader = jinja2.DictLoader(templates)


class CommentsController(ApplicationController):
    pass


comments = [Comment("ada", "First!"), Comment("grace", "<script>")]

# Object: partial path derived from the class name
single = CommentsController.render(comments[0])

# Collection: each item exposed as ``comment``
listing = CommentsController.render(partial="comment", collection=comments)

# Partials only get a layout when one is given
wrapped = CommentsController.render(comments[0], layout="application")


def main() -> None:
    print(single)
    print(listing)
    print(wrapped)


if __name__ == "__main__":
    main()
