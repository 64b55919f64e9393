"""Hello World -- the simplest offcycle example.

Render a controller view outside any request, with templates held in
memory. No templates directory needed.

Run:
    python app.py
"""

import jinja2

from offcycle import Controller


class ApplicationController(Controller):
    view_loader = jinja2.DictLoader(
        {
            "greetings/hello.html": "Hello, {{ name }}!",
        }
    )


class GreetingsController(ApplicationController):
    pass


# Bare name: looked up under the controller's prefixes (greetings/, application/)
output = GreetingsController.render("hello", locals={"name": "World"})


def main() -> None:
    print(output)
    print()

    # Same template by path, different context
    for name in ["offcycle", "Jinja2", "Python"]:
        print(GreetingsController.render("greetings/hello", locals={"name": name}))


if __name__ == "__main__":
    main()
