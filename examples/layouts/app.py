"""Layouts and variants -- how the layout option is resolved.

- No layout option: the controller's own ``layout``, or ``layouts/<prefix>``
- ``layout="name"``: ``layouts/name``
- ``layout=False``: no layout
- ``layout=True``: the default layout, which must exist
- Variants pick ``name+variant.html`` before ``name.html``

Run:
    python app.py
"""

import jinja2

from offcycle import Controller

templates = {
    "layouts/application.html": "<body>{{ content }}</body>",
    "layouts/print.html": "<pre>{{ content }}</pre>",
    "layouts/application+phone.html": "<body class=phone>{{ content }}</body>",
    "invoices/show.html": "Invoice {{ number }}",
    "invoices/show+phone.html": "Inv. {{ number }}",
}


class ApplicationController(Controller):
    view_loader = jinja2.DictLoader(templates)


class InvoicesController(ApplicationController):
    pass


renderer = InvoicesController.renderer()

implied = renderer.render("show", locals={"number": 7})
explicit = renderer.render("show", layout="print", locals={"number": 7})
without = renderer.render("show", layout=False, locals={"number": 7})
phone = renderer.new(variant="phone").render("show", locals={"number": 7})


def main() -> None:
    print("=== Implied layout ===")
    print(implied)
    print("=== Explicit layout ===")
    print(explicit)
    print("=== No layout ===")
    print(without)
    print("=== Phone variant ===")
    print(phone)


if __name__ == "__main__":
    main()
