"""Test view lookup and layout wrapping through the render paths.

Every render here goes through both ``Renderer.render`` and
``Renderer.slow_render`` to check the two paths agree.
"""

import jinja2
import pytest

from offcycle import (
    InvalidLayoutError,
    MissingLayoutError,
    TemplateMissingError,
    ViewRenderer,
)

from .conftest import User, assert_same_render


class TestTemplateLookup:
    """Template and action lookup under prefixes."""

    def test_template_path(self, renderer):
        result = assert_same_render(renderer, "users/show", locals={"user": "ada"})
        assert result == "<main><p>ada</p></main>"

    def test_action_under_prefix(self, renderer):
        result = assert_same_render(renderer, "show", locals={"user": "ada"})
        assert result == "<main><p>ada</p></main>"

    def test_action_falls_back_to_parent_prefix(self, renderer):
        assert assert_same_render(renderer, "about") == "<main>About example.org</main>"

    def test_template_option(self, renderer):
        result = assert_same_render(renderer, template="test/hello_world")
        assert result == "<main>Hello world!</main>"

    def test_variant_preferred(self, renderer):
        phone = renderer.new(variant="phone")
        result = assert_same_render(phone, "users/show", locals={"user": "ada"})
        assert result == "<main><p>phone ada</p></main>"

    def test_unknown_variant_falls_back(self, renderer):
        watch = renderer.new(variant="watch")
        result = assert_same_render(watch, "users/show", locals={"user": "ada"})
        assert result == "<main><p>ada</p></main>"

    def test_formats_option(self, renderer):
        result = assert_same_render(
            renderer, "show", formats="txt", layout=False, locals={"user": "ada"}
        )
        assert result == "text ada"

    def test_assigns_and_locals(self, renderer):
        result = assert_same_render(
            renderer,
            "users/show",
            assigns={"user": "assigned"},
            locals={"user": "local"},
            layout=False,
        )
        assert result == "<p>local</p>"

    def test_autoescape(self, renderer):
        result = assert_same_render(renderer, "users/show", locals={"user": "<b>"}, layout=False)
        assert result == "<p>&lt;b&gt;</p>"

    def test_missing_template(self, renderer):
        with pytest.raises(TemplateMissingError) as exc_info:
            renderer.render("missing")
        assert "users/missing.html" in exc_info.value.tried
        assert "application/missing.html" in exc_info.value.tried

    def test_empty_render(self, renderer):
        with pytest.raises(TemplateMissingError):
            renderer.render()

    def test_undefined_variable_propagates(self, renderer):
        with pytest.raises(jinja2.UndefinedError):
            renderer.render("users/show")


class TestTextFormats:
    """body/text/plain/html bypass template lookup."""

    def test_plain(self, bare_controller):
        assert assert_same_render(bare_controller.renderer(), plain="hello") == "hello"

    def test_plain_wrapped_in_default_layout(self, renderer):
        assert assert_same_render(renderer, plain="hello") == "<main>hello</main>"

    @pytest.mark.parametrize("fmt", ["body", "text", "plain"])
    def test_text_escaped_inside_layout(self, renderer, fmt):
        result = assert_same_render(renderer, **{fmt: "<script>x</script>"})
        assert result == "<main>&lt;script&gt;x&lt;/script&gt;</main>"

    def test_text_raw_without_layout(self, bare_controller):
        result = assert_same_render(bare_controller.renderer(), plain="<b>x</b>")
        assert result == "<b>x</b>"

    def test_html_escaped(self, bare_controller):
        result = assert_same_render(bare_controller.renderer(), html="<b>")
        assert result == "&lt;b&gt;"

    def test_html_escaped_once_inside_layout(self, renderer):
        assert assert_same_render(renderer, html="<b>") == "<main>&lt;b&gt;</main>"

    def test_body_has_priority(self, bare_controller):
        result = assert_same_render(bare_controller.renderer(), body="b", plain="p", html="h")
        assert result == "b"

    def test_empty_body(self, bare_controller):
        assert assert_same_render(bare_controller.renderer(), body="") == ""


class TestInlineAndFile:
    """Inline source and files outside the view paths."""

    def test_inline_has_no_layout(self, renderer):
        result = assert_same_render(renderer, inline="Hi {{ name }}", locals={"name": "Ada"})
        assert result == "Hi Ada"

    def test_inline_with_explicit_layout(self, renderer):
        result = assert_same_render(
            renderer, inline="Hi {{ name }}", locals={"name": "Ada"}, layout="admin"
        )
        assert result == "<admin>Hi Ada</admin>"

    def test_file(self, bare_controller, tmp_path):
        path = tmp_path / "greeting.html"
        path.write_text("Hi {{ name }}", encoding="utf-8")
        result = assert_same_render(
            bare_controller.renderer(), file=str(path), locals={"name": "Ada"}
        )
        assert result == "Hi Ada"

    def test_missing_file(self, renderer, tmp_path):
        missing = tmp_path / "nope.html"
        with pytest.raises(TemplateMissingError, match="nope.html"):
            renderer.render(file=missing)


class TestPartials:
    """Partials by name, by object, and over collections."""

    def test_partial_by_name(self, renderer):
        result = assert_same_render(renderer, partial="card", locals={"title": "T"})
        assert result == "[card T]"

    def test_partial_from_parent_prefix(self, renderer):
        assert assert_same_render(renderer, partial="footer") == "(footer)"

    def test_partial_with_directory(self, bare_controller):
        result = assert_same_render(
            bare_controller.renderer(), partial="users/card", locals={"title": "T"}
        )
        assert result == "[card T]"

    def test_partial_object(self, renderer, user):
        assert assert_same_render(renderer, user) == "[user Ada]"

    def test_partial_collection(self, renderer):
        result = assert_same_render(
            renderer, partial="users/user", collection=[User("A"), User("B")]
        )
        assert result == "[user A][user B]"

    def test_partial_with_layout(self, renderer):
        result = assert_same_render(
            renderer, partial="card", locals={"title": "T"}, layout="admin"
        )
        assert result == "<admin>[card T]</admin>"

    def test_missing_partial(self, renderer):
        with pytest.raises(TemplateMissingError, match="partial"):
            renderer.render(partial="nope")


class TestLayouts:
    """Implied, explicit, forced, and callable layouts."""

    def test_controller_layout(self, admin_controller):
        result = assert_same_render(
            admin_controller.renderer(), "users/show", locals={"user": "ada"}
        )
        assert result == "<admin><p>ada</p></admin>"

    def test_controller_layout_variant(self, admin_controller):
        phone = admin_controller.renderer().new(variant="phone")
        result = assert_same_render(phone, "users/show", locals={"user": "ada"})
        assert result == "<admin-phone><p>phone ada</p></admin-phone>"

    def test_explicit_layout(self, renderer):
        result = assert_same_render(renderer, "users/show", layout="admin", locals={"user": "a"})
        assert result == "<admin><p>a</p></admin>"

    def test_layout_disabled(self, renderer):
        result = assert_same_render(renderer, "users/show", layout=False, locals={"user": "a"})
        assert result == "<p>a</p>"

    def test_no_implied_layout(self, bare_controller):
        result = assert_same_render(
            bare_controller.renderer(), "users/show", locals={"user": "a"}
        )
        assert result == "<p>a</p>"

    def test_forced_layout_missing(self, bare_controller):
        with pytest.raises(MissingLayoutError) as exc_info:
            bare_controller.renderer().render("users/show", layout=True, locals={"user": "a"})
        assert exc_info.value.tried == ("layouts/bare",)

    def test_forced_layout_found(self, renderer):
        result = assert_same_render(renderer, "users/show", layout=True, locals={"user": "a"})
        assert result == "<main><p>a</p></main>"

    def test_explicit_layout_missing(self, renderer):
        with pytest.raises(TemplateMissingError, match="layout"):
            renderer.render("users/show", layout="nope", locals={"user": "a"})

    def test_callable_layout(self, renderer):
        seen = []

        def choose(controller):
            seen.append(controller)
            return "admin"

        result = assert_same_render(renderer, "users/show", layout=choose, locals={"user": "a"})
        assert result == "<admin><p>a</p></admin>"
        assert type(seen[0]).__name__ == "UsersController"

    @pytest.mark.parametrize(("choice", "expected"), [(False, "<p>a</p>"), (None, "<p>a</p>")])
    def test_callable_layout_disabled(self, renderer, choice, expected):
        result = renderer.render("users/show", layout=lambda c: choice, locals={"user": "a"})
        assert result == expected

    def test_callable_layout_forcing_default(self, renderer):
        result = renderer.render("users/show", layout=lambda c: True, locals={"user": "a"})
        assert result == "<main><p>a</p></main>"

    def test_callable_layout_bad_result(self, renderer):
        with pytest.raises(InvalidLayoutError):
            renderer.render("users/show", layout=lambda c: 42, locals={"user": "a"})


class TestViewRenderer:
    """ViewRenderer used directly."""

    def test_candidates(self):
        view = ViewRenderer(jinja2.DictLoader({}))
        assert view.candidates("users/show", variant=["phone"]) == [
            "users/show+phone.html",
            "users/show.html",
            "users/show",
        ]

    def test_candidates_multiple_formats(self):
        view = ViewRenderer(jinja2.DictLoader({}), formats=("html", "txt"))
        assert view.candidates("show") == ["show.html", "show.txt", "show"]

    def test_exists(self):
        view = ViewRenderer(jinja2.DictLoader({"a/b.html": ""}))
        assert view.exists("a/b", {}) is True
        assert view.exists("a/c", {}) is False

    def test_find_template_prefers_variant(self):
        view = ViewRenderer(jinja2.DictLoader({"a.html": "plain", "a+phone.html": "phone"}))
        template = view.find_template(["a"], {"variant": ["phone"]})
        assert template.render() == "phone"
