"""Tests for the Jinja2 template renderer.

Covers:
- Placeholder substitution in bodies and path patterns
- Conditional sections with and without an else branch
- Unbound variables, including ones only referenced in a condition
- Missing template files and syntax errors
- Listing of the packaged templates
"""

from __future__ import annotations

from pathlib import Path

import pytest

from renew.errors import TemplateError, TemplateNotFoundError, UnboundVariableError
from renew.scaffolder.templates import DEFAULT_TEMPLATE_DIR, TemplateRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


class TestRenderString:
    def test_substitutes_placeholders(self, renderer: TemplateRenderer):
        out = renderer.render_string(
            "defmodule {{ module_name }}.Repo do\nend\n",
            {"module_name": "Shop"},
        )
        assert out == "defmodule Shop.Repo do\nend\n"

    def test_values_are_not_html_escaped(self, renderer: TemplateRenderer):
        out = renderer.render_string(
            "[{{ deps | join(', ') }}]\n{{ config }}",
            {
                "deps": ['{:postgrex, "~> 0.11.2"}', '{:ex_doc, ">= 0.0.0"}'],
                "config": 'database: "shop_dev" & <more>',
            },
        )
        assert out == (
            '[{:postgrex, "~> 0.11.2"}, {:ex_doc, ">= 0.0.0"}]\n'
            'database: "shop_dev" & <more>'
        )

    def test_keeps_trailing_newline(self, renderer: TemplateRenderer):
        assert renderer.render_string("x\n", {}).endswith("\n")

    def test_conditional_without_else_is_omitted(self, renderer: TemplateRenderer):
        body = "start\n{% if ecto %}\nrepo\n{% endif %}\nend\n"
        assert renderer.render_string(body, {"ecto": False}) == "start\nend\n"
        assert renderer.render_string(body, {"ecto": True}) == "start\nrepo\nend\n"

    def test_conditional_else_branch(self, renderer: TemplateRenderer):
        body = 'CMD run {% if supervisor %}foreground{% else %}console{% endif %}'
        assert renderer.render_string(body, {"supervisor": False}) == "CMD run console"
        assert renderer.render_string(body, {"supervisor": True}) == "CMD run foreground"

    def test_unbound_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UnboundVariableError) as excinfo:
            renderer.render_string("{{ missing }}", {}, name="mix/README.md")
        assert "mix/README.md" in str(excinfo.value)

    def test_unbound_variable_in_condition_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UnboundVariableError):
            renderer.render_string("{% if docker %}x{% endif %}", {})

    def test_unbound_variable_is_template_error(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError):
            renderer.render_string("{{ missing }}", {})

    def test_syntax_error(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError, match="Invalid template"):
            renderer.render_string("{% if %}", {})

    def test_filters(self, renderer: TemplateRenderer):
        out = renderer.render_string(
            "{{ application_name | camelize }} {{ application_name | atom }}",
            {"application_name": "hello_world"},
        )
        assert out == "HelloWorld :hello_world"

    def test_rendering_is_deterministic(self, renderer: TemplateRenderer, base_context):
        body = renderer.read_body("mix/mix.exs.j2")
        first = renderer.render_string(body, base_context)
        second = renderer.render_string(body, base_context)
        assert first == second


class TestRenderPath:
    def test_substitutes_application_name(self, renderer: TemplateRenderer):
        out = renderer.render_path("lib/{{ application_name }}/repo.ex", {"application_name": "shop"})
        assert out == "lib/shop/repo.ex"

    def test_plain_path_unchanged(self, renderer: TemplateRenderer):
        assert renderer.render_path("config/.credo.exs", {}) == "config/.credo.exs"

    def test_unbound_variable_in_path(self, renderer: TemplateRenderer):
        with pytest.raises(UnboundVariableError):
            renderer.render_path("lib/{{ app }}.ex", {"application_name": "shop"})


# ---------------------------------------------------------------------------
# File-backed templates
# ---------------------------------------------------------------------------


class TestRenderFile:
    def test_render_packaged_template(self, renderer: TemplateRenderer, base_context):
        out = renderer.render("ecto/lib/repo.ex.j2", base_context)
        assert "defmodule Shop.Repo do" in out
        assert "otp_app: :shop" in out

    def test_missing_template(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateNotFoundError, match="nope.j2"):
            renderer.render("nope.j2", {})

    def test_read_body_is_raw(self, renderer: TemplateRenderer):
        assert "{{ module_name }}" in renderer.read_body("ecto/lib/repo.ex.j2")

    def test_read_body_missing(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateNotFoundError):
            renderer.read_body("missing/file.j2")

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "mix").mkdir()
        (tmp_path / "mix" / "README.md.j2").write_text("# {{ module_name }}\n")
        custom = TemplateRenderer(tmp_path)
        assert custom.render("mix/README.md.j2", {"module_name": "Shop"}) == "# Shop\n"


class TestListTemplates:
    def test_default_dir(self):
        assert DEFAULT_TEMPLATE_DIR.is_dir()

    def test_lists_all(self, renderer: TemplateRenderer):
        templates = renderer.list_templates()
        assert "mix/mix.exs.j2" in templates
        assert "docker/Dockerfile.j2" in templates
        assert templates == sorted(templates)

    def test_prefix(self, renderer: TemplateRenderer):
        templates = renderer.list_templates("amqp")
        assert templates == ["amqp/bin/ci/init-mq.sh.j2", "amqp/env.j2"]

    def test_missing_prefix(self, renderer: TemplateRenderer):
        assert renderer.list_templates("phoenix") == []
