"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which renders template bodies and
destination path patterns with a context dictionary.  The environment uses
``StrictUndefined`` so a template that references a variable missing from the
context fails instead of silently emitting an empty string; scaffolded files
are committed as the project skeleton and an empty value would go unnoticed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from renew.errors import TemplateError, TemplateNotFoundError, UnboundVariableError
from renew.utils import camelize, elixir_atom


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Bodies are rendered either from a string (``render_string``), which is how
    the registry hands them over, or by path relative to the template
    directory (``render``).  Path patterns such as
    ``lib/{{ application_name }}/repo.ex`` go through ``render_path``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["camelize"] = camelize
        self.env.filters["atom"] = elixir_atom

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render the template stored at *template_path* under the template directory.

        Raises:
            TemplateNotFoundError: If the file does not exist.
            UnboundVariableError: If the template references a missing variable.
        """
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_path) from exc
        return self._render(template, template_path, context)

    def render_string(
        self,
        template_string: str,
        context: dict[str, Any],
        *,
        name: str = "<string>",
    ) -> str:
        """Render an inline template body with the provided context.

        Args:
            template_string: The template body.
            context: Variables available inside the template.
            name: Label used in error messages.
        """
        try:
            template = self.env.from_string(template_string)
        except TemplateSyntaxError as exc:
            raise TemplateError(f"Invalid template {name}: {exc}") from exc
        return self._render(template, name, context)

    def render_path(self, path_pattern: str, context: dict[str, Any]) -> str:
        """Render a destination path pattern.

        Path patterns share the body syntax, so ``{{ application_name }}`` in
        ``lib/{{ application_name }}.ex`` is substituted like any other
        placeholder.
        """
        return self.render_string(path_pattern, context, name=f"path {path_pattern!r}")

    # -- Utility -----------------------------------------------------------

    def read_body(self, template_path: str) -> str:
        """Return the raw body of *template_path* without rendering it."""
        try:
            source, _filename, _uptodate = self.env.loader.get_source(self.env, template_path)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_path) from exc
        return source

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )

    @staticmethod
    def _render(template: Any, name: str, context: dict[str, Any]) -> str:
        try:
            return template.render(**context)
        except UndefinedError as exc:
            raise UnboundVariableError(name, exc.message or str(exc)) from exc
