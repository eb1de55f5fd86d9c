"""Umbrella project: a container for several applications under ``apps/``."""

from __future__ import annotations

from typing import Any

from renew.config import ProjectConfig

from ..operations import Operation
from ..registry import TemplateRegistry
from ..settings import SettingsContext
from ..templates import TemplateRenderer
from .base import Generator
from .mix import BASE_DEPENDENCIES


class UmbrellaGenerator(Generator):
    name = "umbrella"

    def applicable(self, config: ProjectConfig) -> bool:
        return config.umbrella

    def contribute_settings(
        self, config: ProjectConfig, settings: SettingsContext
    ) -> SettingsContext:
        # Umbrella dependencies are build tooling only; apps declare their own.
        return settings.add_dependencies(*BASE_DEPENDENCIES)

    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        names = [
            "umbrella/gitignore",
            "umbrella/README.md",
            "umbrella/mix.exs",
            "umbrella/apps/",
            "umbrella/config/config.exs",
        ]
        return self.render_templates(names, context, registry, renderer)
