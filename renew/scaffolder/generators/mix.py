"""Base Mix project: manifest, configuration, library and test skeleton."""

from __future__ import annotations

from typing import Any

from renew.config import ProjectConfig

from ..operations import Operation
from ..registry import TemplateRegistry
from ..settings import Dependency, SettingsContext
from ..templates import TemplateRenderer
from .base import Generator

DEV_TEST = ("dev", "test")

BASE_DEPENDENCIES: tuple[Dependency, ...] = (
    Dependency("distillery", "~> 0.9"),
    Dependency("benchfella", "~> 0.3", only=DEV_TEST),
    Dependency("ex_doc", ">= 0.0.0", only=DEV_TEST),
    Dependency("excoveralls", "~> 0.5", only=DEV_TEST),
    Dependency("dogma", "> 0.1.0", only=DEV_TEST),
    Dependency("credo", ">= 0.4.8", only=DEV_TEST),
)

BASE_APPLICATIONS: tuple[str, ...] = ("logger",)


class MixGenerator(Generator):
    """Generates a single-application project."""

    name = "mix"

    def applicable(self, config: ProjectConfig) -> bool:
        return not config.umbrella

    def contribute_settings(
        self, config: ProjectConfig, settings: SettingsContext
    ) -> SettingsContext:
        return settings.add_dependencies(*BASE_DEPENDENCIES).add_applications(
            *BASE_APPLICATIONS
        )

    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        mixfile = "mix/mix_apps.exs" if context["in_umbrella"] else "mix/mix.exs"
        lib = "mix/lib/app_sup.ex" if config.supervisor else "mix/lib/app.ex"
        names = [
            "mix/README.md",
            "mix/LICENSE.md",
            "mix/gitignore",
            "mix/env",
            mixfile,
            "mix/config/",
            "mix/config/config.exs",
            "mix/config/dev.exs",
            "mix/config/test.exs",
            "mix/config/prod.exs",
            "mix/lib/",
            lib,
            "mix/rel/config.exs",
            "mix/bin/hooks/pre-start.sh",
            "mix/test/test_helper.exs",
            "mix/test/app_test.exs",
        ]
        return self.render_templates(names, context, registry, renderer)
