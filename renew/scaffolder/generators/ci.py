"""Travis CI pipeline plus the static analysis and coverage configs it runs."""

from __future__ import annotations

from typing import Any

from renew.config import ProjectConfig

from ..operations import Operation
from ..registry import TemplateRegistry
from ..templates import TemplateRenderer
from .base import Generator


class CIGenerator(Generator):
    name = "ci"

    def applicable(self, config: ProjectConfig) -> bool:
        return not config.umbrella

    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        names = [
            "ci/travis.yml",
            "ci/config/credo.exs",
            "ci/config/dogma.exs",
            "ci/coveralls.json",
        ]
        return self.render_templates(names, context, registry, renderer)
