"""Docker packaging of the release, with build and start scripts."""

from __future__ import annotations

from typing import Any

from renew.config import ProjectConfig

from ..operations import Operation
from ..registry import TemplateRegistry
from ..templates import TemplateRenderer
from .base import Generator


class DockerGenerator(Generator):
    name = "docker"

    def applicable(self, config: ProjectConfig) -> bool:
        return config.docker and not config.umbrella

    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        names = [
            "docker/Dockerfile",
            "docker/dockerignore",
            "docker/bin/build.sh",
            "docker/bin/start.sh",
            "docker/bin/hooks/pre-run.sh",
        ]
        return self.render_templates(names, context, registry, renderer)
