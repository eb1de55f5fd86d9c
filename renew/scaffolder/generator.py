"""Main scaffolding orchestrator.

``ProjectGenerator`` holds the ordered list of feature generators and runs a
project configuration through them in two passes:

1. every applicable generator contributes to one shared ``SettingsContext``
   (dependencies, applications, config fragments), which is then frozen;
2. every applicable generator renders its templates against the final
   settings and returns filesystem operations.

All rendering finishes before the first operation is executed, so a bad
adapter or a broken template never leaves a half-written project behind.
Filesystem failures during execution are not rolled back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from renew.config import ProjectConfig

from .generators import Generator, default_generators
from .operations import FileSystem, LocalFileSystem, Operation, execute
from .registry import TemplateRegistry
from .settings import SettingsContext
from .templates import TemplateRenderer

_APPS_PATH_PATTERN = re.compile(r"apps_path:\s*\"([^\"]+)\"")


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


@dataclass
class GenerationPlan:
    """Everything a run will do, computed without touching the disk."""

    config: ProjectConfig
    generators: list[Generator]
    settings: SettingsContext
    operations: list[Operation] = field(default_factory=list)

    @property
    def generator_names(self) -> list[str]:
        return [generator.name for generator in self.generators]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Composition driver for the feature generators.

    Args:
        generators: Generators in registration order.  Defaults to
            ``default_generators()``.
        renderer: Template renderer; defaults to the packaged templates.
        registry: Template registry; defaults to ``DEFAULT_TEMPLATES`` loaded
            through *renderer*.
    """

    def __init__(
        self,
        generators: list[Generator] | None = None,
        *,
        renderer: TemplateRenderer | None = None,
        registry: TemplateRegistry | None = None,
    ) -> None:
        self.generators = list(generators) if generators is not None else default_generators()
        self.renderer = renderer or TemplateRenderer()
        self.registry = registry or TemplateRegistry.load_default(self.renderer)

    # -- Public API --------------------------------------------------------

    def select(self, config: ProjectConfig) -> list[Generator]:
        """Applicable generators, in registration order."""
        return [generator for generator in self.generators if generator.applicable(config)]

    def collect_settings(
        self, config: ProjectConfig, generators: list[Generator]
    ) -> SettingsContext:
        """Run the settings pass and return the frozen settings.

        Raises:
            ConfigurationError: If a generator rejects an option it consumes.
        """
        settings = SettingsContext()
        for generator in generators:
            settings = generator.contribute_settings(config, settings)
        return settings.freeze()

    def plan(
        self,
        config: ProjectConfig,
        target: str | Path | None = None,
    ) -> GenerationPlan:
        """Compute settings and the full list of rendered operations.

        Args:
            config: The project configuration.
            target: Destination directory, used to detect whether the
                project is created inside an umbrella's ``apps/`` directory.

        Raises:
            ConfigurationError: From the settings pass.
            TemplateError: If a template is missing or references an unbound
                variable.
        """
        generators = self.select(config)
        settings = self.collect_settings(config, generators)
        context = build_context(
            config, settings, in_umbrella=in_umbrella(target) if target else False
        )

        operations: list[Operation] = []
        for generator in generators:
            operations.extend(generator.apply(config, context, self.registry, self.renderer))

        return GenerationPlan(
            config=config,
            generators=generators,
            settings=settings,
            operations=operations,
        )

    def generate(
        self,
        config: ProjectConfig,
        target: str | Path,
        *,
        fs: FileSystem | None = None,
    ) -> GenerationPlan:
        """Plan the project and write it below *target*.

        Args:
            config: The project configuration.
            target: Project root directory.  Created if missing.
            fs: Filesystem to write through; defaults to a
                ``LocalFileSystem`` rooted at *target*.

        Returns:
            The executed plan.
        """
        target_path = Path(target).expanduser()
        plan = self.plan(config, target_path)
        if fs is None:
            target_path.mkdir(parents=True, exist_ok=True)
            fs = LocalFileSystem(target_path)
        execute(plan.operations, fs)
        return plan


# ---------------------------------------------------------------------------
# Context building
# ---------------------------------------------------------------------------


def build_context(
    config: ProjectConfig,
    settings: SettingsContext,
    *,
    in_umbrella: bool = False,
) -> dict[str, Any]:
    """Build the template context from the configuration and frozen settings."""
    return {
        "application_name": config.application_name,
        "module_name": config.module_name,
        "supervisor": config.supervisor,
        "umbrella": config.umbrella,
        "ecto": config.ecto,
        "ecto_db": config.ecto_db,
        "docker": config.docker,
        "amqp": config.amqp,
        "elixir_version": config.elixir_version,
        "elixir_requirement": config.elixir_requirement,
        "in_umbrella": in_umbrella,
        "otp_app": otp_app(config.module_name, settings.applications, config.supervisor),
        **settings.as_context(),
    }


def otp_app(module_name: str, applications: list[str], supervisor: bool) -> str:
    """Body of ``def application`` in ``mix.exs``."""
    apps = ", ".join(f":{app}" for app in applications)
    if supervisor:
        return f"    [applications: [{apps}],\n     mod: {{{module_name}, []}}]"
    return f"    [applications: [{apps}]]"


def in_umbrella(target: str | Path) -> bool:
    """Whether *target* sits in the apps directory of an umbrella project.

    The umbrella root is expected two levels up, with a ``mix.exs`` whose
    ``apps_path`` points at *target*'s parent.
    """
    project = Path(target).expanduser().resolve()
    root = project.parent.parent
    mixfile = root / "mix.exs"
    if not mixfile.is_file():
        return False
    try:
        source = mixfile.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return False
    match = _APPS_PATH_PATTERN.search(source)
    if match is None:
        return False
    return (root / match.group(1)).resolve() == project.parent
