"""Renew scaffolder -- generates Elixir project structures.

This package turns a ``ProjectConfig`` into an ordered list of filesystem
operations by running it through the feature generators (base Mix project,
umbrella, Ecto, AMQP, CI, Docker) and rendering their Jinja2 templates.

Quick usage::

    from renew.config import ProjectConfig
    from renew.scaffolder import ProjectGenerator

    config = ProjectConfig.from_path("shop", ecto=True, ecto_db="postgres")
    generator = ProjectGenerator()
    plan = generator.generate(config, "shop")
"""

from renew.scaffolder.generator import GenerationPlan, ProjectGenerator
from renew.scaffolder.registry import OperationKind, TemplateDescriptor, TemplateRegistry
from renew.scaffolder.settings import Dependency, SettingsContext
from renew.scaffolder.templates import TemplateRenderer

__all__ = [
    "Dependency",
    "GenerationPlan",
    "OperationKind",
    "ProjectGenerator",
    "SettingsContext",
    "TemplateDescriptor",
    "TemplateRegistry",
    "TemplateRenderer",
]
