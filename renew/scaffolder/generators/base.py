"""Contract shared by every feature generator."""

from __future__ import annotations

import abc
from typing import Any, Iterable

from renew.config import ProjectConfig

from ..operations import AppendRenderedTemplate, CopyTemplate, MakeDirectory, Operation
from ..registry import OperationKind, TemplateRegistry
from ..settings import SettingsContext
from ..templates import TemplateRenderer


class Generator(abc.ABC):
    """A conditionally applicable unit of a scaffolding run.

    The driver calls ``applicable`` on every generator, then
    ``contribute_settings`` on each applicable one in registration order, and
    only then ``apply``.  A generator may rely on settings contributed by
    generators registered before it, never after it.
    """

    name: str = ""

    @abc.abstractmethod
    def applicable(self, config: ProjectConfig) -> bool:
        """Whether this generator takes part in the run.  Never raises."""

    def contribute_settings(
        self, config: ProjectConfig, settings: SettingsContext
    ) -> SettingsContext:
        """Append dependencies, applications and config text to *settings*."""
        return settings

    @abc.abstractmethod
    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        """Return the operations for this generator.

        Args:
            config: The project configuration.
            context: Render context built from *config* and the frozen
                settings.
            registry: Template lookup.
            renderer: Renderer for bodies and destination patterns.
        """

    # -- Helpers -----------------------------------------------------------

    @staticmethod
    def render_templates(
        names: Iterable[str],
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        """Resolve and render *names* into operations, preserving order."""
        operations: list[Operation] = []
        for name in names:
            descriptor = registry.resolve(name)
            destination = renderer.render_path(descriptor.destination, context)
            if descriptor.kind is OperationKind.MKDIR:
                operations.append(MakeDirectory(destination))
                continue
            content = renderer.render_string(descriptor.body, context, name=name)
            if descriptor.kind is OperationKind.APPEND:
                operations.append(AppendRenderedTemplate(name, destination, content))
            else:
                operations.append(CopyTemplate(name, destination, content))
        return operations

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
