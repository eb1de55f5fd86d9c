"""Template registry.

Maps a symbolic template name to its body, destination path pattern and the
kind of filesystem operation it produces.  The default table is compiled in
below and its bodies are read once from the package ``templates`` directory
when the registry is loaded; nothing is registered afterwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from renew.errors import TemplateError, TemplateNotFoundError

from .templates import TemplateRenderer


class OperationKind(str, enum.Enum):
    """What a template turns into when applied."""

    COPY = "copy"
    APPEND = "append"
    MKDIR = "mkdir"


@dataclass(frozen=True)
class TemplateDescriptor:
    """A registered template.

    Attributes:
        name: Symbolic name generators refer to.
        body: Raw template body (empty for ``MKDIR``).
        destination: Destination path pattern, relative to the project root.
        kind: Operation produced by the template.
    """

    name: str
    body: str
    destination: str
    kind: OperationKind


# ---------------------------------------------------------------------------
# Default template table
# ---------------------------------------------------------------------------

# (kind, name, destination).  ``name`` is also the body's path under the
# template directory, with a ``.j2`` suffix for files.
DEFAULT_TEMPLATES: list[tuple[OperationKind, str, str]] = [
    # Base project
    (OperationKind.COPY, "mix/README.md", "README.md"),
    (OperationKind.COPY, "mix/LICENSE.md", "LICENSE.md"),
    (OperationKind.COPY, "mix/gitignore", ".gitignore"),
    (OperationKind.COPY, "mix/env", ".env"),
    (OperationKind.COPY, "mix/mix.exs", "mix.exs"),
    (OperationKind.COPY, "mix/mix_apps.exs", "mix.exs"),
    (OperationKind.MKDIR, "mix/config/", "config/"),
    (OperationKind.COPY, "mix/config/config.exs", "config/config.exs"),
    (OperationKind.COPY, "mix/config/dev.exs", "config/dev.exs"),
    (OperationKind.COPY, "mix/config/test.exs", "config/test.exs"),
    (OperationKind.COPY, "mix/config/prod.exs", "config/prod.exs"),
    (OperationKind.MKDIR, "mix/lib/", "lib/"),
    (OperationKind.COPY, "mix/lib/app.ex", "lib/{{ application_name }}.ex"),
    (OperationKind.COPY, "mix/lib/app_sup.ex", "lib/{{ application_name }}.ex"),
    (OperationKind.COPY, "mix/rel/config.exs", "rel/config.exs"),
    (OperationKind.COPY, "mix/bin/hooks/pre-start.sh", "bin/hooks/pre-start.sh"),
    (OperationKind.COPY, "mix/test/test_helper.exs", "test/test_helper.exs"),
    (OperationKind.COPY, "mix/test/app_test.exs", "test/{{ application_name }}_test.exs"),
    # Umbrella project
    (OperationKind.COPY, "umbrella/gitignore", ".gitignore"),
    (OperationKind.COPY, "umbrella/README.md", "README.md"),
    (OperationKind.COPY, "umbrella/mix.exs", "mix.exs"),
    (OperationKind.MKDIR, "umbrella/apps/", "apps/"),
    (OperationKind.COPY, "umbrella/config/config.exs", "config/config.exs"),
    # Ecto
    (OperationKind.COPY, "ecto/lib/repo.ex", "lib/{{ application_name }}/repo.ex"),
    (OperationKind.COPY, "ecto/priv/repo/seeds.exs", "priv/repo/seeds.exs"),
    (OperationKind.MKDIR, "ecto/priv/repo/migrations/", "priv/repo/migrations/"),
    (OperationKind.MKDIR, "ecto/test/unit/models/", "test/unit/models/"),
    (OperationKind.COPY, "ecto/test/support/model_case.ex", "test/support/model_case.ex"),
    (OperationKind.APPEND, "ecto/env", ".env"),
    (OperationKind.APPEND, "ecto/bin/hooks/pre-start.sh", "bin/hooks/pre-start.sh"),
    (OperationKind.COPY, "ecto/lib/tasks.ex", "lib/{{ application_name }}/tasks.ex"),
    (OperationKind.COPY, "ecto/bin/ci/init-postgres-db.sh", "bin/ci/init-db.sh"),
    (OperationKind.COPY, "ecto/bin/ci/init-mysql-db.sh", "bin/ci/init-db.sh"),
    # AMQP
    (OperationKind.APPEND, "amqp/env", ".env"),
    (OperationKind.COPY, "amqp/bin/ci/init-mq.sh", "bin/ci/init-mq.sh"),
    # CI
    (OperationKind.COPY, "ci/travis.yml", ".travis.yml"),
    (OperationKind.COPY, "ci/config/credo.exs", "config/.credo.exs"),
    (OperationKind.COPY, "ci/config/dogma.exs", "config/dogma.exs"),
    (OperationKind.COPY, "ci/coveralls.json", "coveralls.json"),
    # Docker
    (OperationKind.COPY, "docker/Dockerfile", "Dockerfile"),
    (OperationKind.COPY, "docker/dockerignore", ".dockerignore"),
    (OperationKind.COPY, "docker/bin/build.sh", "bin/build.sh"),
    (OperationKind.COPY, "docker/bin/start.sh", "bin/start.sh"),
    (OperationKind.COPY, "docker/bin/hooks/pre-run.sh", "bin/hooks/pre-run.sh"),
]


# ---------------------------------------------------------------------------
# TemplateRegistry
# ---------------------------------------------------------------------------


class TemplateRegistry:
    """Name -> ``TemplateDescriptor`` lookup table."""

    def __init__(self) -> None:
        self._templates: dict[str, TemplateDescriptor] = {}

    @classmethod
    def load_default(
        cls,
        renderer: TemplateRenderer | None = None,
    ) -> "TemplateRegistry":
        """Build a registry from ``DEFAULT_TEMPLATES``.

        Bodies are read through *renderer*'s loader, so a renderer pointed at
        another template directory yields a registry with those bodies.

        Raises:
            TemplateNotFoundError: If a body file is missing.
        """
        renderer = renderer or TemplateRenderer()
        registry = cls()
        for kind, name, destination in DEFAULT_TEMPLATES:
            body = "" if kind is OperationKind.MKDIR else renderer.read_body(f"{name}.j2")
            registry.register(name, body, destination, kind)
        return registry

    def register(self, name: str, body: str, destination: str, kind: OperationKind) -> None:
        """Register a template under *name*.

        Raises:
            TemplateError: If *name* is already registered.
        """
        if name in self._templates:
            raise TemplateError(f"Template {name!r} is registered twice")
        self._templates[name] = TemplateDescriptor(
            name=name, body=body, destination=destination, kind=OperationKind(kind)
        )

    def resolve(self, name: str) -> TemplateDescriptor:
        """Return the descriptor registered under *name*.

        Raises:
            TemplateNotFoundError: If nothing is registered under *name*.
        """
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)
