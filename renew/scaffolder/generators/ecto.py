"""Ecto persistence layer with a MySQL or PostgreSQL adapter.

The adapter is resolved in ``contribute_settings`` because the adapter's
dependency and connection config are needed there.  An unknown database is
therefore reported before the apply pass, so nothing is written for a project
that cannot be configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from renew.config import SUPPORTED_DATABASES, ProjectConfig
from renew.errors import ConfigurationError

from ..operations import Operation
from ..registry import TemplateRegistry
from ..settings import Dependency, SettingsContext
from ..templates import TemplateRenderer
from .base import Generator

ECTO_DEPENDENCIES: tuple[Dependency, ...] = (Dependency("ecto", "~> 2.0"),)
ECTO_APPLICATIONS: tuple[str, ...] = ("ecto",)

TEMPLATES: tuple[str, ...] = (
    "ecto/lib/repo.ex",
    "ecto/priv/repo/seeds.exs",
    "ecto/priv/repo/migrations/",
    "ecto/test/unit/models/",
    "ecto/test/support/model_case.ex",
    "ecto/env",
    "ecto/bin/hooks/pre-start.sh",
    "ecto/lib/tasks.ex",
)

ADAPTER_TEMPLATES: dict[str, tuple[str, ...]] = {
    "postgres": ("ecto/bin/ci/init-postgres-db.sh",),
    "mysql": ("ecto/bin/ci/init-mysql-db.sh",),
}


@dataclass(frozen=True)
class Adapter:
    """Everything that differs between database adapters."""

    dependency: Dependency
    application: str
    config: str
    config_test: str
    config_dev: str
    config_prod: str


def get_adapter(ecto_db: str | None, application_name: str, module_name: str) -> Adapter:
    """Return the adapter settings for *ecto_db*.

    Raises:
        ConfigurationError: If *ecto_db* is not a supported database.
    """
    app = application_name.lower()
    if ecto_db == "mysql":
        return Adapter(
            Dependency("mariaex", "~> 0.7.7"),
            "mariaex",
            *db_config(app, module_name, "Ecto.Adapters.MySQL", "root", ""),
        )
    if ecto_db == "postgres":
        return Adapter(
            Dependency("postgrex", "~> 0.11.2"),
            "postgrex",
            *db_config(app, module_name, "Ecto.Adapters.Postgres", "postgres", "postgres"),
        )
    raise ConfigurationError(
        f"Unknown database {ecto_db!r}, expected one of: {', '.join(SUPPORTED_DATABASES)}"
    )


def db_config(
    application_name: str,
    module_name: str,
    adapter_name: str,
    db_user: str,
    db_password: str,
) -> tuple[str, str, str, str]:
    """Return the (main, test, dev, prod) configuration fragments for the repo."""
    main = (
        "# Configure your database\n"
        f"config :{application_name}, {module_name}.Repo,\n"
        f"  adapter: {adapter_name},\n"
        f'  database: "{application_name}_dev",\n'
        f'  username: "{db_user}",\n'
        f'  password: "{db_password}",\n'
        '  hostname: "localhost"\n'
    )
    test = (
        "# Configure your database\n"
        f"config :{application_name}, {module_name}.Repo,\n"
        "  pool: Ecto.Adapters.SQL.Sandbox,\n"
        f'  database: "{application_name}_test"\n'
    )
    prod = (
        "# Configure your database\n"
        f"config :{application_name}, {module_name}.Repo,\n"
        f"  adapter: {adapter_name},\n"
        '  database: "${DB_NAME}",\n'
        '  username: "${DB_USER}",\n'
        '  password: "${DB_PASSWORD}",\n'
        '  hostname: "${DB_HOST}",\n'
        '  port: "${DB_PORT}"\n'
    )
    return main, test, "", prod


class EctoGenerator(Generator):
    name = "ecto"

    def applicable(self, config: ProjectConfig) -> bool:
        return config.ecto and not config.umbrella

    def contribute_settings(
        self, config: ProjectConfig, settings: SettingsContext
    ) -> SettingsContext:
        adapter = get_adapter(config.ecto_db, config.application_name, config.module_name)
        return (
            settings.add_dependencies(*ECTO_DEPENDENCIES, adapter.dependency)
            .add_applications(*ECTO_APPLICATIONS, adapter.application)
            .add_config("main", adapter.config)
            .add_config("test", adapter.config_test)
            .add_config("dev", adapter.config_dev)
            .add_config("prod", adapter.config_prod)
        )

    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        try:
            adapter_templates = ADAPTER_TEMPLATES[config.ecto_db]
        except KeyError:
            raise ConfigurationError(f"Unknown database {config.ecto_db!r}") from None
        names = [*TEMPLATES, *adapter_templates]
        return self.render_templates(names, context, registry, renderer)
