"""RabbitMQ messaging through the ``amqp`` client."""

from __future__ import annotations

from typing import Any

from renew.config import ProjectConfig

from ..operations import Operation
from ..registry import TemplateRegistry
from ..settings import Dependency, SettingsContext
from ..templates import TemplateRenderer
from .base import Generator

AMQP_DEPENDENCIES: tuple[Dependency, ...] = (Dependency("amqp", "~> 0.1.4"),)
AMQP_APPLICATIONS: tuple[str, ...] = ("amqp",)


def mq_config(application_name: str) -> tuple[str, str]:
    """Return the (main, prod) configuration fragments for the connection."""
    main = (
        "# Configure your message queue\n"
        f"config :{application_name}, :amqp,\n"
        '  host: "localhost",\n'
        "  port: 5672,\n"
        '  username: "guest",\n'
        '  password: "guest"\n'
    )
    prod = (
        "# Configure your message queue\n"
        f"config :{application_name}, :amqp,\n"
        '  host: "${MQ_HOST}",\n'
        '  port: "${MQ_PORT}",\n'
        '  username: "${MQ_USER}",\n'
        '  password: "${MQ_PASSWORD}"\n'
    )
    return main, prod


class AmqpGenerator(Generator):
    name = "amqp"

    def applicable(self, config: ProjectConfig) -> bool:
        return config.amqp and not config.umbrella

    def contribute_settings(
        self, config: ProjectConfig, settings: SettingsContext
    ) -> SettingsContext:
        main, prod = mq_config(config.application_name)
        return (
            settings.add_dependencies(*AMQP_DEPENDENCIES)
            .add_applications(*AMQP_APPLICATIONS)
            .add_config("main", main)
            .add_config("prod", prod)
        )

    def apply(
        self,
        config: ProjectConfig,
        context: dict[str, Any],
        registry: TemplateRegistry,
        renderer: TemplateRenderer,
    ) -> list[Operation]:
        return self.render_templates(
            ["amqp/env", "amqp/bin/ci/init-mq.sh"], context, registry, renderer
        )
