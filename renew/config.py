"""Renew configuration.

Typed configuration for a scaffolding run.  ``ProjectConfig`` describes the
project being generated and is frozen once constructed; ``RenewSettings``
holds toolchain defaults that can be overridden through environment
variables.  Both are Pydantic v2 models so they are validated at construction
time.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from renew.errors import ConfigurationError
from renew.utils import camelize

# ---------------------------------------------------------------------------
# Name validation
# ---------------------------------------------------------------------------

APPLICATION_NAME_PATTERN = re.compile(r"^[a-z][\w_]*$")
MODULE_NAME_PATTERN = re.compile(r"^[A-Z]\w*(\.[A-Z]\w*)*$")

# Modules shipped with Elixir, OTP and the libraries every generated project
# depends on.  A generated module with one of these names would not compile.
RESERVED_MODULE_NAMES: frozenset[str] = frozenset(
    {
        "Access",
        "Agent",
        "Application",
        "Atom",
        "Code",
        "Ecto",
        "Elixir",
        "Enum",
        "ExUnit",
        "File",
        "GenServer",
        "IO",
        "Kernel",
        "Keyword",
        "List",
        "Logger",
        "Map",
        "Mix",
        "Module",
        "Path",
        "Process",
        "Regex",
        "Registry",
        "Stream",
        "String",
        "Supervisor",
        "System",
        "Task",
    }
)

SUPPORTED_DATABASES: tuple[str, ...] = ("mysql", "postgres")


def check_application_name(name: str, *, from_app_flag: bool) -> None:
    """Raise ``ConfigurationError`` unless *name* is a valid OTP application name."""
    if APPLICATION_NAME_PATTERN.match(name):
        return
    message = (
        "Application name must start with a letter and have only lowercase "
        f"letters, numbers and underscore, got: {name!r}"
    )
    if not from_app_flag:
        message += (
            ". The application name is inferred from the path, if you'd like to "
            'explicitly name the application then use the "--app APP" option.'
        )
    raise ConfigurationError(message)


def check_module_name(name: str) -> None:
    """Raise ``ConfigurationError`` unless *name* is a valid, free Elixir alias."""
    if not MODULE_NAME_PATTERN.match(name):
        raise ConfigurationError(
            f"Module name must be a valid Elixir alias (for example: Foo.Bar), got: {name!r}"
        )
    if name.split(".")[0] in RESERVED_MODULE_NAMES:
        raise ConfigurationError(
            f"Module name {name} is already taken, please choose another name"
        )


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Options describing the project to scaffold.

    ``ecto_db`` is only consulted when ``ecto`` is enabled.  It is kept as a
    free-form string so an unknown adapter is reported by the Ecto generator
    during the settings pass, before anything is written.
    """

    model_config = ConfigDict(frozen=True)

    application_name: str = Field(..., description="OTP application name (lowercase)")
    module_name: str = Field(..., description="Top-level Elixir module alias")
    supervisor: bool = Field(default=False, description="Generate an application callback with a supervision tree")
    umbrella: bool = Field(default=False, description="Generate an umbrella project")
    ecto: bool = Field(default=False, description="Add the Ecto persistence layer")
    ecto_db: str | None = Field(default=None, description="Ecto adapter: mysql or postgres")
    docker: bool = Field(default=False, description="Add Docker packaging")
    amqp: bool = Field(default=False, description="Add RabbitMQ messaging")
    elixir_version: str = Field(default="1.3.0", description="Elixir version targeted by the project")

    @field_validator("application_name")
    @classmethod
    def _validate_application_name(cls, value: str) -> str:
        if not APPLICATION_NAME_PATTERN.match(value):
            raise ValueError(f"invalid application name {value!r}")
        return value

    @field_validator("module_name")
    @classmethod
    def _validate_module_name(cls, value: str) -> str:
        if not MODULE_NAME_PATTERN.match(value):
            raise ValueError(f"invalid module name {value!r}")
        return value

    @field_validator("elixir_version")
    @classmethod
    def _validate_elixir_version(cls, value: str) -> str:
        if not re.match(r"^\d+\.\d+\.\d+(-[\w.]+)?$", value):
            raise ValueError(f"invalid Elixir version {value!r}")
        return value

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        app: str | None = None,
        module: str | None = None,
        **options: Any,
    ) -> "ProjectConfig":
        """Build a ``ProjectConfig`` for a project created at *path*.

        The application name defaults to the basename of *path* and the module
        name to the camelized application name.

        Args:
            path: Destination directory of the new project.
            app: Explicit application name (``--app``).
            module: Explicit module name (``--module``).
            **options: Remaining ``ProjectConfig`` fields (``ecto``,
                ``ecto_db``, ``supervisor``...).

        Raises:
            ConfigurationError: If a derived or explicit name is invalid.
        """
        application_name = app or Path(path).expanduser().resolve().name
        check_application_name(application_name, from_app_flag=app is not None)
        module_name = module or camelize(application_name)
        check_module_name(module_name)

        try:
            return cls(application_name=application_name, module_name=module_name, **options)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    @property
    def elixir_requirement(self) -> str:
        """Version requirement used in ``mix.exs``, e.g. ``1.3`` or ``1.4-rc``."""
        base, _, pre = self.elixir_version.partition("-")
        major, minor, _patch = base.split(".")
        suffix = f"-{pre.split('.')[0]}" if pre else ""
        return f"{major}.{minor}{suffix}"


# ---------------------------------------------------------------------------
# Toolchain settings
# ---------------------------------------------------------------------------


class RenewSettings(BaseModel):
    """Defaults applied to every scaffolding run."""

    elixir_version: str = Field(default="1.3.0")
    template_dir: Path | None = Field(
        default=None, description="Alternative directory holding the .j2 template bodies"
    )

    @classmethod
    def from_env(cls) -> "RenewSettings":
        """Build ``RenewSettings`` from environment variables.

        Recognised variables (all optional):
            RENEW_ELIXIR_VERSION, RENEW_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("RENEW_ELIXIR_VERSION"):
            kwargs["elixir_version"] = os.environ["RENEW_ELIXIR_VERSION"]
        if os.environ.get("RENEW_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["RENEW_TEMPLATE_DIR"])
        return cls(**kwargs)
