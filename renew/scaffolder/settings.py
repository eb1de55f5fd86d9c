"""Settings accumulated by generators before any template is rendered.

Every applicable generator appends to one shared ``SettingsContext`` during
the settings pass: project dependencies, OTP applications and text for the
four configuration files.  The driver freezes the context before the apply
pass so templates see the final values and generators cannot change them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

CONFIG_SECTIONS: tuple[str, ...] = ("main", "test", "dev", "prod")


@dataclass(frozen=True)
class Dependency:
    """A ``mix.exs`` dependency declaration."""

    name: str
    requirement: str
    only: tuple[str, ...] = ()

    def render(self) -> str:
        """Return the Elixir tuple, e.g. ``{:ecto, "~> 2.0"}``."""
        if self.only:
            envs = ", ".join(f":{env}" for env in self.only)
            return f'{{:{self.name}, "{self.requirement}", only: [{envs}]}}'
        return f'{{:{self.name}, "{self.requirement}"}}'


class SettingsFrozenError(RuntimeError):
    """Raised when a frozen ``SettingsContext`` is modified."""


class SettingsContext:
    """Append-only accumulator shared by generators.

    Dependencies are deduplicated by name and applications by value; the
    first contribution wins and keeps its position.
    """

    def __init__(self) -> None:
        self._dependencies: dict[str, Dependency] = {}
        self._applications: list[str] = []
        self._config: dict[str, str] = {section: "" for section in CONFIG_SECTIONS}
        self._frozen = False

    # -- Mutation (settings pass only) -------------------------------------

    def add_dependencies(self, *dependencies: Dependency) -> "SettingsContext":
        self._check_mutable()
        for dependency in dependencies:
            self._dependencies.setdefault(dependency.name, dependency)
        return self

    def add_applications(self, *applications: str) -> "SettingsContext":
        self._check_mutable()
        for application in applications:
            application = application.lstrip(":")
            if application not in self._applications:
                self._applications.append(application)
        return self

    def add_config(self, section: str, text: str) -> "SettingsContext":
        """Append *text* to configuration *section* (main, test, dev or prod)."""
        self._check_mutable()
        if section not in self._config:
            raise KeyError(f"unknown config section {section!r}")
        self._config[section] += text
        return self

    def freeze(self) -> "SettingsContext":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise SettingsFrozenError("settings are read-only once the apply pass starts")

    # -- Read access -------------------------------------------------------

    @property
    def dependencies(self) -> list[Dependency]:
        return list(self._dependencies.values())

    @property
    def applications(self) -> list[str]:
        return list(self._applications)

    def config(self, section: str) -> str:
        return self._config[section]

    def has_dependency(self, name: str) -> bool:
        return name in self._dependencies

    def as_context(self) -> dict[str, Any]:
        """Template variables exposed by the settings."""
        return {
            "project_dependencies": [dep.render() for dep in self.dependencies],
            "project_applications": self.applications,
            "config": self._config["main"],
            "config_test": self._config["test"],
            "config_dev": self._config["dev"],
            "config_prod": self._config["prod"],
        }
