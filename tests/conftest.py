"""Shared pytest fixtures for the renew test suite.

Provides reusable fixtures for:
- Temporary project directories
- Project configurations for the common option combinations
- A renderer, registry and driver wired to the packaged templates
- A recording filesystem that keeps operations in memory
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from renew.config import ProjectConfig
from renew.scaffolder import ProjectGenerator, TemplateRegistry, TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Not-yet-existing project directory named ``shop`` inside tmp_path."""
    yield tmp_path / "shop"


@pytest.fixture
def umbrella_apps_dir(tmp_path: Path) -> Path:
    """An umbrella project root with an ``apps/`` directory.

    Returns the ``apps`` directory so tests can create a project inside it.
    """
    root = tmp_path / "platform"
    apps = root / "apps"
    apps.mkdir(parents=True)
    (root / "mix.exs").write_text(
        'defmodule Platform.Mixfile do\n'
        '  use Mix.Project\n\n'
        '  def project do\n'
        '    [apps_path: "apps",\n'
        '     deps: []]\n'
        '  end\n'
        'end\n',
        encoding="utf-8",
    )
    yield apps


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def plain_config() -> ProjectConfig:
    """A bare project: no supervisor, no optional features."""
    return ProjectConfig(application_name="shop", module_name="Shop")


@pytest.fixture
def postgres_config() -> ProjectConfig:
    """Supervised project with Ecto on PostgreSQL."""
    return ProjectConfig(
        application_name="shop",
        module_name="Shop",
        supervisor=True,
        ecto=True,
        ecto_db="postgres",
    )


@pytest.fixture
def mysql_config() -> ProjectConfig:
    """Supervised project with Ecto on MySQL."""
    return ProjectConfig(
        application_name="shop",
        module_name="Shop",
        supervisor=True,
        ecto=True,
        ecto_db="mysql",
    )


@pytest.fixture
def full_config() -> ProjectConfig:
    """Every optional feature enabled."""
    return ProjectConfig(
        application_name="shop",
        module_name="Shop",
        supervisor=True,
        ecto=True,
        ecto_db="postgres",
        docker=True,
        amqp=True,
    )


@pytest.fixture
def umbrella_config() -> ProjectConfig:
    return ProjectConfig(
        application_name="platform",
        module_name="Platform",
        umbrella=True,
        ecto=True,
        ecto_db="postgres",
    )


# ---------------------------------------------------------------------------
# Scaffolder components
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture(scope="session")
def registry(renderer: TemplateRenderer) -> TemplateRegistry:
    return TemplateRegistry.load_default(renderer)


@pytest.fixture
def project_generator(renderer: TemplateRenderer, registry: TemplateRegistry) -> ProjectGenerator:
    return ProjectGenerator(renderer=renderer, registry=registry)


# ---------------------------------------------------------------------------
# Recording filesystem
# ---------------------------------------------------------------------------

class RecordingFileSystem:
    """In-memory ``FileSystem`` that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.files: dict[str, str] = {}
        self.directories: set[str] = set()

    def make_directory(self, path: str) -> None:
        self.calls.append(("mkdir", path))
        self.directories.add(path)

    def write_file(self, path: str, content: str) -> None:
        self.calls.append(("write", path))
        if path in self.files:
            raise FileExistsError(path)
        self.files[path] = content

    def append_file(self, path: str, content: str) -> None:
        self.calls.append(("append", path))
        self.files[path] = self.files.get(path, "") + content


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    return RecordingFileSystem()


def context_for(**overrides: Any) -> dict[str, Any]:
    """A complete render context for a plain ``shop`` project."""
    context: dict[str, Any] = {
        "application_name": "shop",
        "module_name": "Shop",
        "supervisor": False,
        "umbrella": False,
        "ecto": False,
        "ecto_db": None,
        "docker": False,
        "amqp": False,
        "elixir_version": "1.3.0",
        "elixir_requirement": "1.3",
        "in_umbrella": False,
        "otp_app": "    [applications: [:logger]]",
        "project_dependencies": ['{:distillery, "~> 0.9"}'],
        "project_applications": ["logger"],
        "config": "",
        "config_test": "",
        "config_dev": "",
        "config_prod": "",
    }
    context.update(overrides)
    return context


@pytest.fixture
def base_context() -> dict[str, Any]:
    return context_for()
