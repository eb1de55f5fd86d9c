"""Filesystem operations produced by generators and the layer that runs them.

Generators never touch the disk.  They return ``MakeDirectory``,
``CopyTemplate`` and ``AppendRenderedTemplate`` values with rendered content;
``execute`` hands each one to a ``FileSystem`` rooted at the project
directory.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol, Union

from renew.utils import print_operation


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MakeDirectory:
    path: str


@dataclass(frozen=True)
class CopyTemplate:
    """Create ``destination`` with the rendered body of template ``source``."""

    source: str
    destination: str
    content: str = field(repr=False)


@dataclass(frozen=True)
class AppendRenderedTemplate:
    """Append the rendered body of template ``source`` to ``destination``."""

    source: str
    destination: str
    content: str = field(repr=False)


Operation = Union[MakeDirectory, CopyTemplate, AppendRenderedTemplate]


def operation_path(operation: Operation) -> str:
    """Destination path of *operation*, relative to the project root."""
    if isinstance(operation, MakeDirectory):
        return operation.path
    return operation.destination


# ---------------------------------------------------------------------------
# Filesystem capability
# ---------------------------------------------------------------------------


class FileSystem(Protocol):
    def make_directory(self, path: str) -> None: ...

    def write_file(self, path: str, content: str) -> None: ...

    def append_file(self, path: str, content: str) -> None: ...


class LocalFileSystem:
    """Writes operations below *root* on the local disk.

    Shell scripts (``*.sh``) are made executable after every write or append.
    """

    def __init__(self, root: str | Path, *, verbose: bool = True) -> None:
        self.root = Path(root)
        self.verbose = verbose

    def make_directory(self, path: str) -> None:
        """Create *path* and its parents; no-op if it already exists."""
        target = self.root / path
        target.mkdir(parents=True, exist_ok=True)
        self._report("creating", path)

    def write_file(self, path: str, content: str) -> None:
        """Create *path* with *content*.

        Raises:
            FileExistsError: If *path* already exists.
        """
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("x", encoding="utf-8") as handle:
            handle.write(content)
        _make_executable_if_script(target)
        self._report("creating", path)

    def append_file(self, path: str, content: str) -> None:
        """Append *content* to *path*, creating the file when it is absent."""
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as handle:
            handle.write(content)
        _make_executable_if_script(target)
        self._report("appending", path)

    def _report(self, action: str, path: str) -> None:
        if self.verbose:
            print_operation(action, path)


def execute(operations: Iterable[Operation], fs: FileSystem) -> int:
    """Apply *operations* to *fs* in order and return how many ran.

    Errors raised by *fs* propagate unchanged; operations already applied are
    left in place.
    """
    count = 0
    for operation in operations:
        if isinstance(operation, MakeDirectory):
            fs.make_directory(operation.path)
        elif isinstance(operation, CopyTemplate):
            fs.write_file(operation.destination, operation.content)
        elif isinstance(operation, AppendRenderedTemplate):
            fs.append_file(operation.destination, operation.content)
        else:
            raise TypeError(f"unsupported operation {operation!r}")
        count += 1
    return count


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _make_executable_if_script(path: Path) -> None:
    """Set the executable bits on shell scripts."""
    if path.suffix != ".sh":
        return
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
