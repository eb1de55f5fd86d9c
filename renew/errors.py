"""Exception hierarchy shared by the scaffolder and the CLI.

Validation problems caused by user input raise :class:`ConfigurationError`.
Template problems are packaging defects and raise :class:`TemplateError` or
one of its subclasses.  Filesystem failures are not wrapped; they propagate as
the ``OSError`` raised by the filesystem layer.
"""

from __future__ import annotations


class RenewError(Exception):
    """Base class for every error raised deliberately by ``renew``."""


class ConfigurationError(RenewError):
    """Raised when the requested project cannot be configured.

    Covers invalid application or module names, reserved module names and
    unknown database adapters.
    """


class TemplateError(RenewError):
    """Raised when a template cannot be resolved or rendered."""


class TemplateNotFoundError(TemplateError):
    """Raised when a template name is not registered or its body is missing."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template {name!r} is not registered")


class UnboundVariableError(TemplateError):
    """Raised when a template references a variable missing from the context."""

    def __init__(self, template: str, detail: str) -> None:
        self.template = template
        super().__init__(f"Cannot render {template}: {detail}")
