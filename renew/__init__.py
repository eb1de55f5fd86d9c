"""Renew -- scaffolding for new Elixir projects.

Generates a Mix project with release, CI and optional Ecto, AMQP and Docker
support from a handful of command line options.
"""

__version__ = "0.1.0"
