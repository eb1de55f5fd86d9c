"""Command line entry point.

Usage::

    renew PATH [--sup] [--umbrella] [--app APP] [--module MODULE]
               [--ecto] [--ecto-db {mysql,postgres}] [--docker] [--amqp]
               [--elixir-version VERSION] [--dry-run]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.markup import escape

from renew.config import SUPPORTED_DATABASES, ProjectConfig, RenewSettings
from renew.errors import RenewError
from renew.scaffolder import GenerationPlan, ProjectGenerator, TemplateRenderer
from renew.scaffolder.operations import operation_path
from renew.utils import (
    print_error,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
)

PROJECT_MESSAGE = """Your Mix project was created successfully.
You can use "mix" to compile it, test it, and more:

    cd {path}
    mix test

Run "mix help" for more commands."""

UMBRELLA_MESSAGE = """Your umbrella project was created successfully.
Inside your project, you will find an apps/ directory
where you can create and host many apps:

    cd {path}
    cd apps
    renew my_app

Commands like "mix compile" and "mix test" when executed
in the umbrella project root will automatically run
for each application in the apps/ directory."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="renew",
        description="Create a new Elixir project with release, CI and optional Ecto, AMQP and Docker support",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  renew hello_world\n"
            "  renew hello_world --module HelloWorld --sup\n"
            "  renew shop --sup --ecto --ecto-db postgres --docker\n"
            "  renew platform --umbrella\n"
        ),
    )
    parser.add_argument("path", help="Directory of the new project")
    parser.add_argument(
        "--sup",
        action="store_true",
        help="Generate an OTP application skeleton with a supervision tree",
    )
    parser.add_argument(
        "--umbrella",
        action="store_true",
        help="Generate an umbrella project",
    )
    parser.add_argument("--app", default=None, help="OTP application name (default: PATH basename)")
    parser.add_argument("--module", default=None, help="Module name (default: camelized app name)")
    parser.add_argument("--ecto", action="store_true", help="Add the Ecto persistence layer")
    parser.add_argument(
        "--ecto-db",
        default="postgres",
        metavar="DB",
        help=f"Ecto adapter, one of: {', '.join(SUPPORTED_DATABASES)} (default: postgres)",
    )
    parser.add_argument("--docker", action="store_true", help="Add Docker packaging")
    parser.add_argument("--amqp", action="store_true", help="Add RabbitMQ messaging")
    parser.add_argument(
        "--elixir-version",
        default=None,
        help="Elixir version targeted by the project (default: $RENEW_ELIXIR_VERSION or 1.3.0)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the planned operations without writing anything",
    )
    return parser


def _print_plan(plan: GenerationPlan) -> None:
    rows = [("generators", ", ".join(plan.generator_names))]
    rows.extend(
        (type(operation).__name__, operation_path(operation)) for operation in plan.operations
    )
    print_summary_table(rows, title=f"Plan for {plan.config.application_name}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``renew`` and ``python -m renew``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = RenewSettings.from_env()
    path = Path(args.path)

    try:
        config = ProjectConfig.from_path(
            path,
            app=args.app,
            module=args.module,
            supervisor=args.sup,
            umbrella=args.umbrella,
            ecto=args.ecto,
            ecto_db=args.ecto_db,
            docker=args.docker,
            amqp=args.amqp,
            elixir_version=args.elixir_version or settings.elixir_version,
        )
        generator = ProjectGenerator(renderer=TemplateRenderer(settings.template_dir))
        if args.dry_run:
            plan = generator.plan(config, path)
        else:
            plan = generator.generate(config, path)
    except RenewError as exc:
        print_error(str(exc))
        sys.exit(1)
    except OSError as exc:
        print_error(f"{exc.strerror or exc}: {exc.filename}" if exc.filename else str(exc))
        sys.exit(1)

    if args.dry_run:
        _print_plan(plan)
        print_warning("Dry run: no files were written.")
        return

    message = UMBRELLA_MESSAGE if config.umbrella else PROJECT_MESSAGE
    print_success(
        f"Created {config.application_name} with: {', '.join(plan.generator_names)}"
    )
    print_panel(message.format(path=escape(args.path)))


if __name__ == "__main__":
    main()
