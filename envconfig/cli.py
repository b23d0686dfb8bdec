"""
envconfig CLI

Command-line interface for inspecting the environment configuration.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .environment import (
    EnvironmentConfig,
    build_config,
    get_all_env,
    load_env_file,
    parse_key_list,
    production_advisories,
)
from .logger import get_component_logger

log = get_component_logger("cli")


def resolve_config(env_file: Optional[Path] = None) -> EnvironmentConfig:
    """
    Pick the snapshot a command works on.

    Args:
        env_file: Alternate dotenv file; the import-time snapshot is used when None

    Returns:
        Configuration snapshot
    """
    if env_file is None:
        return get_all_env()
    # Seed a copy so the alternate file never leaks into this process
    environ = dict(os.environ)
    load_env_file(env_file, environ)
    return build_config(environ, parse_key_list(environ.get("ENVCONFIG_EXTRA_KEYS")))


def build_table(config: EnvironmentConfig, reveal: bool = False) -> Table:
    """Create the key/value table for `show`."""
    table = Table(
        show_header=True,
        header_style="bold magenta",
        box=None,
    )
    table.add_column("Key", min_width=14)
    table.add_column("Value")

    values = config.as_dict() if reveal else config.redacted()
    for key, value in values.items():
        if value is None:
            table.add_row(key, Text("(unset)", style="dim italic"))
        else:
            table.add_row(key, Text(str(value)))
    return table


def cmd_show(args, console: Console) -> int:
    config = resolve_config(args.env_file)
    console.print(Panel(
        build_table(config, reveal=args.reveal),
        title=f"[bold]Environment: {config.node_env}[/bold]",
        border_style="blue",
        padding=(0, 1),
    ))
    return 0


def cmd_get(args, console: Console) -> int:
    config = resolve_config(args.env_file)
    if args.key not in config:
        log.error(f"Unknown key: {args.key}")
        return 1

    value = config[args.key]
    if value is None:
        log.error(f"{args.key} is not set")
        return 1

    console.print(str(value), markup=False, highlight=False)
    return 0


def cmd_check(args, console: Console) -> int:
    config = resolve_config(args.env_file)
    # Reported through the panel; loading already logs them
    warnings = production_advisories(config)

    if not config.is_production:
        console.print(Panel(
            f"NODE_ENV is '{config.node_env}', production checks skipped.",
            border_style="dim",
        ))
        return 0

    if warnings:
        console.print(Panel(
            "\n".join(warnings),
            title="[bold]Production readiness[/bold]",
            border_style="yellow",
        ))
        return 1 if args.strict else 0

    console.print(Panel(
        "All production settings are present.",
        title="[bold]Production readiness[/bold]",
        border_style="green",
    ))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="envconfig",
        description="Inspect the process environment configuration",
    )
    parser.add_argument("--env-file", type=Path, metavar="PATH",
                        help="Read this dotenv file instead of the project .env")

    subparsers = parser.add_subparsers(dest="command")

    show = subparsers.add_parser("show", help="Show the configuration snapshot")
    show.add_argument("--reveal", action="store_true",
                      help="Show secret values instead of masking them")
    show.set_defaults(handler=cmd_show)

    get = subparsers.add_parser("get", help="Print a single configuration value")
    get.add_argument("key", help="Field name (port, node_env, nodeEnv, ...) or extra key")
    get.set_defaults(handler=cmd_get)

    check = subparsers.add_parser("check", help="Run the production readiness check")
    check.add_argument("--strict", action="store_true",
                       help="Exit with status 1 when a production setting is missing")
    check.set_defaults(handler=cmd_check)

    return parser


def main(argv=None, console: Optional[Console] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "handler", None):
        parser.print_help()
        return 1

    return args.handler(args, console or Console())


if __name__ == "__main__":
    sys.exit(main())
