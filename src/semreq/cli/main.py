# SPDX-License-Identifier: MIT
"""CLI entry point for the semreq command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ..config import ConfigError, SemreqConfig, find_project_root, load_config
from ..errors import SemreqError


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[SemreqConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> SemreqConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
        return self.config

    def load_optional_config(self) -> SemreqConfig:
        """Load configuration, falling back to defaults outside a project."""
        if self.config is None and self.project_dir is None:
            try:
                find_project_root()
            except ConfigError:
                self.config = SemreqConfig(project_dir=Path.cwd())
        return self.load_config()


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


@click.group()
@click.version_option(package_name="semreq")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Change to directory before running command.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Semantic version and requirement tool.

    Parse and compare versions, and check them against requirements
    such as "~> 2.1" or ">= 2.0.0 and < 2.1.0 or == 3.0.0".

    \b
    Examples:
        semreq parse 1.2.3-rc.1+build.5
        semreq compare 1.0.0-alpha 1.0.0
        semreq match "~> 2.1" 2.1.4 3.0.0
        semreq sort 1.0.0 1.0.0-rc.1 0.9.9
        semreq check
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# Import and register commands
from .commands import requirement, version

cli.add_command(version.parse)
cli.add_command(version.compare)
cli.add_command(version.sort)
cli.add_command(requirement.match)
cli.add_command(requirement.check)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except SemreqError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
