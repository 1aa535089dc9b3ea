# SPDX-License-Identifier: MIT
"""Inspect, compare and sort versions."""

from __future__ import annotations

import click

from ...compare import compare_versions
from ...errors import InvalidVersionError
from ...semver import Numeric, Version, parse_version
from ..main import Context, echo_error, echo_info, pass_context


def _parse_or_exit(text: str) -> Version:
    try:
        return parse_version(text)
    except InvalidVersionError as e:
        echo_error(f"{e} ({e.kind.value})")
        raise SystemExit(1)


@click.command()
@click.argument("version_string", metavar="VERSION")
@pass_context
def parse(ctx: Context, version_string: str) -> None:
    """Parse a version and print its components.

    \b
    Examples:
        semreq parse 1.2.3
        semreq parse 1.0.0-alpha.1+build.5
    """
    version = _parse_or_exit(version_string)

    echo_info(str(version))
    if ctx.verbose:
        echo_info(f"  major: {version.major}")
        echo_info(f"  minor: {version.minor}")
        echo_info(f"  patch: {version.patch}")
        for identifier in version.pre:
            kind = "numeric" if isinstance(identifier, Numeric) else "alphanumeric"
            echo_info(f"  pre: {identifier} ({kind})")
        if version.build:
            echo_info(f"  build: {version.build}")


@click.command()
@click.argument("first")
@click.argument("second")
def compare(first: str, second: str) -> None:
    """Compare two versions and print <, == or >.

    Build metadata is ignored, so 1.0.0+a == 1.0.0+b.

    \b
    Examples:
        semreq compare 1.0.0-alpha 1.0.0
    """
    result = compare_versions(_parse_or_exit(first), _parse_or_exit(second))
    echo_info(f"{first} {result.symbol} {second}")


@click.command()
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--reverse",
    "-r",
    is_flag=True,
    help="Sort from highest to lowest precedence.",
)
def sort(versions: tuple[str, ...], reverse: bool) -> None:
    """Print versions ordered by precedence.

    \b
    Examples:
        semreq sort 1.0.0 1.0.0-rc.1 0.9.9
        semreq sort --reverse 2.0.0 10.0.0
    """
    parsed = [_parse_or_exit(text) for text in versions]
    for version in sorted(parsed, reverse=reverse):
        echo_info(str(version))
