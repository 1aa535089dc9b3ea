# SPDX-License-Identifier: MIT
"""Match versions against requirements."""

from __future__ import annotations

from typing import Optional

import click

from ...compiler import compile_requirement
from ...config import ConfigError
from ...errors import InvalidRequirementError, InvalidVersionError
from ...matcher import matches
from ...semver import parse_version
from ..main import Context, echo_error, echo_info, echo_success, echo_warning, pass_context

_allow_pre_option = click.option(
    "--allow-pre/--no-allow-pre",
    default=None,
    help="Let pre-release versions match (defaults to [tool.semreq].allow-pre).",
)


@click.command()
@click.argument("requirement_string", metavar="REQUIREMENT")
@click.argument("versions", nargs=-1, required=True)
@_allow_pre_option
@pass_context
def match(
    ctx: Context,
    requirement_string: str,
    versions: tuple[str, ...],
    allow_pre: Optional[bool],
) -> None:
    """Check versions against a requirement.

    Exits with status 1 if any version does not match.

    \b
    Examples:
        semreq match "~> 2.1" 2.1.4 2.9.0 3.0.0
        semreq match --no-allow-pre ">= 2.0.0" 2.1.0-dev
    """
    if allow_pre is None:
        try:
            allow_pre = ctx.load_optional_config().allow_pre
        except (ConfigError, FileNotFoundError) as e:
            echo_error(str(e))
            raise SystemExit(1)

    try:
        compiled = compile_requirement(requirement_string)
    except InvalidRequirementError as e:
        echo_error(str(e))
        raise SystemExit(1)

    if ctx.verbose:
        echo_info(f"Requirement: {compiled.describe()}")

    all_matched = True
    for text in versions:
        try:
            version = parse_version(text)
        except InvalidVersionError as e:
            echo_error(str(e))
            raise SystemExit(1)

        if matches(compiled, version, allow_pre=allow_pre):
            echo_success(f"{version}: match")
        else:
            echo_info(f"{version}: no match")
            all_matched = False

    if not all_matched:
        raise SystemExit(1)


@click.command()
@click.argument("version_string", metavar="VERSION", required=False)
@_allow_pre_option
@pass_context
def check(ctx: Context, version_string: Optional[str], allow_pre: Optional[bool]) -> None:
    """Check a version against every requirement in [tool.semreq.requirements].

    VERSION defaults to the project's own [project].version.

    \b
    Examples:
        semreq check
        semreq check 0.5.1
    """
    try:
        config = ctx.load_config()
    except (ConfigError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    if version_string is not None:
        try:
            version = parse_version(version_string)
        except InvalidVersionError as e:
            echo_error(str(e))
            raise SystemExit(1)
    elif config.version is not None:
        version = config.version
    else:
        echo_error("No VERSION given and [project].version is not set")
        raise SystemExit(1)

    if not config.requirements:
        echo_warning("No requirements configured in [tool.semreq.requirements]")
        return

    if allow_pre is None:
        allow_pre = config.allow_pre

    failed: list[str] = []
    for name, compiled in config.requirements.items():
        if matches(compiled, version, allow_pre=allow_pre):
            echo_success(f"  {name} ({compiled}): ok")
        else:
            echo_info(f"  {name} ({compiled}): not satisfied")
            failed.append(name)

    if failed:
        echo_error(f"{version} does not satisfy: {', '.join(failed)}")
        raise SystemExit(1)

    echo_success(f"{version} satisfies all {len(config.requirements)} requirement(s).")
