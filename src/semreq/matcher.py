# SPDX-License-Identifier: MIT
"""Matching versions against compiled requirements."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from .compare import Ordering, compare_versions
from .compiler import CompiledClause, CompiledNode, CompiledRequirement, compile_requirement
from .requirement import And, Operator, Requirement
from .semver import Version, parse_version

# Orderings of compare(version, operand) that satisfy each operator
_ALLOWED: dict[Operator, frozenset[Ordering]] = {
    Operator.EQ: frozenset({Ordering.EQUAL}),
    Operator.NE: frozenset({Ordering.LESS, Ordering.GREATER}),
    Operator.GT: frozenset({Ordering.GREATER}),
    Operator.GE: frozenset({Ordering.GREATER, Ordering.EQUAL}),
    Operator.LT: frozenset({Ordering.LESS}),
    Operator.LE: frozenset({Ordering.LESS, Ordering.EQUAL}),
}

RequirementLike = Union[str, Requirement, CompiledRequirement]
VersionLike = Union[str, Version]


def _evaluate(node: CompiledNode, version: Version) -> bool:
    if isinstance(node, CompiledClause):
        if (
            node.excludes_bound_prereleases
            and version.is_prerelease
            and version.base_version == node.operand.base_version
        ):
            return False
        return compare_versions(version, node.operand) in _ALLOWED[node.operator]
    if isinstance(node, And):
        return _evaluate(node.left, version) and _evaluate(node.right, version)
    return _evaluate(node.left, version) or _evaluate(node.right, version)


def _as_compiled(requirement: RequirementLike) -> CompiledRequirement:
    if isinstance(requirement, CompiledRequirement):
        return requirement
    return compile_requirement(requirement)


def matches(requirement: RequirementLike, version: VersionLike, allow_pre: bool = True) -> bool:
    """Check whether a version satisfies a requirement.

    Args:
        requirement: A CompiledRequirement. A Requirement or requirement
            string is accepted and compiled on the fly; compile once and
            reuse the result when matching many versions.
        version: The candidate Version or version string
        allow_pre: When False, pre-release candidates only match if the
            requirement itself mentions a pre-release operand

    Returns:
        True if the version satisfies the requirement

    Raises:
        InvalidVersionError: If a version string is invalid
        InvalidRequirementError: If a requirement string is invalid

    Examples:
        >>> matches(compile_requirement("~> 2.1.2"), parse_version("2.1.9"))
        True
        >>> matches("~> 2.1", "3.0.0-alpha")
        False
        >>> matches(">= 2.0.0", "2.1.0-dev", allow_pre=False)
        False
        >>> matches(">= 2.0.0-dev", "2.1.0-dev", allow_pre=False)
        True
    """
    compiled = _as_compiled(requirement)
    candidate = parse_version(version) if isinstance(version, str) else version

    if not allow_pre and candidate.is_prerelease and not compiled.mentions_prerelease:
        return False

    return _evaluate(compiled.root, candidate)


def filter_versions(
    requirement: RequirementLike,
    versions: Iterable[VersionLike],
    allow_pre: bool = True,
) -> list[Version]:
    """Return the versions satisfying a requirement, in input order."""
    compiled = _as_compiled(requirement)
    candidates = (parse_version(v) if isinstance(v, str) else v for v in versions)
    return [v for v in candidates if matches(compiled, v, allow_pre=allow_pre)]


def max_satisfying(
    requirement: RequirementLike,
    versions: Iterable[VersionLike],
    allow_pre: bool = True,
) -> Optional[Version]:
    """Return the highest version satisfying a requirement, or None."""
    satisfying = filter_versions(requirement, versions, allow_pre=allow_pre)
    if not satisfying:
        return None
    return max(satisfying)
