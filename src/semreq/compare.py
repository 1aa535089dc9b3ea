# SPDX-License-Identifier: MIT
"""Version comparison following SemVer 2.0.0 precedence.

Precedence is decided by MAJOR, MINOR and PATCH, then by pre-release
identifiers. A release sorts after all of its pre-releases. Build metadata
is ignored in comparisons.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from .semver import Identifier, Numeric, Version, parse_version


class Ordering(IntEnum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    @property
    def symbol(self) -> str:
        return {Ordering.LESS: "<", Ordering.EQUAL: "==", Ordering.GREATER: ">"}[self]


def _cmp(a, b) -> Ordering:
    if a == b:
        return Ordering.EQUAL
    return Ordering.LESS if a < b else Ordering.GREATER


def _compare_identifier(id1: Identifier, id2: Identifier) -> Ordering:
    """Compare two pre-release identifiers at the same position.

    Numeric identifiers always have lower precedence than alphanumeric ones.
    """
    if isinstance(id1, Numeric):
        if isinstance(id2, Numeric):
            return _cmp(id1.value, id2.value)
        return Ordering.LESS
    if isinstance(id2, Numeric):
        return Ordering.GREATER
    # Identifiers are ASCII only, so codepoint order is byte order
    return _cmp(id1.value, id2.value)


def _compare_prerelease(pre1: tuple[Identifier, ...], pre2: tuple[Identifier, ...]) -> Ordering:
    """Compare two pre-release identifier sequences.

    Per SemVer: a version without pre-release has higher precedence
    than one with pre-release (1.0.0 > 1.0.0-alpha).
    """
    if not pre1 and not pre2:
        return Ordering.EQUAL
    if not pre1:
        return Ordering.GREATER  # Release > pre-release
    if not pre2:
        return Ordering.LESS  # Pre-release < release

    for id1, id2 in zip(pre1, pre2):
        result = _compare_identifier(id1, id2)
        if result is not Ordering.EQUAL:
            return result

    # All compared parts equal - longer pre-release has higher precedence
    return _cmp(len(pre1), len(pre2))


def compare_versions(version1: Union[str, Version], version2: Union[str, Version]) -> Ordering:
    """Compare two semantic versions.

    Args:
        version1: First version (string or Version object)
        version2: Second version (string or Version object)

    Returns:
        Ordering.LESS if version1 < version2
        Ordering.EQUAL if version1 == version2
        Ordering.GREATER if version1 > version2

    Raises:
        InvalidVersionError: If either version string is invalid

    Note:
        Build metadata is ignored in comparisons per SemVer specification.

    Examples:
        >>> compare_versions("1.0.0", "2.0.0")
        <Ordering.LESS: -1>
        >>> compare_versions("1.0.0-1", "1.0.0-alpha")
        <Ordering.LESS: -1>
        >>> compare_versions("1.0.0+a", "1.0.0+b")
        <Ordering.EQUAL: 0>
    """
    v1 = parse_version(version1) if isinstance(version1, str) else version1
    v2 = parse_version(version2) if isinstance(version2, str) else version2

    for attr in ("major", "minor", "patch"):
        result = _cmp(getattr(v1, attr), getattr(v2, attr))
        if result is not Ordering.EQUAL:
            return result

    return _compare_prerelease(v1.pre, v2.pre)


def version_key(version: Union[str, Version]) -> tuple:
    """Return a sort key for a version, consistent with compare_versions.

    Examples:
        >>> sorted(["1.0.0", "2.0.0", "1.0.0-alpha"], key=version_key)
        ['1.0.0-alpha', '1.0.0', '2.0.0']
    """
    v = parse_version(version) if isinstance(version, str) else version

    # Releases get (1,) so they sort after any (0, ...) pre-release key.
    # Within identifiers, (0, int) sorts before (1, str).
    if not v.pre:
        prerelease_key: tuple = (1,)
    else:
        parts = tuple(
            (0, identifier.value, "") if isinstance(identifier, Numeric) else (1, 0, identifier.value)
            for identifier in v.pre
        )
        prerelease_key = (0, parts)

    return (v.major, v.minor, v.patch, prerelease_key)
