# SPDX-License-Identifier: MIT
"""Semantic version parsing.

Supports MAJOR.MINOR.PATCH format with optional pre-release and build metadata:
- Pre-release: -alpha, -alpha.1, -beta, -beta.2, -rc, -rc.1, -0.3.7
- Build metadata: +build, +build.123, +20240101

Pre-release identifiers are classified once, at parse time, into
``Numeric`` or ``Alphanumeric`` values. Build metadata is kept as the raw
dot-joined string since it never takes part in ordering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from .errors import ErrorKind, InvalidVersionError

# Building blocks shared with the requirement operand grammar
NUMBER = r"0|[1-9][0-9]*"
PRERELEASE_IDENTIFIER = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
PRERELEASE = rf"{PRERELEASE_IDENTIFIER}(?:\.{PRERELEASE_IDENTIFIER})*"
BUILD = r"[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*"

# Semantic versioning regex pattern (SemVer 2.0.0 compliant)
# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = re.compile(
    rf"^(?P<major>{NUMBER})"
    rf"\.(?P<minor>{NUMBER})"
    rf"\.(?P<patch>{NUMBER})"
    rf"(?:-(?P<prerelease>{PRERELEASE}))?"
    rf"(?:\+(?P<buildmetadata>{BUILD}))?\Z"
)

_ALPHANUMERIC_IDENTIFIER = re.compile(r"[0-9A-Za-z-]+\Z")
_NUMERIC_IDENTIFIER = re.compile(r"[0-9]+\Z")
_BUILD_PATTERN = re.compile(rf"(?:{BUILD})\Z")
_VERSION_ALPHABET = re.compile(r"[0-9A-Za-z.+-]+\Z")


@dataclass(frozen=True, slots=True)
class Numeric:
    """A pre-release identifier made only of digits, compared numerically."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValueError(f"Numeric identifier must be a non-negative int, got {self.value!r}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Alphanumeric:
    """A pre-release identifier containing at least one letter or hyphen."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _ALPHANUMERIC_IDENTIFIER.match(self.value):
            raise ValueError(f"Invalid alphanumeric identifier: {self.value!r}")
        if _NUMERIC_IDENTIFIER.match(self.value):
            raise ValueError(f"All-digit identifier must be Numeric: {self.value!r}")

    def __str__(self) -> str:
        return self.value


Identifier = Union[Numeric, Alphanumeric]


def parse_identifiers(text: str) -> tuple[Identifier, ...]:
    """Split a dot-separated pre-release string into classified identifiers.

    The caller is responsible for having validated ``text`` against
    ``PRERELEASE`` first.
    """
    return tuple(
        Numeric(int(part)) if _NUMERIC_IDENTIFIER.match(part) else Alphanumeric(part)
        for part in text.split(".")
    )


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Represents a parsed semantic version.

    Equality, hashing and ordering ignore ``build``: ``1.0.0+a`` and
    ``1.0.0+b`` are equal and collide as dictionary keys. Use
    ``identical()`` for a field-wise comparison.

    Build versions with ``parse_version``. Direct construction is allowed
    for callers that already hold the components, and it enforces the same
    field rules as the grammar, raising ``ValueError`` otherwise.

    Attributes:
        major: Major version number (breaking changes)
        minor: Minor version number (new features, backward compatible)
        patch: Patch version number (bug fixes, backward compatible)
        pre: Pre-release identifiers in source order
        build: Optional build metadata (e.g., "build.123", "20240101")
    """

    major: int
    minor: int
    patch: int
    pre: tuple[Identifier, ...] = ()
    build: Optional[str] = None

    def __post_init__(self) -> None:
        for attr in ("major", "minor", "patch"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{attr} must be a non-negative int, got {value!r}")
        if not isinstance(self.pre, tuple):
            object.__setattr__(self, "pre", tuple(self.pre))
        for identifier in self.pre:
            if not isinstance(identifier, (Numeric, Alphanumeric)):
                raise ValueError(f"Invalid pre-release identifier: {identifier!r}")
        if self.build is not None and not _BUILD_PATTERN.match(self.build):
            raise ValueError(f"Invalid build metadata: {self.build!r}")

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        return to_string(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_fields() == other._precedence_fields()

    def __hash__(self) -> int:
        return hash(self._precedence_fields())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare(self, other) >= 0

    def _precedence_fields(self) -> tuple:
        return (self.major, self.minor, self.patch, self.pre)

    def identical(self, other: Version) -> bool:
        """Return True if every field, build metadata included, is equal."""
        return self._precedence_fields() == other._precedence_fields() and self.build == other.build

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is a pre-release version."""
        return bool(self.pre)

    @property
    def prerelease(self) -> Optional[str]:
        """Return the pre-release identifiers joined by dots, or None."""
        if not self.pre:
            return None
        return ".".join(str(identifier) for identifier in self.pre)

    @property
    def base_version(self) -> str:
        """Return the base version without pre-release or build metadata."""
        return f"{self.major}.{self.minor}.{self.patch}"


def _compare(a: Version, b: Version) -> int:
    from .compare import compare_versions

    return compare_versions(a, b)


def to_string(version: Version) -> str:
    """Render a version in canonical ``MAJOR.MINOR.PATCH[-pre][+build]`` form.

    Examples:
        >>> to_string(parse_version("1.0.0-alpha.1+build.5"))
        '1.0.0-alpha.1+build.5'
    """
    text = version.base_version
    if version.pre:
        text += f"-{version.prerelease}"
    if version.build:
        text += f"+{version.build}"
    return text


def _error_kind(version_string: str) -> ErrorKind:
    """Decide whether a rejected string is malformed or merely out of grammar."""
    if not _VERSION_ALPHABET.match(version_string):
        return ErrorKind.MALFORMED
    if any(not segment for segment in re.split(r"[.+]", version_string)):
        return ErrorKind.MALFORMED
    return ErrorKind.OUT_OF_GRAMMAR


def parse_version(version_string: str) -> Version:
    """Parse a semantic version string into a Version object.

    Args:
        version_string: A string following semantic versioning format
            (MAJOR.MINOR.PATCH[-prerelease][+build]). The whole string
            must match; surrounding whitespace is rejected as malformed.

    Returns:
        A Version object with parsed components

    Raises:
        InvalidVersionError: If the string does not follow semantic versioning.
            ``kind`` tells malformed text apart from text that is merely out
            of grammar (e.g. a missing PATCH).

    Examples:
        >>> parse_version("1.2.3")
        Version(major=1, minor=2, patch=3, pre=(), build=None)

        >>> parse_version("1.0.0-alpha.1").prerelease
        'alpha.1'

        >>> parse_version("2.0-alpha1")
        Traceback (most recent call last):
        ...
        semreq.errors.InvalidVersionError: Invalid semantic version: 2.0-alpha1
    """
    if not isinstance(version_string, str):
        raise InvalidVersionError(
            str(version_string),
            f"Version must be a string, got {type(version_string).__name__}",
            ErrorKind.MALFORMED,
        )

    if not version_string:
        raise InvalidVersionError(version_string, "Version string cannot be empty", ErrorKind.MALFORMED)

    match = SEMVER_PATTERN.match(version_string)
    if not match:
        raise InvalidVersionError(version_string, kind=_error_kind(version_string))

    prerelease = match.group("prerelease")
    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        pre=parse_identifiers(prerelease) if prerelease else (),
        build=match.group("buildmetadata"),
    )


def try_parse_version(version_string: str) -> Optional[Version]:
    """Parse a version string, returning None instead of raising.

    Examples:
        >>> try_parse_version("1.0") is None
        True
    """
    try:
        return parse_version(version_string)
    except InvalidVersionError:
        return None


def is_valid_semver(version_string: str) -> bool:
    """Check if a string is a valid semantic version.

    Examples:
        >>> is_valid_semver("1.0.0")
        True
        >>> is_valid_semver("1.0")
        False
        >>> is_valid_semver("1.0.0-alpha")
        True
    """
    if not isinstance(version_string, str):
        return False
    return SEMVER_PATTERN.match(version_string) is not None
