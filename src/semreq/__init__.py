# SPDX-License-Identifier: MIT
"""Semantic version parsing, comparison and requirement matching.

This package parses SemVer 2.0.0 versions, orders them by precedence and
matches them against requirement expressions built from ``==``, ``!=``,
``>``, ``>=``, ``<``, ``<=`` and the compatible-release operator ``~>``,
joined with ``and`` / ``or``.

Example:
    >>> from semreq import parse_version, compile_requirement, matches
    >>>
    >>> version = parse_version("1.2.3-alpha.1+build.456")
    >>> version.major
    1
    >>> version.prerelease
    'alpha.1'
    >>>
    >>> requirement = compile_requirement("~> 1.2")
    >>> matches(requirement, parse_version("1.9.0"))
    True
    >>> matches(requirement, version, allow_pre=False)
    False
"""

__version__ = "0.1.0"

from .errors import (
    ErrorKind,
    SemreqError,
    InvalidVersionError,
    InvalidRequirementError,
)
from .semver import (
    Version,
    Numeric,
    Alphanumeric,
    parse_version,
    try_parse_version,
    is_valid_semver,
    to_string,
    SEMVER_PATTERN,
)
from .compare import (
    Ordering,
    compare_versions,
    version_key,
)
from .requirement import (
    Operator,
    PartialVersion,
    Clause,
    And,
    Or,
    Requirement,
    parse_requirement,
    is_valid_requirement,
)
from .compiler import (
    CompiledClause,
    CompiledRequirement,
    compile_requirement,
)
from .matcher import (
    matches,
    filter_versions,
    max_satisfying,
)

__all__ = [
    # Errors
    "ErrorKind",
    "SemreqError",
    "InvalidVersionError",
    "InvalidRequirementError",
    # Version parsing
    "Version",
    "Numeric",
    "Alphanumeric",
    "parse_version",
    "try_parse_version",
    "is_valid_semver",
    "to_string",
    "SEMVER_PATTERN",
    # Version comparison
    "Ordering",
    "compare_versions",
    "version_key",
    # Requirement parsing
    "Operator",
    "PartialVersion",
    "Clause",
    "And",
    "Or",
    "Requirement",
    "parse_requirement",
    "is_valid_requirement",
    # Compilation and matching
    "CompiledClause",
    "CompiledRequirement",
    "compile_requirement",
    "matches",
    "filter_versions",
    "max_satisfying",
]
