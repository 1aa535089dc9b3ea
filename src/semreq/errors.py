# SPDX-License-Identifier: MIT
"""Exception types raised by the version and requirement parsers."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why a string was rejected.

    MALFORMED means the text contains characters or empty segments that no
    version could contain. OUT_OF_GRAMMAR means every character is legal but
    the arrangement is not (missing patch, leading zeros, extra components).
    """

    MALFORMED = "malformed"
    OUT_OF_GRAMMAR = "out_of_grammar"


class SemreqError(Exception):
    """Base class for all semreq errors."""

    pass


class InvalidVersionError(SemreqError, ValueError):
    """Raised when a version string does not follow semantic versioning."""

    def __init__(
        self,
        version: str,
        message: str = "",
        kind: ErrorKind = ErrorKind.OUT_OF_GRAMMAR,
    ):
        self.version = version
        self.kind = kind
        self.message = message or f"Invalid semantic version: {version}"
        super().__init__(self.message)


class InvalidRequirementError(SemreqError, ValueError):
    """Raised when a requirement string cannot be parsed."""

    def __init__(self, requirement: str, message: str = "", position: Optional[int] = None):
        self.requirement = requirement
        self.position = position
        self.message = message or f"Invalid requirement: {requirement}"
        super().__init__(self.message)
