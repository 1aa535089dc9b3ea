# SPDX-License-Identifier: MIT
"""Requirement expression parsing.

A requirement is one or more comparison clauses joined by ``and`` / ``or``:

    ">= 2.0.0 and < 2.1.0 or == 3.0.0"

``and`` binds tighter than ``or``, so the example reads
``(>= 2.0.0 and < 2.1.0) or == 3.0.0``. A bare version means ``==``.
Operands of ``~>`` may omit PATCH and even MINOR; every other operator
takes a full version.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from .errors import InvalidRequirementError
from .semver import (
    BUILD,
    NUMBER,
    PRERELEASE,
    SEMVER_PATTERN,
    Identifier,
    Version,
    parse_identifiers,
)

PARTIAL_PATTERN = re.compile(
    rf"^(?P<major>{NUMBER})"
    rf"(?:\.(?P<minor>{NUMBER})"
    rf"(?:\.(?P<patch>{NUMBER}))?)?"
    rf"(?:-(?P<prerelease>{PRERELEASE}))?"
    rf"(?:\+(?P<buildmetadata>{BUILD}))?\Z"
)

_OPERATOR_CHARS = "<>=!~"


class Operator(str, Enum):
    """Comparison operators accepted in a requirement clause."""

    EQ = "=="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    COMPATIBLE = "~>"

    def __str__(self) -> str:
        return self.value


# Longest first so ">=" is not read as ">" followed by "="
_OPERATORS_BY_LENGTH = sorted(Operator, key=lambda op: len(op.value), reverse=True)


@dataclass(frozen=True, slots=True)
class PartialVersion:
    """A requirement operand. MINOR and PATCH are None when omitted."""

    major: int
    minor: Optional[int] = None
    patch: Optional[int] = None
    pre: tuple[Identifier, ...] = ()
    build: Optional[str] = None

    def __str__(self) -> str:
        text = str(self.major)
        if self.minor is not None:
            text += f".{self.minor}"
            if self.patch is not None:
                text += f".{self.patch}"
        if self.pre:
            text += "-" + ".".join(str(identifier) for identifier in self.pre)
        if self.build:
            text += f"+{self.build}"
        return text

    @property
    def is_complete(self) -> bool:
        """Return True if both MINOR and PATCH are present."""
        return self.minor is not None and self.patch is not None

    def to_version(self) -> Version:
        """Fill omitted components with zero."""
        return Version(
            major=self.major,
            minor=self.minor or 0,
            patch=self.patch or 0,
            pre=self.pre,
            build=self.build,
        )


@dataclass(frozen=True, slots=True)
class Clause:
    """A single ``operator operand`` comparison."""

    operator: Operator
    operand: PartialVersion

    def __str__(self) -> str:
        return f"{self.operator} {self.operand}"


@dataclass(frozen=True, slots=True)
class And:
    left: "Node"
    right: "Node"

    def __str__(self) -> str:
        return f"{self.left} and {self.right}"


@dataclass(frozen=True, slots=True)
class Or:
    left: "Node"
    right: "Node"

    def __str__(self) -> str:
        return f"{self.left} or {self.right}"


Node = Union[Clause, And, Or]


@dataclass(frozen=True, slots=True)
class Requirement:
    """A parsed, not yet compiled, requirement.

    Attributes:
        source: The requirement text as given by the caller
        root: Root of the boolean expression tree
    """

    source: str
    root: Node

    def __str__(self) -> str:
        return self.source

    def clauses(self) -> Iterator[Clause]:
        """Yield every clause in left-to-right order."""
        stack: list[Node] = [self.root]
        while stack:
            node = stack.pop()
            if isinstance(node, Clause):
                yield node
            else:
                stack.append(node.right)
                stack.append(node.left)


@dataclass(frozen=True, slots=True)
class Token:
    kind: str  # "operator", "and", "or" or "operand"
    text: str
    index: int


def tokenize(source: str) -> list[Token]:
    """Split a requirement string into tokens.

    Whitespace separates tokens. An operator written directly against its
    operand (``>=1.0.0``) is split into two tokens.

    Raises:
        InvalidRequirementError: On an unknown operator
    """
    tokens: list[Token] = []
    for word in source.split():
        if word in ("and", "or"):
            tokens.append(Token(word, word, len(tokens)))
            continue

        if word[0] not in _OPERATOR_CHARS:
            tokens.append(Token("operand", word, len(tokens)))
            continue

        operator = next((op for op in _OPERATORS_BY_LENGTH if word.startswith(op.value)), None)
        rest = word[len(operator.value) :] if operator else word
        if operator is None or (rest and rest[0] in _OPERATOR_CHARS):
            raise InvalidRequirementError(
                source,
                f"Invalid requirement {source!r}: unknown operator {word!r}",
                len(tokens),
            )
        tokens.append(Token("operator", operator.value, len(tokens)))
        if rest:
            tokens.append(Token("operand", rest, len(tokens)))
    return tokens


def _parse_operand(source: str, operator: Operator, token: Token) -> PartialVersion:
    """Parse an operand token, allowing partial versions only after ``~>``."""
    pattern = PARTIAL_PATTERN if operator is Operator.COMPATIBLE else SEMVER_PATTERN
    match = pattern.match(token.text)
    if not match:
        expected = "a version" if operator is Operator.COMPATIBLE else "a full MAJOR.MINOR.PATCH version"
        raise InvalidRequirementError(
            source,
            f"Invalid requirement {source!r}: expected {expected} after {operator.value!r}, "
            f"got {token.text!r}",
            token.index,
        )

    groups = match.groupdict()
    prerelease = groups["prerelease"]
    return PartialVersion(
        major=int(groups["major"]),
        minor=int(groups["minor"]) if groups["minor"] is not None else None,
        patch=int(groups["patch"]) if groups["patch"] is not None else None,
        pre=parse_identifiers(prerelease) if prerelease else (),
        build=groups["buildmetadata"],
    )


class _Parser:
    """Recursive descent parser.

    Grammar:
        requirement := or_expr EOF
        or_expr     := and_expr ("or" and_expr)*
        and_expr    := clause ("and" clause)*
        clause      := [operator] operand
    """

    def __init__(self, source: str, tokens: list[Token]) -> None:
        self.source = source
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _peek_kind(self) -> Optional[str]:
        token = self._peek()
        return token.kind if token is not None else None

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _error(self, message: str, position: Optional[int] = None) -> InvalidRequirementError:
        return InvalidRequirementError(
            self.source, f"Invalid requirement {self.source!r}: {message}", position
        )

    def parse(self) -> Node:
        if not self.tokens:
            raise self._error("requirement is empty")
        node = self._or_expr()
        token = self._peek()
        if token is not None:
            raise self._error(f"unexpected {token.text!r}", token.index)
        return node

    def _or_expr(self) -> Node:
        node = self._and_expr()
        while self._peek_kind() == "or":
            self._advance()
            node = Or(node, self._and_expr())
        return node

    def _and_expr(self) -> Node:
        node = self._clause()
        while self._peek_kind() == "and":
            self._advance()
            node = And(node, self._clause())
        return node

    def _clause(self) -> Clause:
        token = self._peek()
        if token is None:
            previous = self.tokens[-1]
            raise self._error(f"dangling {previous.text!r}", previous.index)
        if token.kind in ("and", "or"):
            raise self._error(f"expected a clause before {token.text!r}", token.index)

        operator = Operator.EQ
        if token.kind == "operator":
            operator = Operator(self._advance().text)
            token = self._peek()
            if token is None:
                raise self._error(f"operator {operator.value!r} has no version", self.pos - 1)
            if token.kind != "operand":
                raise self._error(
                    f"expected a version after {operator.value!r}, got {token.text!r}",
                    token.index,
                )

        self._advance()
        return Clause(operator, _parse_operand(self.source, operator, token))


def parse_requirement(requirement_string: str) -> Requirement:
    """Parse a requirement string into a Requirement tree.

    Args:
        requirement_string: Clauses joined by ``and`` / ``or``

    Returns:
        A Requirement holding the original text and the expression tree

    Raises:
        InvalidRequirementError: On unknown or repeated operators, malformed
            operands, dangling connectives or trailing input

    Examples:
        >>> str(parse_requirement("~> 2.1").root)
        '~> 2.1'
        >>> parse_requirement("== == 2.0.1")
        Traceback (most recent call last):
        ...
        semreq.errors.InvalidRequirementError: Invalid requirement '== == 2.0.1': expected a version after '==', got '=='
    """
    if not isinstance(requirement_string, str):
        raise InvalidRequirementError(
            str(requirement_string),
            f"Requirement must be a string, got {type(requirement_string).__name__}",
        )

    tokens = tokenize(requirement_string)
    root = _Parser(requirement_string, tokens).parse()
    return Requirement(source=requirement_string.strip(), root=root)


def is_valid_requirement(requirement_string: str) -> bool:
    """Check if a string is a valid requirement."""
    try:
        parse_requirement(requirement_string)
    except InvalidRequirementError:
        return False
    return True
