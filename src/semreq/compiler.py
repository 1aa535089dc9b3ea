# SPDX-License-Identifier: MIT
"""Requirement compilation.

Compiling turns a parsed ``Requirement`` into a ``CompiledRequirement``:
every operand becomes a full ``Version`` and every ``~>`` clause is
rewritten into an equivalent ``>= lower and < upper`` pair. The matcher
therefore only ever sees the six plain comparison operators.

Expansion of ``~>``:

    ~> 2.1.2        ->  >= 2.1.2 and < 2.2.0
    ~> 2.1.2-dev    ->  >= 2.1.2-dev and < 2.2.0
    ~> 2.1          ->  >= 2.1.0 and < 3.0.0
    ~> 2            ->  >= 2.0.0 and < 3.0.0

The upper bound is always a plain release and is exclusive of its own
pre-releases: ``~> 2.1`` admits neither ``3.0.0`` nor ``3.0.0-alpha``, even
though ``3.0.0-alpha < 3.0.0`` by precedence. The ``<`` clause carries
``excludes_bound_prereleases`` so the matcher can tell it apart from a
hand-written ``< 3.0.0``, which does admit ``3.0.0-alpha``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Union

from .requirement import And, Clause, Node, Operator, Or, PartialVersion, Requirement, parse_requirement
from .semver import Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompiledClause:
    """A comparison against a complete version. Never uses ``~>``.

    ``excludes_bound_prereleases`` is only set on the ``<`` upper bound of an
    expanded ``~>``. It also rejects pre-releases of the operand's own
    MAJOR.MINOR.PATCH.
    """

    operator: Operator
    operand: Version
    excludes_bound_prereleases: bool = False

    def __post_init__(self) -> None:
        if self.operator is Operator.COMPATIBLE:
            raise ValueError("'~>' must be expanded before it reaches a compiled clause")
        if self.excludes_bound_prereleases and self.operator is not Operator.LT:
            raise ValueError("Only a '<' clause can exclude pre-releases of its bound")

    def __str__(self) -> str:
        return f"{self.operator} {self.operand}"


CompiledNode = Union[CompiledClause, And, Or]


def _walk(root: CompiledNode) -> Iterator[CompiledClause]:
    stack: list[CompiledNode] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, CompiledClause):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


@dataclass(frozen=True, slots=True)
class CompiledRequirement:
    """A requirement ready to be matched against versions.

    Attributes:
        source: The original requirement text
        root: Expression tree with ``~>`` expanded
        mentions_prerelease: True if any operand carries a pre-release tag
    """

    source: str
    root: CompiledNode
    mentions_prerelease: bool

    def __str__(self) -> str:
        return self.source

    def clauses(self) -> Iterator[CompiledClause]:
        """Yield every compiled clause in left-to-right order."""
        return _walk(self.root)

    def describe(self) -> str:
        """Return the expanded form, e.g. ``>= 2.1.0 and < 3.0.0``."""
        return str(self.root)


def _compatible_upper_bound(operand: PartialVersion) -> Version:
    """Return the exclusive upper bound of a ``~>`` operand."""
    if operand.minor is None or operand.patch is None:
        return Version(operand.major + 1, 0, 0)
    return Version(operand.major, operand.minor + 1, 0)


def _compile_clause(clause: Clause) -> CompiledNode:
    lower = clause.operand.to_version()
    if clause.operator is not Operator.COMPATIBLE:
        return CompiledClause(clause.operator, lower)

    return And(
        CompiledClause(Operator.GE, lower),
        CompiledClause(
            Operator.LT, _compatible_upper_bound(clause.operand), excludes_bound_prereleases=True
        ),
    )


def _compile_node(node: Node) -> CompiledNode:
    if isinstance(node, Clause):
        return _compile_clause(node)
    if isinstance(node, And):
        return And(_compile_node(node.left), _compile_node(node.right))
    if isinstance(node, Or):
        return Or(_compile_node(node.left), _compile_node(node.right))
    raise TypeError(f"Unexpected requirement node: {type(node).__name__}")


def compile_requirement(requirement: Union[str, Requirement]) -> CompiledRequirement:
    """Compile a requirement for matching.

    Args:
        requirement: A parsed Requirement, or a requirement string which is
            parsed first

    Returns:
        The CompiledRequirement

    Raises:
        InvalidRequirementError: If a string is given and it does not parse
        TypeError: If given anything else, including an already compiled
            requirement

    Examples:
        >>> compile_requirement("~> 2.1").describe()
        '>= 2.1.0 and < 3.0.0'
    """
    if isinstance(requirement, str):
        requirement = parse_requirement(requirement)
    elif not isinstance(requirement, Requirement):
        raise TypeError(
            f"compile_requirement() expects a Requirement or str, got {type(requirement).__name__}"
        )

    root = _compile_node(requirement.root)
    compiled = CompiledRequirement(
        source=requirement.source,
        root=root,
        mentions_prerelease=any(clause.operand.is_prerelease for clause in _walk(root)),
    )

    logger.debug("Compiled requirement %r as %r", requirement.source, compiled.describe())
    return compiled
