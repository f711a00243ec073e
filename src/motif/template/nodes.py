"""AST nodes for Motif templates.

Nodes are immutable and track their source location for error reporting.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    lineno: int
    col_offset: int


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Literal(Expr):
    """String, number, boolean or null literal."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class Path(Expr):
    """Context lookup: ``name``, ``user.name``, ``../title``, ``this``, ``@index``.

    Attributes:
        parts: Segments after ``this``/``..`` prefixes
        depth: Number of ``../`` hops to an enclosing context
        data: True for ``@``-prefixed private data (``@index``, ``@root``)
        original: Source spelling, used for helper lookup and messages
    """

    parts: tuple[str, ...]
    depth: int = 0
    data: bool = False
    original: str = ""

    @property
    def is_helper_name(self) -> bool:
        """True when this path could name a helper (one plain segment)."""
        return (
            not self.data
            and self.depth == 0
            and len(self.parts) == 1
            and self.original == self.parts[0]
        )


@dataclass(frozen=True, slots=True)
class Call(Expr):
    """Helper call or lookup: ``path param... key=value...``"""

    path: Expr
    params: tuple[Expr, ...] = ()
    hash: tuple[tuple[str, Expr], ...] = ()

    @property
    def has_arguments(self) -> bool:
        return bool(self.params or self.hash)


@dataclass(frozen=True, slots=True)
class SubExpr(Expr):
    """Parenthesised helper call used as an argument: ``(eq a b)``"""

    call: Call


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text between tags."""

    value: str


@dataclass(frozen=True, slots=True)
class Mustache(Node):
    """Output tag: ``{{call}}`` (escaped) or ``{{{call}}}`` (raw)."""

    call: Call
    escape: bool = True
    source: str = ""


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Block tag: ``{{#call}}program{{else}}inverse{{/name}}``.

    ``{{^call}}...{{/name}}`` parses to a Block with the body as
    ``inverse`` and an empty ``program``.
    """

    call: Call
    program: Sequence[Node]
    inverse: Sequence[Node] | None = None
    source: str = ""


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Partial include: ``{{> name [context] [key=value...]}}``"""

    name: Expr
    context: Expr | None = None
    hash: tuple[tuple[str, Expr], ...] = ()


@dataclass(frozen=True, slots=True)
class TemplateNode(Node):
    """Root of a parsed template."""

    body: Sequence[Node]
    name: str | None = None


__all__ = [
    "Block",
    "Call",
    "Expr",
    "Literal",
    "Mustache",
    "Node",
    "Partial",
    "Path",
    "SubExpr",
    "TemplateNode",
    "Text",
]
