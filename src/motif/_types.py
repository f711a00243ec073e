"""Token types shared by the Motif lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Tag-level tokens produced by the lexer.

    Expression text inside a tag (``helper a b key=v``) stays in the
    token's ``value`` and is parsed by the parser.
    """

    TEXT = "text"
    VARIABLE = "variable"  # {{ expr }}
    RAW_VARIABLE = "raw_variable"  # {{{ expr }}} / {{& expr }}
    BLOCK_OPEN = "block_open"  # {{#helper ...}}
    INVERSE_OPEN = "inverse_open"  # {{^path}}
    BLOCK_CLOSE = "block_close"  # {{/helper}}
    ELSE = "else"  # {{else}} / {{^}} / {{else if x}}
    PARTIAL = "partial"  # {{> name}}
    COMMENT = "comment"  # {{! ... }} / {{!-- ... --}}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexer token with source position (1-based line, 0-based column)."""

    type: TokenType
    value: str
    lineno: int
    col_offset: int
    strip_left: bool = False
    strip_right: bool = False

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"


__all__ = ["Token", "TokenType"]
