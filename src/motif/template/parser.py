"""Parser for Motif templates.

Builds an immutable AST from lexer tokens. Block structure is parsed
recursively; the expression text inside each tag is parsed by a small
scanner into ``Call``/``Path``/``Literal``/``SubExpr`` nodes.

Expression grammar:
    call     := path_or_literal param* (key '=' param)*
    param    := path | literal | '(' call ')'
    literal  := "str" | 'str' | number | true | false | null | undefined
    path     := ['@'] ('../')* segment (('.' | '/') segment)*
    segment  := name | '[' any ']' | 'this' | '.'

"""

from __future__ import annotations

import re
from collections.abc import Sequence

from motif._types import Token, TokenType
from motif.environment.exceptions import ErrorCode, TemplateSyntaxError
from motif.template.nodes import (
    Block,
    Call,
    Expr,
    Literal,
    Mustache,
    Node,
    Partial,
    Path,
    SubExpr,
    TemplateNode,
    Text,
)

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_KEYWORDS = {"true": True, "false": False, "null": None, "undefined": None}
_WORD_STOP = frozenset(" \t\r\n()=")

# Expression scanner token kinds
_LPAREN, _RPAREN, _STRING, _WORD, _KEY = "lparen", "rparen", "string", "word", "key"


def _scan(text: str) -> list[tuple[str, str, int]]:
    """Scan tag expression text into (kind, value, offset) triples."""
    items: list[tuple[str, str, int]] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
        elif ch == "(":
            items.append((_LPAREN, ch, i))
            i += 1
        elif ch == ")":
            items.append((_RPAREN, ch, i))
            i += 1
        elif ch in "\"'":
            start = i
            i += 1
            buf: list[str] = []
            while i < n and text[i] != ch:
                if text[i] == "\\" and i + 1 < n:
                    i += 1
                buf.append(text[i])
                i += 1
            if i >= n:
                raise ValueError(f"Unterminated string starting at column {start}")
            i += 1
            items.append((_STRING, "".join(buf), start))
        else:
            start = i
            while i < n and text[i] not in _WORD_STOP:
                if text[i] == "[":
                    close = text.find("]", i)
                    i = n if close == -1 else close + 1
                else:
                    i += 1
            word = text[start:i]
            if not word:
                raise ValueError(f"Unexpected '{ch}' at column {start}")
            if i < n and text[i] == "=":
                items.append((_KEY, word, start))
                i += 1
            else:
                items.append((_WORD, word, start))
    return items


def _split_path(word: str) -> list[str]:
    segments: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(word):
        ch = word[i]
        if ch == "[":
            close = word.find("]", i)
            if close == -1:
                raise ValueError(f"Unclosed '[' in path '{word}'")
            current.append(word[i : close + 1])
            i = close + 1
            continue
        if ch in "./":
            if current:
                segments.append("".join(current))
                current = []
            elif word.startswith("..", i):
                segments.append("..")
                i += 1
            elif ch == ".":
                segments.append(".")
        else:
            current.append(ch)
        i += 1
    if current:
        segments.append("".join(current))
    return segments


def parse_path(word: str, lineno: int = 0, col_offset: int = 0) -> Path:
    """Parse a path expression.

    Example:
        >>> parse_path("../user.name")
        Path(lineno=0, col_offset=0, parts=('user', 'name'), depth=1, data=False, original='../user.name')
        >>> parse_path("@index").data
        True
    """
    data = word.startswith("@")
    body = word[1:] if data else word
    depth = 0
    parts: list[str] = []
    for i, segment in enumerate(_split_path(body)):
        if segment == ".." and not parts:
            depth += 1
        elif segment in (".", "this") and i == depth and not parts:
            continue
        elif segment.startswith("[") and segment.endswith("]"):
            parts.append(segment[1:-1])
        elif segment in ("..", "."):
            raise ValueError(f"Invalid path segment '{segment}' in '{word}'")
        else:
            parts.append(segment)
    return Path(lineno, col_offset, tuple(parts), depth, data, word)


class _ExprParser:
    """Recursive-descent parser over scanned expression items."""

    __slots__ = ("_items", "_lineno", "_col", "_pos")

    def __init__(self, items: list[tuple[str, str, int]], lineno: int, col: int):
        self._items = items
        self._pos = 0
        self._lineno = lineno
        self._col = col

    def _peek(self) -> tuple[str, str, int] | None:
        return self._items[self._pos] if self._pos < len(self._items) else None

    def _next(self) -> tuple[str, str, int]:
        item = self._peek()
        if item is None:
            raise ValueError("Unexpected end of expression")
        self._pos += 1
        return item

    def _operand(self, kind: str, value: str, offset: int) -> Expr:
        col = self._col + offset
        if kind == _STRING:
            return Literal(self._lineno, col, value)
        if kind == _LPAREN:
            call = self.call(closing=True)
            return SubExpr(self._lineno, col, call)
        if kind != _WORD:
            raise ValueError(f"Unexpected '{value}'")
        if value in _KEYWORDS:
            return Literal(self._lineno, col, _KEYWORDS[value])
        if _NUMBER_RE.match(value):
            number = float(value) if "." in value else int(value)
            return Literal(self._lineno, col, number)
        return parse_path(value, self._lineno, col)

    def call(self, *, closing: bool = False) -> Call:
        kind, value, start = self._next()
        if kind == _KEY:
            raise ValueError(f"Expected a helper or path before '{value}='")
        path = self._operand(kind, value, start)

        params: list[Expr] = []
        pairs: list[tuple[str, Expr]] = []
        while True:
            item = self._peek()
            if item is None:
                if closing:
                    raise ValueError("Unclosed '(' in subexpression")
                break
            kind, value, offset = item
            if kind == _RPAREN:
                if not closing:
                    raise ValueError("Unexpected ')'")
                self._pos += 1
                break
            self._pos += 1
            if kind == _KEY:
                operand = self._operand(*self._next())
                pairs.append((value, operand))
            elif pairs:
                raise ValueError(f"Positional argument '{value}' after hash arguments")
            else:
                params.append(self._operand(kind, value, offset))

        return Call(self._lineno, self._col + start, path, tuple(params), tuple(pairs))


class Parser:
    """Build a ``TemplateNode`` from lexer tokens.

    Example:
        >>> from motif.template.lexer import tokenize
        >>> ast = Parser(tokenize("{{#if ok}}yes{{else}}no{{/if}}")).parse()
        >>> type(ast.body[0]).__name__
        'Block'
    """

    __slots__ = ("_filename", "_name", "_pos", "_source", "_tokens")

    def __init__(
        self,
        tokens: Sequence[Token],
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
    ):
        self._tokens = tokens
        self._name = name
        self._filename = filename
        self._source = source
        self._pos = 0

    def _error(
        self, message: str, token: Token | None, code: ErrorCode = ErrorCode.UNEXPECTED_TOKEN
    ) -> TemplateSyntaxError:
        return TemplateSyntaxError(
            message,
            token.lineno if token else None,
            self._name,
            self._filename,
            self._source,
            token.col_offset if token else None,
            code=code,
        )

    def parse(self) -> TemplateNode:
        body, _ = self._parse_body(None)
        return TemplateNode(1, 0, tuple(body), self._name)

    def _parse_call(self, token: Token, text: str | None = None) -> Call:
        text = token.value if text is None else text
        if not text:
            raise self._error("Empty tag", token, ErrorCode.INVALID_EXPRESSION)
        try:
            parser = _ExprParser(_scan(text), token.lineno, token.col_offset)
            call = parser.call()
        except ValueError as exc:
            raise self._error(str(exc), token, ErrorCode.INVALID_EXPRESSION) from exc
        return call

    def _parse_body(self, closing: str | None) -> tuple[list[Node], Token | None]:
        """Parse nodes until ``{{else}}`` or ``{{/closing}}`` (consumed)."""
        body: list[Node] = []
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            self._pos += 1
            match token.type:
                case TokenType.TEXT:
                    body.append(Text(token.lineno, token.col_offset, token.value))
                case TokenType.COMMENT:
                    continue
                case TokenType.VARIABLE | TokenType.RAW_VARIABLE:
                    body.append(
                        Mustache(
                            token.lineno,
                            token.col_offset,
                            self._parse_call(token),
                            escape=token.type is TokenType.VARIABLE,
                            source=token.value,
                        )
                    )
                case TokenType.PARTIAL:
                    body.append(self._parse_partial(token))
                case TokenType.BLOCK_OPEN | TokenType.INVERSE_OPEN:
                    body.append(self._parse_block(token))
                case TokenType.ELSE:
                    if closing is None:
                        raise self._error("Unexpected {{else}} outside a block", token)
                    return body, token
                case TokenType.BLOCK_CLOSE:
                    if closing is None:
                        raise self._error(f"Unexpected {{{{/{token.value}}}}}", token)
                    if token.value != closing:
                        raise self._error(
                            f"Expected {{{{/{closing}}}}}, got {{{{/{token.value}}}}}",
                            token,
                            ErrorCode.MISMATCHED_CLOSE,
                        )
                    return body, token

        if closing is not None:
            last = self._tokens[-1] if self._tokens else None
            raise self._error(f"Unclosed block '{closing}'", last, ErrorCode.UNCLOSED_BLOCK)
        return body, None

    def _parse_block(self, token: Token) -> Block:
        call = self._parse_call(token)
        if not isinstance(call.path, Path):
            raise self._error(
                f"Block name must be a helper or path, got '{token.value}'",
                token,
                ErrorCode.INVALID_EXPRESSION,
            )
        block = self._parse_block_rest(token, call, call.path.original)
        if token.type is TokenType.INVERSE_OPEN:
            return Block(
                block.lineno,
                block.col_offset,
                block.call,
                program=tuple(block.inverse or ()),
                inverse=tuple(block.program),
                source=block.source,
            )
        return block

    def _parse_block_rest(self, token: Token, call: Call, closing: str) -> Block:
        program, stop = self._parse_body(closing)
        inverse: tuple[Node, ...] | None = None
        if stop is not None and stop.type is TokenType.ELSE:
            if stop.value:
                # {{else if x}} chains: the nested block shares our closing tag
                chained = self._parse_call(stop)
                inverse = (self._parse_block_rest(stop, chained, closing),)
            else:
                body, stop = self._parse_body(closing)
                if stop is not None and stop.type is TokenType.ELSE:
                    raise self._error(f"Duplicate {{{{else}}}} in block '{closing}'", stop)
                inverse = tuple(body)
        return Block(
            token.lineno,
            token.col_offset,
            call,
            program=tuple(program),
            inverse=inverse,
            source=token.value,
        )

    def _parse_partial(self, token: Token) -> Partial:
        call = self._parse_call(token)
        if len(call.params) > 1:
            raise self._error("Partials take at most one context argument", token)
        name: Expr = call.path
        if isinstance(name, Path):
            # Bare partial names are literal names, not context lookups;
            # (subexpr) names are resolved at render time
            name = Literal(name.lineno, name.col_offset, name.original)
        context = call.params[0] if call.params else None
        return Partial(token.lineno, token.col_offset, name, context, call.hash)


def parse(source: str, name: str | None = None, filename: str | None = None) -> TemplateNode:
    """Lex and parse template source into a ``TemplateNode``."""
    from motif.template.lexer import tokenize

    return Parser(tokenize(source, name), name, filename, source).parse()


__all__ = ["Parser", "parse", "parse_path"]
