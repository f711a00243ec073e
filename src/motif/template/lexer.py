"""Tag-level lexer for Motif's logic-less template syntax.

Splits template source into TEXT runs and tags. Tag bodies (the
expression text between the delimiters) are kept verbatim for the
parser.

Recognised tags:
    {{expr}}            escaped output
    {{{expr}}} {{&expr}} raw output
    {{#helper ...}}     block open
    {{^path}}           inverse block open ({{^}} alone is an else)
    {{/helper}}         block close
    {{else}}            block separator ({{else if x}} chains)
    {{> partial}}       partial
    {{! c}} {{!-- c --}} comments

Whitespace control: ``{{~`` strips whitespace before the tag, ``~}}``
strips whitespace after it. ``\\{{`` emits a literal ``{{``.

"""

from __future__ import annotations

from motif._types import Token, TokenType
from motif.environment.exceptions import ErrorCode, TemplateSyntaxError

OPEN = "{{"

_SIGILS = {
    "#": TokenType.BLOCK_OPEN,
    "^": TokenType.INVERSE_OPEN,
    "/": TokenType.BLOCK_CLOSE,
    ">": TokenType.PARTIAL,
    "&": TokenType.RAW_VARIABLE,
}


class Lexer:
    """Tokenize template source into a list of tag-level tokens.

    Example:
        >>> [t.type.name for t in Lexer("Hi {{name}}!").tokenize()]
        ['TEXT', 'VARIABLE', 'TEXT']
    """

    __slots__ = ("_name", "_pos", "_source", "_tokens")

    def __init__(self, source: str, name: str | None = None):
        self._source = source
        self._name = name
        self._pos = 0
        self._tokens: list[Token] = []

    def _position(self, index: int) -> tuple[int, int]:
        lineno = self._source.count("\n", 0, index) + 1
        line_start = self._source.rfind("\n", 0, index) + 1
        return lineno, index - line_start

    def _error(self, message: str, index: int, code: ErrorCode) -> TemplateSyntaxError:
        lineno, col = self._position(index)
        return TemplateSyntaxError(
            message, lineno, self._name, source=self._source, col_offset=col, code=code
        )

    def _emit_text(self, text: str, start: int) -> None:
        if text:
            lineno, col = self._position(start)
            self._tokens.append(Token(TokenType.TEXT, text, lineno, col))

    def _find_close(self, start: int, close: str) -> int:
        """Index of ``close`` after ``start``, skipping quoted strings."""
        source = self._source
        i = start
        quote: str | None = None
        while i < len(source):
            ch = source[i]
            if quote:
                if ch == "\\":
                    i += 2
                    continue
                if ch == quote:
                    quote = None
            elif ch in "\"'":
                quote = ch
            elif source.startswith(close, i):
                return i
            i += 1
        return -1

    def tokenize(self) -> list[Token]:
        source = self._source
        text_start = 0
        pending: list[str] = []

        while True:
            index = source.find(OPEN, self._pos)
            if index == -1:
                pending.append(source[self._pos :])
                break

            # \{{ escapes the delimiter
            if index > 0 and source[index - 1] == "\\":
                pending.append(source[self._pos : index - 1] + OPEN)
                self._pos = index + len(OPEN)
                continue

            pending.append(source[self._pos : index])
            self._emit_text("".join(pending), text_start)
            pending = []

            self._pos = self._lex_tag(index)
            text_start = self._pos

        self._emit_text("".join(pending), text_start)
        return self._apply_whitespace_control(self._tokens)

    def _lex_tag(self, index: int) -> int:
        source = self._source
        lineno, col = self._position(index)
        pos = index + len(OPEN)

        triple = source.startswith("{", pos)
        if triple:
            pos += 1
        strip_left = source.startswith("~", pos)
        if strip_left:
            pos += 1

        # Comments
        if not triple and source.startswith("!", pos):
            long_form = source.startswith("!--", pos)
            close = "--}}" if long_form else "}}"
            end = source.find(close, pos)
            if end == -1:
                raise self._error("Unclosed comment", index, ErrorCode.UNCLOSED_COMMENT)
            body = source[pos + (3 if long_form else 1) : end]
            strip_right = body.endswith("~")
            self._tokens.append(
                Token(
                    TokenType.COMMENT,
                    body.rstrip("~"),
                    lineno,
                    col,
                    strip_left,
                    strip_right,
                )
            )
            return end + len(close)

        close = "}}}" if triple else "}}"
        end = self._find_close(pos, close)
        if end == -1:
            raise self._error(f"Unclosed tag, expected '{close}'", index, ErrorCode.UNCLOSED_TAG)

        body = source[pos:end]
        strip_right = body.endswith("~")
        if strip_right:
            body = body[:-1]

        if triple:
            token_type = TokenType.RAW_VARIABLE
        else:
            token_type = _SIGILS.get(body[:1], TokenType.VARIABLE)
            if token_type is not TokenType.VARIABLE:
                body = body[1:]

        stripped = body.strip()
        if token_type is TokenType.INVERSE_OPEN and not stripped:
            token_type = TokenType.ELSE
        elif token_type is TokenType.VARIABLE and (
            stripped == "else" or stripped.startswith(("else ", "else\t", "else\n"))
        ):
            token_type = TokenType.ELSE
            stripped = stripped[len("else") :].strip()

        self._tokens.append(Token(token_type, stripped, lineno, col, strip_left, strip_right))
        return end + len(close)

    @staticmethod
    def _apply_whitespace_control(tokens: list[Token]) -> list[Token]:
        result: list[Token] = []
        strip_next = False
        for i, token in enumerate(tokens):
            if token.type is TokenType.TEXT:
                value = token.value
                if strip_next:
                    value = value.lstrip()
                following = tokens[i + 1] if i + 1 < len(tokens) else None
                if following is not None and following.strip_left:
                    value = value.rstrip()
                strip_next = False
                if value:
                    result.append(
                        Token(TokenType.TEXT, value, token.lineno, token.col_offset)
                    )
                continue
            strip_next = token.strip_right
            result.append(token)
        return result


def tokenize(source: str, name: str | None = None) -> list[Token]:
    """Convenience wrapper around ``Lexer(source, name).tokenize()``."""
    return Lexer(source, name).tokenize()


__all__ = ["Lexer", "tokenize"]
