"""Exceptions for the Motif template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # no loader or partial source has the name
├── TemplateSyntaxError       # malformed tag or block structure
└── TemplateRuntimeError      # failure while rendering
    ├── UndefinedError        # missing variable, strict mode only
    └── HelperError           # helper registration or invocation failure
        ├── UnknownHelperError    # arguments passed to an unregistered name
        └── RegistryFrozenError   # write to a frozen HelperRegistry

Component factories never raise for malformed props; these exceptions
come from the template boundary.

Example:
    ```
    Runtime Error: Helper 'kpi' failed: unsupported operand
      Location: dashboard.hbs:5
       |
      4 | {{#each stats}}
    > 5 |   {{kpi value=(gt total 0)}}
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

_CATEGORIES = {
    "LEX": "lexer",
    "PAR": "parser",
    "RUN": "runtime",
    "TPL": "template",
    "REG": "registry",
}

# Longest value repr shown in a runtime error before truncation
_MAX_VALUE_REPR = 80


class ErrorCode(Enum):
    """Searchable error codes, formatted ``M-{CATEGORY}-{NUMBER}``."""

    UNCLOSED_TAG = "M-LEX-001"
    UNCLOSED_COMMENT = "M-LEX-002"

    UNEXPECTED_TOKEN = "M-PAR-001"
    UNCLOSED_BLOCK = "M-PAR-002"
    INVALID_EXPRESSION = "M-PAR-003"
    MISMATCHED_CLOSE = "M-PAR-004"

    UNDEFINED_VARIABLE = "M-RUN-001"
    HELPER_ERROR = "M-RUN-002"
    UNKNOWN_HELPER = "M-RUN-003"
    PARTIAL_DEPTH = "M-RUN-004"
    RUNTIME_ERROR = "M-RUN-005"

    TEMPLATE_NOT_FOUND = "M-TPL-001"
    SYNTAX_ERROR = "M-TPL-002"

    REGISTRY_FROZEN = "M-REG-001"
    DUPLICATE_HELPER = "M-REG-002"

    @property
    def category(self) -> str:
        """``lexer``, ``parser``, ``runtime``, ``template`` or ``registry``."""
        _, prefix, _ = self.value.split("-")
        return _CATEGORIES.get(prefix, "unknown")


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Numbered source lines around the line an error points at.

    Attributes:
        lines: ``(lineno, text)`` pairs, in source order
        error_line: 1-based line the error refers to
        column: 0-based column for a caret under ``error_line``, if known
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        out = ["   |"]
        for lineno, text in self.lines:
            if lineno != self.error_line:
                out.append(f" {lineno:>2} | {text}")
                continue
            out.append(f">{lineno:>2} | {text}")
            if self.column is not None:
                out.append("   | " + " " * self.column + "^")
        out.append("   |")
        return "\n".join(out)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Cut ``context_lines`` either side of ``error_line`` out of ``source``."""
    numbered = list(enumerate(source.splitlines(), start=1))
    first = max(1, error_line - context_lines)
    last = error_line + context_lines
    window = tuple((n, text) for n, text in numbered if first <= n <= last)
    return SourceSnippet(window, error_line, column)


class TemplateError(Exception):
    """Base exception for all Motif template errors."""

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """The message prefixed with its error code, when it has one."""
        message = str(self)
        if self.code is None or message.startswith(self.code.value):
            return message
        return f"{self.code.value}: {message}"


class TemplateNotFoundError(TemplateError):
    """No loader (or in-memory partial) provides the requested name."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateSyntaxError(TemplateError):
    """Malformed template source.

    ``lineno`` is 1-based and ``col_offset`` 0-based. When ``source`` is
    given, the message ends with the offending line and a caret.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
        *,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.filename = filename
        self.source = source
        self.col_offset = col_offset
        if code is not None:
            self.code = code
        super().__init__(self._describe())

    def _location(self) -> str:
        where = self.filename or self.name or "<template>"
        if not self.lineno:
            return where
        if self.col_offset is None:
            return f"{where}:{self.lineno}"
        return f"{where}:{self.lineno}:{self.col_offset}"

    def _describe(self) -> str:
        text = f"Syntax Error: {self.message}\n  --> {self._location()}"
        if not (self.source and self.lineno):
            return text
        snippet = build_source_snippet(
            self.source, self.lineno, context_lines=0, column=self.col_offset
        )
        if not snippet.lines:
            return text
        return f"{text}\n{snippet.format()}"


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_VALUE_REPR:
        text = text[: _MAX_VALUE_REPR - 3] + "..."
    return f"{text} ({type(value).__name__})"


class TemplateRuntimeError(TemplateError):
    """Failure while rendering, with the location and values involved.

    Output Format:
            ```
            Runtime Error: Helper 'kpi' failed: ...
              Location: dashboard.hbs:15
              Expression: {{kpi title=stats.title}}
              Values:
                stats = {...} (dict)

              Suggestion: ...
            ```
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        values: dict[str, Any] | None = None,
        template_name: str | None = None,
        lineno: int | None = None,
        suggestion: str | None = None,
        source_snippet: SourceSnippet | None = None,
    ):
        self.message = message
        self.expression = expression
        self.values = values or {}
        self.template_name = template_name
        self.lineno = lineno
        self.suggestion = suggestion
        self.source_snippet = source_snippet
        super().__init__(self._describe())

    def _describe(self) -> str:
        lines = [f"Runtime Error: {self.message}"]
        if self.template_name or self.lineno:
            where = self.template_name or "<template>"
            if self.lineno:
                where = f"{where}:{self.lineno}"
            lines.append(f"  Location: {where}")
        if self.source_snippet is not None:
            lines.append(self.source_snippet.format())
        if self.expression:
            lines.append(f"  Expression: {self.expression}")
        if self.values:
            lines.append("  Values:")
            for name, value in self.values.items():
                lines.append(f"    {name} = {_short_repr(value)}")
        if self.suggestion:
            lines.append(f"\n  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class UndefinedError(TemplateRuntimeError):
    """Undefined variable accessed while rendering in strict mode.

    If ``available_names`` is provided, a "Did you mean?" suggestion is
    included when a close match is found.
    """

    code: ErrorCode | None = ErrorCode.UNDEFINED_VARIABLE

    def __init__(
        self,
        name: str,
        template: str | None = None,
        lineno: int | None = None,
        available_names: frozenset[str] | None = None,
        source_snippet: SourceSnippet | None = None,
    ):
        self.name = name
        self.template = template or "<template>"
        message = f"Undefined variable '{name}'"
        if available_names:
            from difflib import get_close_matches

            matches = get_close_matches(name, available_names, n=1, cutoff=0.6)
            if matches:
                message += f". Did you mean '{matches[0]}'?"
        super().__init__(
            message,
            template_name=self.template,
            lineno=lineno,
            source_snippet=source_snippet,
            suggestion="Pass the value in the render data, or disable strict mode",
        )


class HelperError(TemplateRuntimeError):
    """Helper registration or invocation failure."""

    code: ErrorCode | None = ErrorCode.HELPER_ERROR


class UnknownHelperError(HelperError):
    """A tag passed arguments to a name that is not a registered helper."""

    code: ErrorCode | None = ErrorCode.UNKNOWN_HELPER

    def __init__(self, name: str, **kwargs: Any):
        self.name = name
        super().__init__(
            f"Missing helper: '{name}'",
            suggestion="Register it on the HelperRegistry before building the Environment",
            **kwargs,
        )


class RegistryFrozenError(HelperError):
    """Attempted to register a helper after the registry was frozen."""

    code: ErrorCode | None = ErrorCode.REGISTRY_FROZEN


__all__ = [
    "ErrorCode",
    "HelperError",
    "RegistryFrozenError",
    "SourceSnippet",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "UndefinedError",
    "UnknownHelperError",
    "build_source_snippet",
]
