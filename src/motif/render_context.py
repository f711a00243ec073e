"""Per-render state kept out of the user's data.

Template name, current line and partial depth live in a ContextVar so
helpers and error reporting can reach them without anything being
injected into the data passed to ``Template.render``.

Thread Safety:
    ContextVars are thread-local by design; each thread or asyncio task
    renders with its own RenderContext.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field


@dataclass
class RenderContext:
    """Per-render state isolated from user data.

    Attributes:
        template_name: Current template name for error messages
        source: Template source for runtime error snippets
        line: Line of the node being rendered
        include_depth: Current partial nesting depth
        max_include_depth: Maximum allowed partial nesting
        template_stack: (template_name, line) pairs of enclosing partials
    """

    template_name: str | None = None
    source: str | None = None
    line: int = 0

    # 50 catches a partial that includes itself long before the
    # interpreter's own recursion limit
    include_depth: int = 0
    max_include_depth: int = 50

    template_stack: list[tuple[str, int]] = field(default_factory=list)

    def check_include_depth(self, partial_name: str) -> None:
        """Raise if rendering ``partial_name`` would exceed the depth limit."""
        if self.include_depth >= self.max_include_depth:
            from motif.environment.exceptions import ErrorCode, TemplateRuntimeError

            error = TemplateRuntimeError(
                f"Maximum partial depth exceeded ({self.max_include_depth}) "
                f"when rendering '{partial_name}'",
                template_name=self.template_name,
                lineno=self.line or None,
                suggestion="Check for partials that include each other: A -> B -> A",
            )
            error.code = ErrorCode.PARTIAL_DEPTH
            raise error

    def child_context(self, template_name: str | None = None) -> RenderContext:
        """Context for a partial: depth + 1, current location pushed on the stack."""
        stack = self.template_stack.copy()
        if self.template_name and self.line > 0:
            stack.append((self.template_name, self.line))
        return RenderContext(
            template_name=template_name or self.template_name,
            source=None,
            line=0,
            include_depth=self.include_depth + 1,
            max_include_depth=self.max_include_depth,
            template_stack=stack,
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "motif_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Current RenderContext, or None outside a render call."""
    return _render_context.get()


@contextmanager
def render_context(
    template_name: str | None = None,
    source: str | None = None,
    *,
    parent: RenderContext | None = None,
) -> Iterator[RenderContext]:
    """Set a RenderContext for the duration of the ``with`` block.

    With ``parent``, the new context is ``parent.child_context(...)`` so
    partial depth and the template stack carry over.

    Example:
        with render_context("page.hbs", source) as ctx:
            html = template.render(data)
    """
    if parent is not None:
        ctx = parent.child_context(template_name)
        ctx.source = source
    else:
        ctx = RenderContext(template_name=template_name, source=source)
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


__all__ = ["RenderContext", "get_render_context", "render_context"]
