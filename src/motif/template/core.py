"""Motif Template: a parsed template ready for rendering.

Templates walk their AST directly; there is no compile-to-bytecode step.
Each ``render()`` call builds only local state (a frame chain and output
buffers), so one Template can be rendered from many threads at once.

Architecture:
    ```
    Template
    ├── _env_ref: WeakRef[Environment]  # Prevents circular refs
    ├── _node: TemplateNode             # Parsed AST
    └── _name, _filename, _source       # For error messages
    ```

Context frames:
    Every block that changes ``this`` pushes a ``Frame``. ``../`` walks
    to the parent frame; ``@index``/``@key``/``@root`` live in the frame's
    private ``data`` mapping. Helpers never see frames, only the context
    value and a read-only view of ``data`` through ``HelperOptions``.

Memory Safety:
    Uses ``weakref.ref(env)`` to break the cycle
    ``Template → (weak) → Environment → cache → Template``.

"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from motif.environment.exceptions import (
    HelperError,
    SourceSnippet,
    TemplateError,
    TemplateRuntimeError,
    UndefinedError,
    UnknownHelperError,
    build_source_snippet,
)
from motif.render_context import RenderContext, get_render_context, render_context
from motif.template.builtins import MISSING, each, is_falsy, lookup_property
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
from motif.template.options import HelperOptions, wants_options
from motif.utils.html import escape

if TYPE_CHECKING:
    from motif.environment import Environment


class Frame:
    """One level of template context: ``this`` plus private data."""

    __slots__ = ("context", "data", "parent")

    def __init__(
        self,
        context: Any,
        parent: Frame | None = None,
        data: Mapping[str, Any] | None = None,
    ):
        self.context = context
        self.parent = parent
        self.data: Mapping[str, Any] = data if data is not None else {}

    def ancestor(self, depth: int) -> Frame:
        frame = self
        for _ in range(depth):
            if frame.parent is None:
                break
            frame = frame.parent
        return frame

    def push(self, context: Any, data: Mapping[str, Any] | None = None) -> Frame:
        """Frame for ``context``; reuses ``self`` when nothing changes."""
        if context is self.context and not data:
            return self
        merged = {**self.data, **data} if data else self.data
        return Frame(context, self, merged)


class Template:
    """Parsed template ready for rendering.

    Templates are immutable after construction and safe to render
    concurrently.

    Attributes:
        name: Template identifier (for error messages)
        filename: Source file path (for error messages)

    Error Enhancement:
        Exceptions raised inside helpers are wrapped with template context:
            ```
            Runtime Error: Helper 'kpi' failed: ...
              Location: dashboard.hbs:15
              Expression: {{kpi title=stats.title}}
            ```

    Example:
        >>> from motif import Environment
        >>> env = Environment()
        >>> env.from_string("Hello, {{name}}!").render(name="World")
        'Hello, World!'
        >>> env.from_string("Hello, {{name}}!").render({"name": "<b>"})
        'Hello, &lt;b&gt;!'

    """

    __slots__ = ("_env_ref", "_filename", "_name", "_node", "_source")

    def __init__(
        self,
        env: Environment,
        node: TemplateNode,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
    ):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._node = node
        self._name = name
        self._filename = filename
        self._source = source

    @property
    def _env(self) -> Environment:
        env = self._env_ref()
        if env is None:
            raise RuntimeError(
                f"Environment has been garbage collected (template: {self._name or 'unknown'})"
            )
        return env

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def source(self) -> str | None:
        return self._source

    def render(self, data: Any = None, /, **kwargs: Any) -> str:
        """Render the template.

        Args:
            data: Root context; a mapping (merged with ``kwargs``) or any
                object whose attributes are looked up by paths
            **kwargs: Context variables as keyword arguments

        Returns:
            Rendered markup as ``str``
        """
        if data is None or isinstance(data, Mapping):
            context: Any = {**(data or {}), **kwargs}
        elif kwargs:
            raise TypeError("render() accepts keyword arguments only with a mapping context")
        else:
            context = data

        with render_context(self._name, self._source) as render_ctx:
            root = Frame(context, data={"root": context})
            try:
                return self._render_nodes(self._node.body, root)
            except TemplateError:
                raise
            except Exception as e:
                raise self._enhance_error(e, render_ctx) from e

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render_nodes(self, nodes: Sequence[Node], frame: Frame) -> str:
        render_ctx = get_render_context()
        out: list[str] = []
        append = out.append
        for node in nodes:
            if render_ctx is not None:
                render_ctx.line = node.lineno
            match node:
                case Text(value=value):
                    append(value)
                case Mustache():
                    value = self._eval_call(node.call, frame, node.source)
                    append(self._stringify(value, escape=node.escape))
                case Block():
                    append(self._render_block(node, frame))
                case Partial():
                    append(self._render_partial(node, frame))
        return "".join(out)

    def _block_renderer(self, nodes: Sequence[Node] | None, frame: Frame) -> Callable[..., str]:
        def render(context: Any = MISSING, data: Mapping[str, Any] | None = None) -> str:
            if not nodes:
                return ""
            if context is MISSING:
                context = frame.context
            return self._render_nodes(nodes, frame.push(context, data))

        return render

    def _render_block(self, node: Block, frame: Frame) -> str:
        call = node.call
        fn = self._block_renderer(node.program, frame)
        inverse = self._block_renderer(node.inverse, frame)

        helper = self._find_helper(call.path)
        if helper is not None:
            result = self._invoke(helper, call, frame, node.source, fn, inverse)
            return self._stringify(result, escape=False)

        if call.has_arguments:
            raise self._unknown_helper(call, node.source)

        # Plain section: {{#path}}...{{/path}}
        value = self._eval(call.path, frame)
        if value is True:
            return fn(frame.context)
        if is_falsy(value):
            return inverse(frame.context)
        if isinstance(value, list | tuple):
            options = HelperOptions(
                self._call_name(call), {}, fn, inverse, frame.context, frame.data
            )
            return each(options, value)
        return fn(value)

    def _render_partial(self, node: Partial, frame: Frame) -> str:
        name = str(self._eval(node.name, frame))
        render_ctx = get_render_context()
        if render_ctx is None:
            render_ctx = RenderContext(template_name=self._name, source=self._source)
        render_ctx.check_include_depth(name)

        partial = self._env.get_partial(name)

        context = frame.context if node.context is None else self._eval(node.context, frame)
        if node.hash:
            extra = {key: self._eval(value, frame) for key, value in node.hash}
            context = {**context, **extra} if isinstance(context, Mapping) else extra

        with render_context(partial.name, partial.source, parent=render_ctx):
            return partial._render_nodes(partial._node.body, frame.push(context))

    # =========================================================================
    # Expressions
    # =========================================================================

    def _eval(self, expr: Expr, frame: Frame) -> Any:
        match expr:
            case Literal(value=value):
                return value
            case Path():
                return self._resolve_path(expr, frame)
            case SubExpr(call=call):
                return self._eval_call(call, frame, None)
            case Call():
                return self._eval_call(expr, frame, None)
        raise TypeError(f"Cannot evaluate {type(expr).__name__}")

    def _eval_call(self, call: Call, frame: Frame, source: str | None) -> Any:
        helper = self._find_helper(call.path)
        if helper is not None:
            return self._invoke(helper, call, frame, source, None, None)
        if call.has_arguments:
            raise self._unknown_helper(call, source)
        return self._eval(call.path, frame)

    def _resolve_path(self, path: Path, frame: Frame) -> Any:
        if path.data:
            if not path.parts:
                return None
            value = frame.ancestor(path.depth).data.get(path.parts[0], MISSING)
            rest = path.parts[1:]
        else:
            value = frame.ancestor(path.depth).context
            rest = path.parts
            if rest and self._env.strict:
                head = lookup_property(value, rest[0])
                if head is MISSING:
                    raise self._undefined(path, value)

        for part in rest:
            value = lookup_property(value, part)
            if value is MISSING:
                return None
        return None if value is MISSING else value

    def _find_helper(self, expr: Expr) -> Callable[..., Any] | None:
        if isinstance(expr, Path) and expr.is_helper_name:
            return self._env.get_helper(expr.parts[0])
        return None

    def _invoke(
        self,
        helper: Callable[..., Any],
        call: Call,
        frame: Frame,
        source: str | None,
        fn: Callable[..., str] | None,
        inverse: Callable[..., str] | None,
    ) -> Any:
        name = self._call_name(call)
        args = [self._eval(param, frame) for param in call.params]
        hash_args = {key: self._eval(value, frame) for key, value in call.hash}
        if wants_options(helper):
            options = HelperOptions(
                name=name,
                hash=MappingProxyType(hash_args),
                fn=fn,
                inverse=inverse,
                context=frame.context,
                data=MappingProxyType(dict(frame.data)),
            )
            args.insert(0, options)
        try:
            return helper(*args, **hash_args)
        except TemplateError:
            raise
        except Exception as exc:
            raise HelperError(
                f"Helper '{name}' failed: {exc}",
                expression=f"{{{{{source}}}}}" if source else None,
                template_name=self._name,
                lineno=call.lineno,
                source_snippet=self._snippet(call.lineno),
            ) from exc

    # =========================================================================
    # Output & errors
    # =========================================================================

    def _stringify(self, value: Any, *, escape: bool) -> str:
        if value is None or value is MISSING:
            return ""
        if value is True:
            return "true"
        if value is False:
            return "false"
        if hasattr(value, "__html__"):
            return str(value.__html__())
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, list | tuple):
            text = ",".join(self._stringify(item, escape=False) for item in value)
        else:
            text = str(value)
        if escape and self._env.autoescape:
            return _escape(text)
        return text

    @staticmethod
    def _call_name(call: Call) -> str:
        path = call.path
        if isinstance(path, Path):
            return path.original
        if isinstance(path, Literal):
            return repr(path.value)
        return "(subexpression)"

    def _snippet(self, lineno: int | None) -> SourceSnippet | None:
        if self._source and lineno:
            return build_source_snippet(self._source, lineno)
        return None

    def _unknown_helper(self, call: Call, source: str | None) -> UnknownHelperError:
        return UnknownHelperError(
            self._call_name(call),
            expression=f"{{{{{source}}}}}" if source else None,
            template_name=self._name,
            lineno=call.lineno,
            source_snippet=self._snippet(call.lineno),
        )

    def _undefined(self, path: Path, context: Any) -> UndefinedError:
        available = (
            frozenset(str(key) for key in context) if isinstance(context, Mapping) else None
        )
        return UndefinedError(
            path.original,
            self._name,
            path.lineno,
            available_names=available,
            source_snippet=self._snippet(path.lineno),
        )

    def _enhance_error(self, error: Exception, render_ctx: RenderContext) -> TemplateRuntimeError:
        """Convert a stray Python exception into a TemplateRuntimeError."""
        message = str(error).strip() or f"{type(error).__name__} (no details available)"
        lineno = render_ctx.line or None
        return TemplateRuntimeError(
            message,
            template_name=render_ctx.template_name,
            lineno=lineno,
            source_snippet=self._snippet(lineno),
        )

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'}>"


def _escape(text: str) -> str:
    return str(escape(text))


__all__ = ["Frame", "Template"]
