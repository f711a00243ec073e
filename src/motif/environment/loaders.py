"""Template loaders for the Motif environment.

A loader maps a template or partial name to ``(source, filename)``;
``filename`` is ``None`` when the source has no file behind it. The
Environment asks its loader for every ``get_template(name)`` and for
every ``{{> name}}`` not found among its in-memory partials.

Built-in Loaders:
- ``FileSystemLoader``: search directories; ``card`` resolves to
  ``card``, ``card.hbs`` or ``card.html``
- ``DictLoader``: in-memory ``{name: source}`` (tests, embedded pages)
- ``ChoiceLoader``: first loader that has the name wins (overrides)

Any object with a matching ``get_source`` satisfies ``Loader``; it
signals a miss by raising ``TemplateNotFoundError``:
    ```python
    class PackageLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            resource = files("myapp.views") / f"{name}.hbs"
            if not resource.is_file():
                raise TemplateNotFoundError(f"Template '{name}' not found")
            return resource.read_text(), str(resource)
    ```

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol, runtime_checkable

from motif.environment.exceptions import TemplateNotFoundError

TEMPLATE_SUFFIXES = (".hbs", ".html")

# Names listed in a not-found message before it is cut short
_MAX_LISTED = 10


@runtime_checkable
class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...


def _not_found(name: str, known: Iterable[str], where: str = "") -> TemplateNotFoundError:
    """Not-found error with a close-match suggestion or the known names."""
    names = sorted(known)
    message = f"Template '{name}' not found{where}"
    suggestion = get_close_matches(name, names, n=1, cutoff=0.6)
    if suggestion:
        message += f". Did you mean '{suggestion[0]}'?"
    elif names:
        listed = ", ".join(names[:_MAX_LISTED])
        extra = f" ... ({len(names)} total)" if len(names) > _MAX_LISTED else ""
        message += f". Available: {listed}{extra}"
    return TemplateNotFoundError(message)


class FileSystemLoader:
    """Templates from one or more directories, searched in order.

    A name without one of ``TEMPLATE_SUFFIXES`` is also tried with each
    suffix appended, so ``{{> cards/summary}}`` finds ``cards/summary.hbs``.

    Example:
        >>> loader = FileSystemLoader(["views/custom", "views/default"])
        >>> loader.get_source("dashboard")[1]
        'views/custom/dashboard.hbs'
    """

    __slots__ = ("_encoding", "_paths")

    def __init__(self, paths: str | Path | Sequence[str | Path], encoding: str = "utf-8"):
        roots = [paths] if isinstance(paths, str | Path) else list(paths)
        self._paths = tuple(Path(root) for root in roots)
        self._encoding = encoding

    def _candidates(self, name: str) -> Iterable[str]:
        yield name
        if not name.endswith(TEMPLATE_SUFFIXES):
            for suffix in TEMPLATE_SUFFIXES:
                yield name + suffix

    def get_source(self, name: str) -> tuple[str, str]:
        for root in self._paths:
            for candidate in self._candidates(name):
                path = root / candidate
                if path.is_file():
                    return path.read_text(self._encoding), str(path)
        searched = ", ".join(str(root) for root in self._paths)
        raise _not_found(name, self.list_templates(), where=f" in: {searched}")

    def list_templates(self) -> list[str]:
        found = {
            path.relative_to(root).as_posix()
            for root in self._paths
            if root.is_dir()
            for suffix in TEMPLATE_SUFFIXES
            for path in root.rglob(f"*{suffix}")
        }
        return sorted(found)


class DictLoader:
    """Templates from a ``{name: source}`` mapping, copied at construction.

    Example:
        >>> env = Environment(loader=DictLoader({
        ...     "card.hbs": "{{#card}}{{> body}}{{/card}}",
        ...     "body": "{{title}}",
        ... }))
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = dict(mapping)

    def get_source(self, name: str) -> tuple[str, None]:
        try:
            return self._mapping[name], None
        except KeyError:
            raise _not_found(name, self._mapping) from None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class ChoiceLoader:
    """Ask each loader in turn; the first one that has the name wins.

    Example:
        >>> loader = ChoiceLoader([
        ...     DictLoader({"nav": "<nav>Custom</nav>"}),
        ...     FileSystemLoader("views/"),
        ... ])
    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: Sequence[Loader]):
        self._loaders = tuple(loaders)

    def get_source(self, name: str) -> tuple[str, str | None]:
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                pass
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        names: set[str] = set()
        for loader in self._loaders:
            list_templates = getattr(loader, "list_templates", None)
            if list_templates is not None:
                names.update(list_templates())
        return sorted(names)


__all__ = ["ChoiceLoader", "DictLoader", "FileSystemLoader", "Loader", "TEMPLATE_SUFFIXES"]
