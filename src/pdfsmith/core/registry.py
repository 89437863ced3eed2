"""Handler declaration and registry for the markup interpreter.

Handlers declare the tags they translate with the ``@handles`` decorator,
which stores a :class:`HandlerDefinition` on the callable. A
:class:`HandlerRegistry` collects those declarations from modules or
classes, maps each tag name to exactly one handler, and is frozen before the
first render so that concurrent renders can share it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from importlib import metadata
import logging
from typing import TYPE_CHECKING, Any, cast

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import HandlerRegistrationError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .session import DocumentSession


logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "pdfsmith.handlers"


@dataclass(frozen=True, slots=True)
class TagData:
    """Attributes and text handed to a handler for one element."""

    name: str
    attributes: Mapping[str, str]
    text: str = ""


Handler = Callable[["DocumentSession", TagData], None]


@dataclass(frozen=True)
class HandlerDefinition:
    """Descriptor installed on handler callables by the decorator."""

    tags: tuple[str, ...]
    name: str | None = None


def handles(*tags: str, name: str | None = None) -> Callable[[Handler], Handler]:
    """Decorator used to declare which tags a handler translates."""
    if not tags:
        raise HandlerRegistrationError("@handles requires at least one tag name.")
    definition = HandlerDefinition(tags=tuple(tags), name=name)

    def decorator(handler: Handler) -> Handler:
        cast(Any, handler).__markup_handler__ = definition
        return handler

    return decorator


class HandlerRegistry:
    """Mapping from tag name to handler, read-only once frozen."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._labels: dict[str, str] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, handler: Handler, *, replace: bool = False, label: str | None = None) -> None:
        """Register ``handler`` for the tag ``name``."""
        if self._frozen:
            raise HandlerRegistrationError(
                f"Cannot register a handler for <{name}>: the registry is frozen."
            )
        if not name or not name.strip():
            raise HandlerRegistrationError("Handler tag names must be non-empty.")
        if name in self._handlers and not replace:
            raise HandlerRegistrationError(f"A handler for <{name}> is already registered.")
        self._handlers[name] = handler
        self._labels[name] = label or getattr(handler, "__name__", handler.__class__.__name__)

    def register_decorated(self, handler: Handler, *, replace: bool = False) -> None:
        """Register a standalone callable decorated with ``@handles``."""
        definition = getattr(handler, "__markup_handler__", None)
        if not isinstance(definition, HandlerDefinition):
            raise HandlerRegistrationError("Handler must be decorated with @handles")
        for tag in definition.tags:
            self.register(tag, handler, replace=replace, label=definition.name)

    def collect_from(self, owner: Any, *, replace: bool = False) -> None:
        """Collect decorated callables from an object or module."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__markup_handler__", None)
            if definition is None and hasattr(handler, "__func__"):
                definition = getattr(handler.__func__, "__markup_handler__", None)
            if isinstance(definition, HandlerDefinition):
                for tag in definition.tags:
                    self.register(tag, handler, replace=replace, label=definition.name)

    def freeze(self) -> HandlerRegistry:
        """Reject further registrations and return the registry."""
        self._frozen = True
        return self

    def lookup(self, name: str) -> Handler | None:
        """Return the handler registered for ``name`` if any."""
        return self._handlers.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered handlers."""
        entries: list[dict[str, object]] = []
        for tag in self.names():
            handler = self._handlers[tag]
            doc_lines = (getattr(handler, "__doc__", None) or "").strip().splitlines()
            entries.append(
                {
                    "tag": tag,
                    "name": self._labels[tag],
                    "module": getattr(handler, "__module__", ""),
                    "summary": doc_lines[0] if doc_lines else "",
                }
            )
        return entries

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def iter_entry_point_handlers(emitter: DiagnosticEmitter | None = None) -> Iterable[Any]:
    """Load handler owners published under the ``pdfsmith.handlers`` group.

    Entry points that fail to import are skipped and reported through
    ``emitter``, or the module logger when none is given.
    """
    if emitter is None:
        emitter = LoggingEmitter(logger_obj=logger)

    try:
        group = metadata.entry_points().select(group=ENTRY_POINT_GROUP)
    except Exception as exc:  # pragma: no cover - broken environment metadata
        emitter.warning(f"Unable to read entry points for {ENTRY_POINT_GROUP}", exc)
        return []

    payloads: list[Any] = []
    for entry_point in sorted(group, key=lambda ep: ep.name):
        try:
            payloads.append(entry_point.load())
        except Exception as exc:
            emitter.warning(f"Skipping handler entry point '{entry_point.name}'", exc)
    return payloads


def build_default_registry(
    extra: Iterable[Any] = (),
    *,
    entry_points: bool = True,
    emitter: DiagnosticEmitter | None = None,
) -> HandlerRegistry:
    """Return a frozen registry holding the built-in and plugin handlers.

    ``extra`` accepts modules, classes, or ``@handles``-decorated callables;
    they are registered last and may replace earlier definitions.
    """
    from pdfsmith.handlers import basic as basic_handlers

    registry = HandlerRegistry()
    registry.collect_from(basic_handlers)
    if entry_points:
        for owner in iter_entry_point_handlers(emitter):
            _register_owner(registry, owner)
    for owner in extra:
        _register_owner(registry, owner)
    return registry.freeze()


def _register_owner(registry: HandlerRegistry, owner: Any) -> None:
    if isinstance(getattr(owner, "__markup_handler__", None), HandlerDefinition):
        registry.register_decorated(owner, replace=True)
        return
    registry.collect_from(owner, replace=True)


__all__ = [
    "ENTRY_POINT_GROUP",
    "Handler",
    "HandlerDefinition",
    "HandlerRegistry",
    "TagData",
    "build_default_registry",
    "handles",
    "iter_entry_point_handlers",
]
