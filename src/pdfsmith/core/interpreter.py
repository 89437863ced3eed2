"""Depth-first interpreter dispatching tree elements to registered handlers."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import TYPE_CHECKING

from .nodes import ATTRIBUTES_KEY, ChildField, Element, Repeated, Single
from .registry import HandlerRegistry, TagData


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .session import DocumentSession


logger = logging.getLogger(__name__)


class TreeInterpreter:
    """Walk child fields in order and apply the matching handlers.

    A parent's handler always runs before any of its descendants, so builder
    state set by an ancestor is visible below it. Elements without a handler
    are traversed as plain containers. Handler failures propagate untouched.
    """

    def __init__(self, registry: HandlerRegistry) -> None:
        self.registry = registry

    def interpret(self, session: DocumentSession, fields: Iterable[ChildField]) -> None:
        """Dispatch every field of a node, in order."""
        for child in fields:
            if child.name == ATTRIBUTES_KEY:
                continue
            if isinstance(child, Repeated):
                logger.debug("field %s: %d repeated elements", child.name, len(child.elements))
                for member in child.elements:
                    self.interpret(session, (Single(member),))
            elif isinstance(child, Single):
                self.interpret_element(session, child.element)
            else:
                raise TypeError(f"Unsupported child field {type(child).__name__}.")

    def interpret_element(self, session: DocumentSession, element: Element) -> None:
        """Apply the handler for ``element`` then recurse into its children."""
        handler = self.registry.lookup(element.name)
        if handler is None:
            logger.debug("field %s: no handler, visiting children", element.name)
        else:
            logger.debug(
                "field %s: attributes=%s text=%r", element.name, dict(element.attributes), element.text
            )
            handler(session, TagData(name=element.name, attributes=element.attributes, text=element.text))
        self.interpret(session, element.children)


__all__ = ["TreeInterpreter"]
