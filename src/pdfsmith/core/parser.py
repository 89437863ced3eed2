"""Turn markup text into the :mod:`pdfsmith.core.nodes` tree."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import MalformedMarkupError
from .nodes import ATTRIBUTES_KEY, Element, group_children


logger = logging.getLogger(__name__)

ROOT_TAG = "document"


def _local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def _direct_text(node: ElementTree.Element) -> str:
    """Join the text segments owned by ``node`` itself, ignoring descendants."""
    segments = [node.text or ""]
    segments.extend(child.tail or "" for child in node)
    return "".join(segments).strip()


def _convert(node: ElementTree.Element, *, sibling_order: str, emitter: DiagnosticEmitter) -> Element:
    children: list[Element] = []
    for child in node:
        if not isinstance(child.tag, str):
            # Comments and processing instructions.
            continue
        name = _local_name(child.tag)
        if name == ATTRIBUTES_KEY:
            emitter.warning(f"Dropping <{name}> element: the name is reserved for attributes.")
            continue
        children.append(_convert(child, sibling_order=sibling_order, emitter=emitter))

    attributes = {_local_name(key): value for key, value in node.attrib.items()}
    return Element(
        name=_local_name(node.tag),
        text=_direct_text(node),
        attributes=attributes,
        children=group_children(children, sibling_order=sibling_order),
    )


def parse_markup(
    markup: str | bytes,
    *,
    sibling_order: str = "document",
    emitter: DiagnosticEmitter | None = None,
) -> Element:
    """Parse markup text and return the root ``<document>`` element.

    ``bytes`` are decoded according to their XML declaration; ``str`` input is
    already decoded and any declared encoding is ignored.
    """
    if emitter is None:
        emitter = LoggingEmitter(logger_obj=logger)
    payload = markup.strip()
    if not payload:
        raise MalformedMarkupError("Markup is empty.")

    try:
        root = ElementTree.fromstring(payload)
    except ElementTree.ParseError as exc:
        raise MalformedMarkupError(f"Markup is not well-formed: {exc}") from exc

    root_name = _local_name(root.tag)
    if root_name != ROOT_TAG:
        raise MalformedMarkupError(f"Expected a <{ROOT_TAG}> root element, found <{root_name}>.")

    return _convert(root, sibling_order=sibling_order, emitter=emitter)


__all__ = ["ROOT_TAG", "parse_markup"]
