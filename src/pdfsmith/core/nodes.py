"""In-memory tree model produced by the markup parser.

Every parsed tag becomes an :class:`Element`. Children are stored as an
ordered tuple of tagged fields so that consumers handle both shapes
explicitly:

`Single`
: one child element carrying its own name.

`Repeated`
: a run of sibling elements sharing one name, kept in markup order.

Attributes never appear among the children; they live in
:attr:`Element.attributes`. The field name :data:`ATTRIBUTES_KEY` is reserved
for that purpose in the dictionary view returned by :meth:`Element.to_dict`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias


ATTRIBUTES_KEY = "attrs"
TEXT_KEY = "textNode"


def _freeze_attributes(attributes: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(attributes or {}))


@dataclass(frozen=True, slots=True)
class Element:
    """One markup tag instance."""

    name: str
    text: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: tuple[ChildField, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", self.text or "")
        object.__setattr__(self, "attributes", _freeze_attributes(self.attributes))
        object.__setattr__(self, "children", tuple(self.children))

    def iter_children(self) -> Iterator[Element]:
        """Yield child elements in field order, flattening repeated runs."""
        for child in self.children:
            yield from child.members()

    def child_map(self) -> dict[str, Element | tuple[Element, ...]]:
        """Return children grouped by name, collapsing single occurrences."""
        grouped: dict[str, list[Element]] = {}
        for element in self.iter_children():
            grouped.setdefault(element.name, []).append(element)
        return {
            name: members[0] if len(members) == 1 else tuple(members)
            for name, members in grouped.items()
        }

    def to_dict(self) -> dict[str, Any]:
        """Return the parser-shaped mapping used for debug dumps."""
        payload: dict[str, Any] = {}
        if self.attributes:
            payload[ATTRIBUTES_KEY] = dict(self.attributes)
        payload[TEXT_KEY] = self.text
        for name, value in self.child_map().items():
            if isinstance(value, tuple):
                payload[name] = [member.to_dict() for member in value]
            else:
                payload[name] = value.to_dict()
        return payload


@dataclass(frozen=True, slots=True)
class Single:
    """A child field holding exactly one element."""

    element: Element

    @property
    def name(self) -> str:
        return self.element.name

    def members(self) -> tuple[Element, ...]:
        return (self.element,)


@dataclass(frozen=True, slots=True)
class Repeated:
    """A child field holding sibling elements that share one name."""

    name: str
    elements: tuple[Element, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))
        for element in self.elements:
            if element.name != self.name:
                msg = f"Repeated field '{self.name}' cannot hold <{element.name}>."
                raise ValueError(msg)

    def members(self) -> tuple[Element, ...]:
        return self.elements


ChildField: TypeAlias = Single | Repeated


def group_children(elements: list[Element], *, sibling_order: str = "document") -> tuple[ChildField, ...]:
    """Pack sibling elements into tagged child fields.

    ``document`` keeps markup order across all names: consecutive siblings
    sharing a name form one :class:`Repeated` run. ``grouped`` collects every
    sibling of a name at the position of its first occurrence.
    """
    runs: list[tuple[str, list[Element]]] = []
    if sibling_order == "grouped":
        index: dict[str, list[Element]] = {}
        for element in elements:
            bucket = index.get(element.name)
            if bucket is None:
                bucket = index[element.name] = []
                runs.append((element.name, bucket))
            bucket.append(element)
    elif sibling_order == "document":
        for element in elements:
            if runs and runs[-1][0] == element.name:
                runs[-1][1].append(element)
            else:
                runs.append((element.name, [element]))
    else:
        raise ValueError(f"Unknown sibling order '{sibling_order}'.")

    return tuple(
        Single(members[0]) if len(members) == 1 else Repeated(name, tuple(members))
        for name, members in runs
    )


__all__ = [
    "ATTRIBUTES_KEY",
    "TEXT_KEY",
    "ChildField",
    "Element",
    "Repeated",
    "Single",
    "group_children",
]
