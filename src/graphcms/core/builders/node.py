"""Recursive node tree shared by parameter lists and field selections.

A node keeps its entries in insertion order. Each entry is either
positional (a bare field name, or an array item) or keyed (a name mapped to
a value or to a nested node). Setting an existing key again overwrites the
value in place.

Parameter nodes separate keys from values with ``:``::

    Node({"where": {"id": Variable("id")}, "first": 5}, separated=True)
    # where:{id:$id},first:5

Field nodes emit names only and wrap nested selections in braces::

    Node(["id", {"author": ["name"]}])
    # id,author{name}

``build()`` returns the node's content without its own container; the
parent (or the document) adds the surrounding ``{}``, ``[]`` or ``()``.
"""

import json
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

from graphcms.core.errors import SerializationError

Entries = Union["Node", Mapping[str, Any], list[Any], tuple[Any, ...], None]


@dataclass(frozen=True)
class Variable:
    """Reference to a document variable, rendered as ``$name``."""

    name: str

    def build(self) -> str:
        return f"${self.name}"


@dataclass(frozen=True)
class EnumValue:
    """Enum literal, rendered bare (``DESC``, ``PUBLISHED``)."""

    value: str

    def build(self) -> str:
        return self.value


class Node:
    """Ordered tree of parameters or field selections."""

    def __init__(self, entries: Entries = None, separated: bool = False) -> None:
        """Initialize the node.

        Args:
            entries: Initial content. A mapping adds keyed entries; a list
                adds positional entries. In field nodes a mapping inside
                the list is merged in as keyed entries.
            separated: True for parameter nodes (``key:value``), False for
                field selection nodes.
        """
        self._separated = separated
        self._entries: list[tuple[str | None, Any]] = []
        self._index: dict[str, int] = {}
        self._sequence = isinstance(entries, (list, tuple)) or (
            isinstance(entries, Node) and entries._sequence
        )
        self.extend(entries)

    @property
    def separated(self) -> bool:
        """Whether this is a parameter node."""
        return self._separated

    def extend(self, entries: Entries) -> "Node":
        """Add every entry of a mapping or list.

        Args:
            entries: A mapping, a list, or None.

        Returns:
            This node, for chaining.
        """
        if entries is None:
            return self
        if isinstance(entries, Node):
            for key, value in entries:
                if key is None:
                    self.append(value)
                else:
                    self._set(key, value)
            return self
        if isinstance(entries, Mapping):
            for key, value in entries.items():
                self._set(str(key), value)
            return self
        if isinstance(entries, (list, tuple)):
            for item in entries:
                # Fields merge mappings in; parameters keep them as array items
                if isinstance(item, Mapping) and not self._separated:
                    self.extend(item)
                else:
                    self.append(item)
            return self
        raise SerializationError(
            f"Node entries must be a mapping or a list, got {type(entries).__name__}"
        )

    def add(
        self,
        name: str,
        sub: Any = None,
        params: Entries = None,
    ) -> "Node":
        """Add a named entry.

        In a field node, a name without ``sub`` is added positionally (a
        scalar field); in a parameter node it is set to null. With ``sub``
        the name becomes a key: a mapping or list is turned into a nested
        node of the same kind, anything else is a leaf.

        Args:
            name: Field or parameter name.
            sub: Optional value or nested entries.
            params: Arguments for a field selection, e.g. ``{"first": 5}``
                renders ``name(first:5){...}``. Field nodes only.

        Returns:
            This node, for chaining.
        """
        if params is not None:
            if self._separated:
                raise SerializationError(
                    f"Arguments are only allowed on field selections, not on '{name}'"
                )
            fields = None if sub is None else Node(sub)
            self._set(name, Selection(Node(params, separated=True), fields))
        elif sub is None and not self._separated:
            self.append(name)
        else:
            self._set(name, sub)
        return self

    def append(self, value: Any) -> "Node":
        """Add a positional entry.

        Returns:
            This node, for chaining.
        """
        self._entries.append((None, self._wrap(value)))
        return self

    def get(self, name: str) -> Any:
        """Return the value stored under ``name``, or None."""
        position = self._index.get(name)
        if position is None:
            return None
        return self._entries[position][1]

    def build(self) -> str:
        """Serialize the node content without its container.

        Returns:
            The comma-joined entries.

        Raises:
            SerializationError: If an entry cannot be rendered.
        """
        return ",".join(self._build_entry(key, value) for key, value in self._entries)

    def build_wrapped(self) -> str:
        """Serialize the node including its container.

        Field nodes always use ``{}`` and must not be empty. Parameter
        nodes use ``[]`` when every entry is positional and ``{}``
        otherwise.

        Raises:
            SerializationError: If a field node is empty.
        """
        if not self._separated:
            if not self._entries:
                raise SerializationError("A field selection must not be empty")
            return "{" + self.build() + "}"
        if self._is_array():
            return "[" + self.build() + "]"
        return "{" + self.build() + "}"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str | None, Any]]:
        return iter(list(self._entries))

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        kind = "params" if self._separated else "fields"
        return f"Node({kind}: {self.build()!r})"

    def _set(self, name: str, value: Any) -> None:
        wrapped = self._wrap(value)
        position = self._index.get(name)
        if position is None:
            self._index[name] = len(self._entries)
            self._entries.append((name, wrapped))
        else:
            self._entries[position] = (name, wrapped)

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, (Mapping, list, tuple)):
            return Node(value, separated=self._separated)
        return value

    def _is_array(self) -> bool:
        if self._entries:
            return all(key is None for key, _ in self._entries)
        return self._sequence

    def _build_entry(self, key: str | None, value: Any) -> str:
        if self._separated:
            rendered = render_value(value)
            return rendered if key is None else f"{key}:{rendered}"

        if key is None:
            if not isinstance(value, str):
                raise SerializationError(
                    f"Field names must be strings, got {type(value).__name__}"
                )
            return value
        if isinstance(value, Selection):
            return value.build(key)
        if isinstance(value, Node):
            return key + value.build_wrapped()
        if isinstance(value, str):
            # Text appended verbatim to the field name
            return key + value
        raise SerializationError(
            f"Field '{key}' must map to a selection or text, got {type(value).__name__}"
        )


class Selection:
    """A field selection with arguments: ``name(args){fields}``."""

    def __init__(self, params: Node, fields: Node | None = None) -> None:
        self.params = params
        self.fields = fields

    def build(self, name: str) -> str:
        """Serialize the selection under ``name``.

        The argument list is omitted when empty and the braces are
        omitted when the selection has no sub-fields.
        """
        built = name
        if len(self.params) > 0:
            built += "(" + self.params.build() + ")"
        if self.fields is not None:
            built += self.fields.build_wrapped()
        return built


def render_value(value: Any) -> str:
    """Render a parameter value as a GraphQL literal.

    Strings are double quoted with JSON escaping, booleans render as
    ``true``/``false`` and None renders as ``null``.

    Raises:
        SerializationError: If the value has no literal form.
    """
    if isinstance(value, Node):
        return value.build_wrapped()
    if isinstance(value, (Variable, EnumValue)):
        return value.build()
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Cannot serialize non-finite number {value!r}")
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    raise SerializationError(f"Cannot serialize value of type {type(value).__name__}")
