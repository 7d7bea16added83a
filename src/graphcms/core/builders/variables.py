"""Ordered variable declarations of a document."""

import re
from collections.abc import Iterator, Mapping

from graphcms.core.entities.variable_type import Type
from graphcms.core.errors import SerializationError

_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class VariableSet:
    """Ordered mapping of variable names to types.

    Serializes as ``$first:Int,$where:Json``. Declaration order is kept,
    and declaring a name again replaces its type.
    """

    def __init__(self, variables: Mapping[str, Type | str] | None = None) -> None:
        self._variables: dict[str, Type] = {}
        for name, var_type in (variables or {}).items():
            self.add(name, var_type)

    def add(self, name: str, var_type: Type | str) -> "VariableSet":
        """Declare a variable.

        Args:
            name: Variable name without the ``$``.
            var_type: A Type, or a base kind name such as ``"Int"``.

        Returns:
            This set, for chaining.

        Raises:
            SerializationError: If the name is not a valid GraphQL name.
        """
        if not _NAME_PATTERN.match(name):
            raise SerializationError(f"Invalid variable name: {name!r}")
        if isinstance(var_type, str):
            var_type = Type(var_type)
        self._variables[name] = var_type
        return self

    def build(self) -> str:
        """Serialize the declarations, or ``""`` when there are none."""
        return ",".join(f"${name}:{var_type.build()}" for name, var_type in self._variables.items())

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __getitem__(self, name: str) -> Type:
        return self._variables[name]

    def __str__(self) -> str:
        return self.build()
