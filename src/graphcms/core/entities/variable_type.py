"""Variable type value object."""

from dataclasses import dataclass, replace


@dataclass(frozen=True, eq=False)
class Type:
    """Datatype of a document variable.

    Wraps a base kind with the required (``!``) and multiple (``[...]``)
    modifiers and an optional prefix, which enum and order types need
    (``Post_OrderBy``, ``Post_Status``).

    Several content types share a wire type: a color is sent as a
    ``String``, a location as ``Json`` and a date as ``DateTime``.

    Example:
        Type(Type.INT).required().multiple()        # [Int!]
        Type(Type.ORDER).prefix("Post")             # PostOrderBy
    """

    ID = "Id"
    STRING = "String"
    COLOR = "String"
    INT = "Int"
    JSON = "Json"
    LOCATION = "Json"
    BOOL = "Boolean"
    FLOAT = "Float"
    DATE = "DateTime"
    DATETIME = "DateTime"
    ORDER = "OrderBy"

    kind: str
    is_required: bool = False
    is_multiple: bool = False
    type_prefix: str = ""

    def required(self) -> "Type":
        """Return the same type marked as non-nullable."""
        return replace(self, is_required=True)

    def multiple(self) -> "Type":
        """Return the same type wrapped as a list."""
        return replace(self, is_multiple=True)

    def prefix(self, prefix: str) -> "Type":
        """Return the same type with ``prefix`` prepended to its name."""
        return replace(self, type_prefix=prefix)

    def build(self) -> str:
        """Serialize the type, e.g. ``[PostOrderBy!]``."""
        name = self.type_prefix + self.kind + ("!" if self.is_required else "")
        if self.is_multiple:
            return f"[{name}]"
        return name

    def __str__(self) -> str:
        return self.build()

    def __eq__(self, other: object) -> bool:
        # Types that serialize the same are the same type
        if not isinstance(other, Type):
            return NotImplemented
        return self.build() == other.build()

    def __hash__(self) -> int:
        return hash(self.build())
