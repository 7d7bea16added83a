"""Document builders for graphcms."""

from graphcms.core.builders.document import (
    DEFAULT_OPERATION_NAME,
    MUTATION,
    QUERY,
    BaseDocument,
    Batch,
    Command,
    Document,
    RawDocument,
)
from graphcms.core.builders.node import EnumValue, Node, Selection, Variable
from graphcms.core.builders.variables import VariableSet

__all__ = [
    "QUERY",
    "MUTATION",
    "DEFAULT_OPERATION_NAME",
    "BaseDocument",
    "Batch",
    "Command",
    "Document",
    "RawDocument",
    "EnumValue",
    "Node",
    "Selection",
    "Variable",
    "VariableSet",
]
