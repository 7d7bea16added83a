"""Documents: the canonical request strings sent to the API.

A document is built from its construction sequence only. The variable
values passed at execution time are sent alongside the document but never
change ``build()``, which is why the built string can double as the cache
key.

Example:
    doc = Document(QUERY, "user", fields=["name", "email"], params={"id": 5})
    doc.build()  # query method{user(id:5){name,email}}
"""

from collections.abc import Mapping
from typing import Any

from graphcms.core.builders.node import Entries, Node
from graphcms.core.builders.variables import VariableSet
from graphcms.core.entities.refresh_job import RefreshJob
from graphcms.core.entities.variable_type import Type
from graphcms.core.errors import GraphCMSError, SerializationError
from graphcms.core.interfaces.transport import ITransport

QUERY = "query"
MUTATION = "mutation"
DEFAULT_OPERATION_NAME = "method"


class Command:
    """One root operation: ``alias:method(params){fields}``."""

    def __init__(
        self,
        method: str,
        fields: Entries = None,
        params: Entries = None,
        alias: str | None = None,
    ) -> None:
        self._method = method
        self._alias = alias
        self._params = Node(params, separated=True)
        self._fields = Node(fields)

    @property
    def method(self) -> str:
        return self._method

    @property
    def alias(self) -> str | None:
        return self._alias

    def params(self) -> Node:
        """Return the parameter node, for adding parameters."""
        return self._params

    def fields(self) -> Node:
        """Return the field node, for adding fields."""
        return self._fields

    def build(self) -> str:
        """Serialize the command.

        Raises:
            SerializationError: If the command selects no fields.
        """
        if len(self._fields) == 0:
            raise SerializationError(f"Command '{self._method}' has an empty field list")
        built = f"{self._alias}:{self._method}" if self._alias else self._method
        if len(self._params) > 0:
            built += "(" + self._params.build() + ")"
        return built + "{" + self._fields.build() + "}"


class BaseDocument:
    """Shared state and execution for all document shapes.

    A document is bound to a transport, a project and a credential before
    it can be executed. It starts unexecuted and becomes executed once,
    either by running it or by marking it as served from cache.
    """

    def __init__(
        self,
        operation: str = QUERY,
        variables: Mapping[str, Type | str] | None = None,
        name: str = DEFAULT_OPERATION_NAME,
    ) -> None:
        if operation not in (QUERY, MUTATION):
            raise SerializationError(f"Unsupported operation type: {operation!r}")
        self._operation = operation
        self._name = name
        self._variables = VariableSet(variables)
        self._executed = False
        self._transport: ITransport | None = None
        self._endpoint_id: str | None = None
        self._credential: str | None = None

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def name(self) -> str:
        return self._name

    @property
    def endpoint_id(self) -> str | None:
        return self._endpoint_id

    @property
    def credential(self) -> str | None:
        return self._credential

    @property
    def is_mutation(self) -> bool:
        return self._operation == MUTATION

    def variables(self) -> VariableSet:
        """Return the variable declarations, for adding variables."""
        return self._variables

    def bind(
        self,
        transport: ITransport,
        endpoint_id: str | None = None,
        credential: str | None = None,
    ) -> "BaseDocument":
        """Attach the transport and credentials used by ``execute``.

        Returns:
            This document, for chaining.
        """
        self._transport = transport
        self._endpoint_id = endpoint_id
        self._credential = credential
        return self

    def build(self) -> str:
        """Serialize the document.

        Returns:
            The canonical document string.

        Raises:
            SerializationError: If the document has no field selection.
        """
        header = f"{self._operation} {self._name}"
        if len(self._variables) > 0:
            header += "(" + self._variables.build() + ")"
        return header + "{" + self._build_body() + "}"

    def executed(self) -> bool:
        """Whether the document was already executed or served."""
        return self._executed

    def mark_cached(self) -> "BaseDocument":
        """Mark the document executed without dispatching it."""
        self._executed = True
        return self

    def execute(self, values: dict[str, Any] | None = None) -> Any:
        """Send the document to the API.

        Args:
            values: Values for the declared variables.

        Returns:
            The decoded response.

        Raises:
            GraphCMSError: If the document is not bound to a transport.
            TransportError: If the request fails.
            MalformedResponseError: If the response is not valid JSON.
        """
        if self._transport is None:
            raise GraphCMSError("Document is not bound to a transport")
        result = self._transport.execute(
            self.build(),
            self._endpoint_id,
            self._credential,
            dict(values or {}),
            operation_name=self._name,
        )
        self._executed = True
        return result

    def to_job(self, key: str | None = None, values: dict[str, Any] | None = None) -> RefreshJob:
        """Describe this execution as a refresh job.

        Args:
            key: Cache key to overwrite. Defaults to the built document.
            values: Variable values of the execution.
        """
        document = self.build()
        return RefreshJob(
            key=document if key is None else key,
            document=document,
            operation_name=self._name,
            endpoint_id=self._endpoint_id,
            variables=dict(values or {}),
        )

    def __str__(self) -> str:
        return self.build()

    def _build_body(self) -> str:
        raise NotImplementedError


class Document(BaseDocument):
    """A document with a single root command."""

    def __init__(
        self,
        operation: str,
        method: str,
        fields: Entries = None,
        variables: Mapping[str, Type | str] | None = None,
        params: Entries = None,
        name: str = DEFAULT_OPERATION_NAME,
    ) -> None:
        """Initialize the document.

        Args:
            operation: ``query`` or ``mutation``.
            method: Root field to call, e.g. ``allPosts``.
            fields: Field selection of the root field.
            variables: Variable declarations, name to Type.
            params: Arguments of the root field.
            name: Operation name.
        """
        super().__init__(operation, variables, name)
        self._command = Command(method, fields, params)

    @property
    def method(self) -> str:
        return self._command.method

    def params(self) -> Node:
        """Return the root parameter node."""
        return self._command.params()

    def fields(self) -> Node:
        """Return the root field node."""
        return self._command.fields()

    def _build_body(self) -> str:
        return self._command.build()


class Batch(BaseDocument):
    """A document running several root commands in one request.

    Example:
        batch = Batch(QUERY, variables={"id": Type(Type.ID)})
        batch.add("Post", ["title"], {"id": Variable("id")})
        batch.add("allAuthors", ["name"], alias="authors")
        batch.build()
        # query method($id:Id){Post(id:$id){title},authors:allAuthors{name}}
    """

    def __init__(
        self,
        operation: str = QUERY,
        variables: Mapping[str, Type | str] | None = None,
        name: str = DEFAULT_OPERATION_NAME,
    ) -> None:
        super().__init__(operation, variables, name)
        self._commands: list[Command] = []

    def add(
        self,
        method: str,
        fields: Entries = None,
        params: Entries = None,
        alias: str | None = None,
    ) -> Command:
        """Append a root command.

        Returns:
            The new command, for adding fields and parameters.
        """
        command = Command(method, fields, params, alias)
        self._commands.append(command)
        return command

    @property
    def commands(self) -> list[Command]:
        return list(self._commands)

    def _build_body(self) -> str:
        if not self._commands:
            raise SerializationError("A batch needs at least one command")
        return ",".join(command.build() for command in self._commands)


class RawDocument(BaseDocument):
    """A document that was already built, e.g. replayed from a job."""

    def __init__(self, document: str, name: str = DEFAULT_OPERATION_NAME) -> None:
        operation = MUTATION if document.startswith(MUTATION) else QUERY
        super().__init__(operation, None, name)
        self._document = document

    def build(self) -> str:
        return self._document

    @classmethod
    def from_job(cls, job: RefreshJob) -> "RawDocument":
        """Rebuild the document described by a refresh job."""
        return cls(job.document, name=job.operation_name)
