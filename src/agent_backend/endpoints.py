"""
Endpoint Table

Maps each logical backend operation to its HTTP method and URL path, and to
the payload types it exchanges. The table is validated once, when it is
built: a bad entry is a configuration error, never a call-time error.
"""

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Mapping, Optional, Type, Union

from .exceptions import ConfigurationError
from .models import (
    ActionsPackResponse,
    AppBeatRequest,
    AppBeatResponse,
    AppLoginRequest,
    AppLoginResponse,
    BatchRequest,
    WireModel,
)

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


class Operation(str, Enum):
    """Logical backend operations."""

    APP_LOGIN = "AppLogin"
    APP_BEAT = "AppBeat"
    BATCH = "Batch"
    ACTIONS_PACK = "ActionsPack"
    APP_LOGOUT = "AppLogout"


@dataclass(frozen=True)
class OperationSpec:
    """Payload shape of an operation.

    A `None` model means the operation carries no body in that direction.
    """
    request_model: Optional[Type[WireModel]]
    response_model: Optional[Type[WireModel]]
    expected_status: int = HTTPStatus.OK
    requires_session: bool = True


OPERATIONS: dict[Operation, OperationSpec] = {
    Operation.APP_LOGIN: OperationSpec(AppLoginRequest, AppLoginResponse, requires_session=False),
    Operation.APP_BEAT: OperationSpec(AppBeatRequest, AppBeatResponse),
    Operation.BATCH: OperationSpec(BatchRequest, None),
    Operation.ACTIONS_PACK: OperationSpec(None, ActionsPackResponse),
    Operation.APP_LOGOUT: OperationSpec(None, None),
}


@dataclass(frozen=True)
class EndpointDescriptor:
    """HTTP method and path of a backend endpoint."""
    method: str
    path: str


DEFAULT_ENDPOINTS: dict[Operation, EndpointDescriptor] = {
    Operation.APP_LOGIN: EndpointDescriptor("POST", "/agent/v1/app-login"),
    Operation.APP_BEAT: EndpointDescriptor("POST", "/agent/v1/app-beat"),
    Operation.BATCH: EndpointDescriptor("POST", "/agent/v0/batch"),
    Operation.ACTIONS_PACK: EndpointDescriptor("GET", "/agent/v0/actionspack"),
    Operation.APP_LOGOUT: EndpointDescriptor("POST", "/agent/v0/app-logout"),
}

EndpointOverride = Union[EndpointDescriptor, tuple[str, str]]


def _to_operation(name: Union[Operation, str]) -> Operation:
    try:
        return Operation(name)
    except ValueError:
        raise ConfigurationError(f"Unknown backend operation: {name!r}") from None


def _to_descriptor(operation: Operation, value: EndpointOverride) -> EndpointDescriptor:
    if isinstance(value, EndpointDescriptor):
        descriptor = value
    else:
        try:
            method, path = value
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Endpoint for {operation.value} must be a (method, path) pair, got {value!r}"
            ) from None
        descriptor = EndpointDescriptor(str(method).upper(), path)

    if descriptor.method not in ALLOWED_METHODS:
        raise ConfigurationError(
            f"Endpoint for {operation.value} has unsupported method {descriptor.method!r}"
        )
    if not isinstance(descriptor.path, str) or not descriptor.path.startswith("/"):
        raise ConfigurationError(
            f"Endpoint for {operation.value} must have an absolute path, got {descriptor.path!r}"
        )
    return descriptor


class EndpointTable:
    """Validated, immutable operation -> endpoint mapping."""

    def __init__(
        self,
        endpoints: Optional[Mapping[Union[Operation, str], EndpointOverride]] = None,
        *,
        use_defaults: bool = True,
    ):
        """Build and validate the table.

        Args:
            endpoints: Entries overriding (or, without defaults, defining) the table
            use_defaults: Start from DEFAULT_ENDPOINTS before applying `endpoints`

        Raises:
            ConfigurationError: If an entry is malformed or an operation is missing
        """
        table: dict[Operation, EndpointDescriptor] = {}
        if use_defaults:
            table.update(DEFAULT_ENDPOINTS)

        for name, value in (endpoints or {}).items():
            operation = _to_operation(name)
            table[operation] = _to_descriptor(operation, value)

        missing = [op.value for op in Operation if op not in table]
        if missing:
            raise ConfigurationError(
                f"Missing endpoint configuration for: {', '.join(missing)}"
            )

        self._table = table

    def resolve(self, operation: Operation) -> EndpointDescriptor:
        """Get the endpoint of an operation."""
        return self._table[operation]

    def spec(self, operation: Operation) -> OperationSpec:
        """Get the payload shape of an operation."""
        return OPERATIONS[operation]

    def __iter__(self):
        return iter(self._table.items())

    def __repr__(self) -> str:
        entries = ", ".join(f"{op.value}={d.method} {d.path}" for op, d in self._table.items())
        return f"EndpointTable({entries})"
