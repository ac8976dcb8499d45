"""
Agent Backend Client Library.

Session-oriented HTTP client the agent uses to talk to its control-plane
backend: login, heartbeats, event batches, actions pack and logout.

Usage:
    from agent_backend import BackendClient, ClientConfig, AppLoginRequest

    config = ClientConfig.from_env()
    client = BackendClient.from_config(config)
    client.app_login(AppLoginRequest.from_runtime("1.0.0"), config.token, config.app_name)
    # ...
    client.shutdown()
"""

from .client import BackendClient
from .config import AppIdentity, ClientConfig
from .endpoints import EndpointDescriptor, EndpointTable, Operation
from .exceptions import (
    AuthenticationError,
    BackendClientError,
    ConfigurationError,
    DecodeError,
    NotAuthenticatedError,
    TransportError,
    UnexpectedStatusError,
)
from .models import (
    Action,
    ActionsPackResponse,
    AppBeatRequest,
    AppBeatResponse,
    AppLoginRequest,
    AppLoginResponse,
    BatchEvent,
    BatchRequest,
    Command,
    CommandResult,
)

__all__ = [
    "BackendClient",
    "AppIdentity",
    "ClientConfig",
    "EndpointDescriptor",
    "EndpointTable",
    "Operation",
    "AuthenticationError",
    "BackendClientError",
    "ConfigurationError",
    "DecodeError",
    "NotAuthenticatedError",
    "TransportError",
    "UnexpectedStatusError",
    "Action",
    "ActionsPackResponse",
    "AppBeatRequest",
    "AppBeatResponse",
    "AppLoginRequest",
    "AppLoginResponse",
    "BatchEvent",
    "BatchRequest",
    "Command",
    "CommandResult",
]
