"""
HTTP client for the agent control-plane backend.

Wraps the backend session protocol with typed methods: login, heartbeat,
event batches, actions pack and logout. The client holds the session token
and attaches the right authentication headers to each call.

The client never retries and never runs background work: the agent decides
when to call and how to react to errors.
"""

import logging
from typing import Mapping, Optional, Union

import httpx

from . import codec
from .config import ClientConfig
from .constants import (
    CONTENT_TYPE_JSON,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_TIMEOUT,
    HEADER_APP_NAME,
    HEADER_SESSION_ID,
    HEADER_TOKEN,
)
from .endpoints import EndpointOverride, EndpointTable, Operation
from .exceptions import (
    AuthenticationError,
    BackendClientError,
    ConfigurationError,
    DecodeError,
    NotAuthenticatedError,
    TransportError,
)
from .models import (
    ActionsPackResponse,
    AppBeatRequest,
    AppBeatResponse,
    AppLoginRequest,
    AppLoginResponse,
    BatchRequest,
    WireModel,
)
from .session import SessionState

logger = logging.getLogger(__name__)


class BackendClient:
    """Session-oriented HTTP client for the agent backend.

    Safe to share between threads, e.g. a heartbeat timer and an event
    uploader.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        headers: Optional[Mapping[str, str]] = None,
        proxy: Optional[str] = None,
        endpoints: Optional[Union[EndpointTable, Mapping[str, EndpointOverride]]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize client with base URL.

        Args:
            base_url: Backend URL (e.g., https://backend.example.com)
            timeout: Per-call timeout in seconds
            connect_timeout: Connection timeout in seconds
            headers: Extra headers sent with every request
            proxy: Explicit proxy URL. Without it, HTTPS_PROXY and friends apply
            endpoints: Endpoint table, or overrides of the default one
            transport: Custom httpx transport (tests use httpx.MockTransport)

        Raises:
            ConfigurationError: If the base URL or endpoint table is invalid
        """
        if not base_url:
            raise ConfigurationError("Backend base URL is required")
        for name, value in (headers or {}).items():
            if not value.isascii():
                raise ConfigurationError(f"{name} header value must be ASCII")

        self.base_url = base_url.rstrip("/")
        if isinstance(endpoints, EndpointTable):
            self._endpoints = endpoints
        else:
            self._endpoints = EndpointTable(endpoints)

        self._session = SessionState()
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            headers=dict(headers or {}),
            proxy=proxy,
            transport=transport,
            trust_env=True,
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "BackendClient":
        """Create a client from a ClientConfig."""
        return cls(
            config.base_url,
            timeout=config.timeout,
            connect_timeout=config.connect_timeout,
            headers=config.headers,
            proxy=config.proxy,
            **kwargs,
        )

    @property
    def session_id(self) -> Optional[str]:
        """Current session token, or None without a session."""
        return self._session.get()

    @property
    def is_authenticated(self) -> bool:
        return self._session.active

    @property
    def endpoints(self) -> EndpointTable:
        return self._endpoints

    def reset_session(self) -> None:
        """Forget the current session locally, without calling the backend."""
        if self._session.clear():
            logger.debug("Session reset")

    # ========== Transport ==========

    def _call(
        self,
        operation: Operation,
        body: Optional[WireModel] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> tuple[Optional[WireModel], Optional[str]]:
        """Send one operation and decode its response.

        Returns the decoded response and the session token the call was made with.
        Session-bearing operations fail fast, before any request, without a session.
        """
        endpoint = self._endpoints.resolve(operation)
        spec = self._endpoints.spec(operation)
        headers = dict(headers or {})

        session_id = None
        if spec.requires_session:
            session_id = self._session.get()
            if session_id is None:
                raise NotAuthenticatedError()
            headers[HEADER_SESSION_ID] = session_id

        for name, value in headers.items():
            if not value.isascii():
                raise ConfigurationError(f"{name} header value must be ASCII")

        if spec.request_model is None:
            if body is not None:
                raise TypeError(f"{operation.value} does not take a request body")
        elif not isinstance(body, spec.request_model):
            raise TypeError(
                f"{operation.value} expects {spec.request_model.__name__}, "
                f"got {type(body).__name__}"
            )

        content = codec.encode(body)
        if content is not None:
            headers["Content-Type"] = CONTENT_TYPE_JSON

        logger.debug(f"{operation.value}: {endpoint.method} {endpoint.path}")
        try:
            response = self._client.request(
                endpoint.method,
                endpoint.path,
                content=content,
                headers=headers,
            )
        except httpx.DecodingError as e:
            raise DecodeError(f"{operation.value} response could not be read: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"{operation.value} request failed: {e}") from e

        logger.debug(f"{operation.value}: HTTP {response.status_code}")
        return codec.decode(response, spec.response_model, spec.expected_status), session_id

    # ========== Session API ==========

    def app_login(self, request: AppLoginRequest, token: str, app_name: str) -> AppLoginResponse:
        """Authenticate this application instance and open a session.

        Args:
            request: Login payload describing the agent and its process
            token: Application token
            app_name: Application name

        Returns:
            The login response. Its session_id becomes the current session.

        Raises:
            AuthenticationError: If the backend answered `status=false`
            ConfigurationError: If the token or app name is not ASCII
        """
        response, _ = self._call(
            Operation.APP_LOGIN,
            request,
            {HEADER_TOKEN: token, HEADER_APP_NAME: app_name},
        )
        if not response.status:
            message = "Backend rejected the login credentials"
            if response.error:
                message = f"{message}: {response.error}"
            raise AuthenticationError(message, error=response.error)
        if not response.session_id:
            raise DecodeError("Successful login response carries no sessionId")
        if not response.session_id.isascii():
            raise DecodeError("Login response sessionId is not a valid header value")

        previous = self._session.replace(response.session_id)
        if previous is not None:
            logger.debug("Session replaced by a new login")
        else:
            logger.debug("Session established")
        return response

    def app_beat(self, request: AppBeatRequest) -> AppBeatResponse:
        """Send a heartbeat, with command results and metrics."""
        response, _ = self._call(Operation.APP_BEAT, request)
        return response

    def batch(self, request: BatchRequest) -> None:
        """Upload a batch of events. The backend only acknowledges it."""
        self._call(Operation.BATCH, request)

    def actions_pack(self) -> ActionsPackResponse:
        """Fetch the current actions pack."""
        response, _ = self._call(Operation.ACTIONS_PACK)
        return response

    def app_logout(self) -> None:
        """Terminate the current session.

        The session is cleared only once the backend acknowledged the logout.
        """
        _, session_id = self._call(Operation.APP_LOGOUT)
        if self._session.clear(expected=session_id):
            logger.debug("Session closed")

    # ========== Lifecycle ==========

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def shutdown(self) -> None:
        """Logout if a session is active, then close the HTTP client.

        Called at agent shutdown: a failing logout must not prevent it.
        """
        try:
            if self.is_authenticated:
                self.app_logout()
        except BackendClientError as e:
            logger.warning(f"Failed to logout: {e}")
        finally:
            self.close()

    def __enter__(self) -> "BackendClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        state = "active session" if self.is_authenticated else "no session"
        return f"BackendClient({self.base_url!r}, {state})"
