"""Pytest configuration and fixtures for agent backend client tests."""

import random
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx
import pytest

from agent_backend import BackendClient
from agent_backend.endpoints import DEFAULT_ENDPOINTS, Operation

from factories import new_app_login_request, new_app_login_response, rand_token


BASE_URL = "http://backend.test"


# ============================================================================
# Fake Backend
# ============================================================================


@dataclass
class ReceivedRequest:
    """A request observed by the fake backend."""
    method: str
    path: str
    headers: httpx.Headers
    body: bytes


Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Scripted backend behind an httpx.MockTransport.

    Handlers are consumed in order, one per request. Every request is recorded,
    including those with no handler left (answered with HTTP 599).
    """

    def __init__(self):
        self.requests: list[ReceivedRequest] = []
        self._handlers: deque[Handler] = deque()
        self._default: Optional[Handler] = None
        self._lock = threading.Lock()
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(ReceivedRequest(
                method=request.method,
                path=request.url.path,
                headers=request.headers,
                body=request.read(),
            ))
            handler = self._handlers.popleft() if self._handlers else self._default
        if handler is None:
            return httpx.Response(599, text="no handler for request")
        return handler(request)

    def respond(self, status_code: int = 200, json: Any = None, content: bytes = b"") -> None:
        """Queue a response for the next request."""
        self._handlers.append(_responder(status_code, json, content))

    def respond_always(self, status_code: int = 200, json: Any = None, content: bytes = b"") -> None:
        """Answer every request with no queued handler the same way."""
        self._default = _responder(status_code, json, content)

    def handle_with(self, handler: Handler) -> None:
        """Queue a custom handler for the next request."""
        self._handlers.append(handler)

    def fail(self, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        """Make the next request raise a transport exception."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)
        self._handlers.append(handler)

    def requests_to(self, operation: Operation) -> list[ReceivedRequest]:
        endpoint = DEFAULT_ENDPOINTS[operation]
        return [
            r for r in self.requests
            if r.method == endpoint.method and r.path == endpoint.path
        ]


def _responder(status_code: int, json: Any, content: bytes) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        if json is not None:
            return httpx.Response(status_code, json=json)
        return httpx.Response(status_code, content=content)
    return handler


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def rng(request):
    """Random generator seeded from the test name, so runs are reproducible."""
    return random.Random(request.node.nodeid)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    """Client without a session."""
    client = BackendClient(BASE_URL, transport=backend.transport)
    yield client
    client.close()


@pytest.fixture
def session_id(rng):
    return rand_token(rng)


@pytest.fixture
def logged_in_client(client, backend, rng, session_id):
    """Client with an active session. The login request is cleared from the backend."""
    response = new_app_login_response(rng)
    response.session_id = session_id
    backend.respond(json=response.model_dump(by_alias=True))

    client.app_login(new_app_login_request(rng), rand_token(rng), rand_token(rng))
    assert client.session_id == session_id

    backend.requests.clear()
    return client
