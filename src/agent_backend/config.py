"""
Client Configuration

Configuration for the backend client, loaded from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .constants import DEFAULT_BASE_URL, DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT
from .exceptions import ConfigurationError


# Environment variable names
ENV_BASE_URL = "AGENT_BACKEND_URL"
ENV_TOKEN = "AGENT_BACKEND_TOKEN"
ENV_APP_NAME = "AGENT_BACKEND_APP_NAME"
ENV_TIMEOUT = "AGENT_BACKEND_TIMEOUT"
ENV_CONNECT_TIMEOUT = "AGENT_BACKEND_CONNECT_TIMEOUT"
ENV_PROXY = "AGENT_BACKEND_PROXY"
ENV_HEADERS = "AGENT_BACKEND_HEADERS"  # Comma-separated Name=value pairs


def _parse_headers(headers_str: str) -> dict[str, str]:
    """Parse a comma-separated `Name=value` string into a header dict."""
    headers: dict[str, str] = {}
    if not headers_str:
        return headers
    for entry in headers_str.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, value = entry.partition("=")
        if not sep or not name.strip():
            raise ConfigurationError(f"Invalid header entry in {ENV_HEADERS}: {entry!r}")
        headers[name.strip()] = value.strip()
    return headers


def _parse_seconds(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class AppIdentity:
    """Credentials presented at login only."""
    token: str
    app_name: str


@dataclass
class ClientConfig:
    """Configuration for the backend client."""

    base_url: str = DEFAULT_BASE_URL
    token: str = ""
    app_name: str = ""
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    proxy: Optional[str] = None  # Explicit proxy, takes precedence over HTTPS_PROXY
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def identity(self) -> Optional[AppIdentity]:
        """Login credentials, when both token and app name are configured."""
        if self.token and self.app_name:
            return AppIdentity(token=self.token, app_name=self.app_name)
        return None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables."""
        return cls(
            base_url=os.environ.get(ENV_BASE_URL, DEFAULT_BASE_URL),
            token=os.environ.get(ENV_TOKEN, ""),
            app_name=os.environ.get(ENV_APP_NAME, ""),
            timeout=_parse_seconds(ENV_TIMEOUT, DEFAULT_TIMEOUT),
            connect_timeout=_parse_seconds(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
            proxy=os.environ.get(ENV_PROXY) or None,
            headers=_parse_headers(os.environ.get(ENV_HEADERS, "")),
        )
