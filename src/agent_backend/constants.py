"""
Constants for the agent backend client.

Defines HTTP header names and transport defaults.
"""

# HTTP Header names
HEADER_TOKEN = "X-Token"
HEADER_APP_NAME = "X-App-Name"
HEADER_SESSION_ID = "X-Session-Id"

CONTENT_TYPE_JSON = "application/json"

# Transport defaults
DEFAULT_BASE_URL = "https://backend.agent.local"
DEFAULT_TIMEOUT = 10.0  # seconds
DEFAULT_CONNECT_TIMEOUT = 5.0  # seconds
