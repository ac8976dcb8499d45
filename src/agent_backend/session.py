"""
Session State - holds the backend session token.

Thread-safe: heartbeat and batch callers read the token while login/logout
replace it, all under a single lock.
"""

import threading
from typing import Optional


class SessionState:
    """Lock-guarded current session token."""

    def __init__(self):
        self._session_id: Optional[str] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[str]:
        """Get the current session token, or None when there is no session."""
        with self._lock:
            return self._session_id

    def replace(self, session_id: str) -> Optional[str]:
        """Atomically replace the session token.

        Returns the previous token.
        """
        with self._lock:
            previous = self._session_id
            self._session_id = session_id
            return previous

    def clear(self, expected: Optional[str] = None) -> bool:
        """Clear the session.

        With `expected`, only clears if the current token is still that one, so
        a logout does not undo a login that happened concurrently.

        Returns True if the session was cleared.
        """
        with self._lock:
            if expected is not None and self._session_id != expected:
                return False
            previous = self._session_id
            self._session_id = None
            return previous is not None

    @property
    def active(self) -> bool:
        return self.get() is not None
