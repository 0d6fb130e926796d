"""In-memory session store adapter.

This adapter implements SessionStorePort for the auth component.
Sessions live as long as the process; a restart logs everyone out.
"""

from src.domain.entities import Session


class InMemorySessionStore:
    """In-memory session storage - suitable for single-process deployments."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, session_id: str) -> Session | None:
        """Get session by id."""
        return self._sessions.get(session_id)

    def save(self, session: Session) -> None:
        """Save session under its id."""
        self._sessions[session.id] = session

    def delete(self, session_id: str) -> None:
        """Delete session by id."""
        self._sessions.pop(session_id, None)

    def clear(self) -> None:
        """Clear all sessions - useful for testing."""
        self._sessions.clear()
