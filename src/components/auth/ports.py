from datetime import datetime
from typing import Any, Protocol

from src.domain.entities import Session, User


class UserRepoPort(Protocol):
    def get_by_email(self, email: str) -> User | None: ...
    def get_by_id(self, user_id: int) -> User | None: ...
    def create(self, user: User) -> User: ...


class AuthAdapterPort(Protocol):
    def verify_password(self, plain: str, hashed: str) -> bool: ...
    def hash_password(self, plain: str) -> str: ...
    def create_token(self, user_id: int, session_id: str, ttl_minutes: int) -> str: ...
    def decode_token(self, token: str) -> dict[str, Any] | None: ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class SessionStorePort(Protocol):
    """Port for session storage - removes global state from component."""

    def get(self, session_id: str) -> Session | None:
        """Get session by id."""
        ...

    def save(self, session: Session) -> None:
        """Save session under its id."""
        ...

    def delete(self, session_id: str) -> None:
        """Delete session by id."""
        ...
