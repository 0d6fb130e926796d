"""
Users component port definitions.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from src.domain.entities import PageRow, User


class UserRepoPort(Protocol):
    """Repository interface for user lookups."""

    def get_by_id(self, user_id: int) -> User | None:
        ...

    def list_all(self) -> list[User]:
        ...


class PageRowsPort(Protocol):
    """Raw page access used for statistics; never enriches authors."""

    def list_rows_by_user(self, user_id: int) -> list[PageRow]:
        ...


class TimePort(Protocol):
    def today(self) -> date:
        """Get the current UTC calendar day."""
        ...
