"""
Pages component port definitions.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from src.domain.entities import Content, ContentDraft, Image, Page, PageRow, User


class PageRepoPort(Protocol):
    """Raw page/content persistence."""

    def list_rows(self, released_on_or_before: date | None = None) -> list[PageRow]:
        ...

    def list_rows_by_user(self, user_id: int) -> list[PageRow]:
        ...

    def get_row(self, page_id: int) -> PageRow | None:
        ...

    def list_contents(self, page_id: int) -> list[Content]:
        ...

    def create(
        self,
        *,
        title: str,
        release_date: date | None,
        creation_date: date,
        user_id: int,
        contents: list[ContentDraft],
    ) -> int:
        ...

    def update(
        self,
        page_id: int,
        *,
        title: str,
        release_date: date | None,
        user_id: int,
        to_insert: list[ContentDraft],
        to_update: list[Content],
        to_remove: list[int],
    ) -> None:
        ...

    def soft_delete(self, page_id: int) -> None:
        ...


class UserRepoPort(Protocol):
    def get_by_id(self, user_id: int) -> User | None:
        ...


class ImageRepoPort(Protocol):
    def get_by_id(self, image_id: int) -> Image | None:
        ...

    def list_all(self) -> list[Image]:
        ...


class PolicyPort(Protocol):
    """Authorization decisions for page operations."""

    def check_permission(self, user: User | None, action: str, resource: object = None) -> bool:
        ...

    def can_create_page(self, user: User | None) -> bool:
        ...

    def can_assign_author(self, user: User | None) -> bool:
        ...

    def can_edit_page(self, user: User | None, page: Page | PageRow) -> bool:
        ...

    def can_delete_page(self, user: User | None, page: Page | PageRow) -> bool:
        ...


class TimePort(Protocol):
    def today(self) -> date:
        """Get the current UTC calendar day."""
        ...
