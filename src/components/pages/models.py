"""
Pages component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from src.domain.entities import Page, User

ErrorKind = Literal["validation", "unauthorized", "not_found"]


# --- Errors ---


@dataclass(frozen=True)
class PageError:
    """A page operation failure with a human readable message."""

    kind: ErrorKind
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ContentBlockInput:
    """
    One content block as submitted by a client.

    A missing or negative id means the block is new.
    """

    header: str | None = None
    sort_number: int | None = None
    paragraph: str | None = None
    image_id: int | None = None
    id: int | None = None


@dataclass(frozen=True)
class PageDraftInput:
    """The full desired state of a page."""

    title: str | None = None
    release_date: str | None = None
    contents: list[ContentBlockInput] | None = None
    author_id: int | None = None


@dataclass(frozen=True)
class ListPagesInput:
    """List pages visible to the actor (None for anonymous callers)."""

    actor: User | None = None


@dataclass(frozen=True)
class GetPageInput:
    page_id: int


@dataclass(frozen=True)
class CreatePageInput:
    actor: User
    draft: PageDraftInput


@dataclass(frozen=True)
class UpdatePageInput:
    actor: User
    page_id: int
    draft: PageDraftInput


@dataclass(frozen=True)
class DeletePageInput:
    actor: User
    page_id: int


# --- Output Models ---


@dataclass(frozen=True)
class PageOutput:
    """Output containing a single page."""

    page: Page | None = None
    errors: list[PageError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PageListOutput:
    pages: list[Page] = field(default_factory=list)
    errors: list[PageError] = field(default_factory=list)
    success: bool = True
