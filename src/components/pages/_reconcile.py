"""
Content reconciliation.

Diffs the blocks a client submitted for a page against the blocks stored for
it and yields the rows to insert, update and delete.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from src.domain.entities import Content, ContentDraft, ContentRef, ExistingContent, NewContent


class ForeignContentError(ValueError):
    """A submitted block claims an id that isn't one of the page's blocks."""

    def __init__(self, content_ids: list[int]):
        self.content_ids = content_ids
        super().__init__(f"Content blocks {content_ids} do not belong to this page")


class DuplicateContentError(ValueError):
    """The same stored block is referenced by more than one submitted block."""

    def __init__(self, content_ids: list[int]):
        self.content_ids = content_ids
        super().__init__(f"Content blocks {content_ids} are submitted more than once")


@dataclass(frozen=True)
class ContentPlan:
    to_insert: list[ContentDraft] = field(default_factory=list)
    to_update: list[Content] = field(default_factory=list)
    to_remove: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_insert or self.to_update or self.to_remove)


def reconcile(existing: Sequence[Content], submitted: Sequence[ContentRef]) -> ContentPlan:
    """
    Compute the insert/update/delete sets turning `existing` into `submitted`.

    The three sets are disjoint: new blocks are inserted, blocks referenced by
    id are overwritten in place, and stored blocks no submission refers to are
    removed.

    Raises:
        ForeignContentError: if a submitted id isn't among the existing ids.
        DuplicateContentError: if a submitted id appears more than once.
    """
    existing_ids = {content.id for content in existing}
    to_insert: list[ContentDraft] = []
    to_update: list[Content] = []
    kept: set[int] = set()
    foreign: list[int] = []
    repeated: list[int] = []

    for ref in submitted:
        if isinstance(ref, NewContent):
            to_insert.append(ref.draft)
        elif isinstance(ref, ExistingContent):
            if ref.id not in existing_ids:
                foreign.append(ref.id)
                continue
            if ref.id in kept:
                repeated.append(ref.id)
                continue
            kept.add(ref.id)
            to_update.append(
                Content(
                    id=ref.id,
                    header=ref.draft.header,
                    sort_number=ref.draft.sort_number,
                    body=ref.draft.body,
                )
            )

    if foreign:
        raise ForeignContentError(foreign)
    if repeated:
        raise DuplicateContentError(list(dict.fromkeys(repeated)))

    to_remove = [content.id for content in existing if content.id not in kept]
    return ContentPlan(to_insert=to_insert, to_update=to_update, to_remove=to_remove)
