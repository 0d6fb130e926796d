"""
Pages component - page authoring, listing and soft deletion.

A page is read back and materialized after every mutation: its author is
enriched with statistics, its contents are ordered by sort number, and its
status is derived from the release date against today's date.

Order of checks on mutations:
- edit/delete: existence, then authorization, then validation
- create: authorization, then validation
Nothing is written until every check has passed.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from src.components.images import ResolveImagesInput, run_resolve_images
from src.components.users import build_profile
from src.domain.entities import (
    ContentDraft,
    ContentRef,
    ExistingContent,
    Image,
    NewContent,
    Page,
    PageRow,
    Paragraph,
    Picture,
    User,
)
from src.domain.errors import StoreError
from src.domain.state import page_status

from ._reconcile import DuplicateContentError, ForeignContentError, reconcile
from .models import (
    ContentBlockInput,
    CreatePageInput,
    DeletePageInput,
    GetPageInput,
    ListPagesInput,
    PageDraftInput,
    PageError,
    PageListOutput,
    PageOutput,
    UpdatePageInput,
)
from .ports import ImageRepoPort, PageRepoPort, PolicyPort, TimePort, UserRepoPort

logger = logging.getLogger(__name__)

# --- Messages ---

TITLE_MISSING = "It is not allowed to add a page without a Title!"
TITLE_EMPTY = "The title can not be empty!"
CONTENTS_MISSING = "It is not allowed to add a page without a content block!"
HEADER_MISSING = "Each content block must have a header!"
SORT_NUMBER_MISSING = "Each content block must have a sort number!"
BODY_MISSING = "Each content block must have at least a paragraph or an image!"
SORT_NUMBER_DUPLICATE = "Sort numbers must be unique within a page!"
RELEASE_DATE_INVALID = "The release date must be a valid date!"
NO_PAGES = "There is no page yet!"
PAGE_NOT_FOUND = "Page not found!"
IMAGE_NOT_FOUND = "Image Not Found"
USER_NOT_FOUND = "User Not Found"
CREATE_FORBIDDEN = "You must be authenticated to add a page!"
EDIT_FORBIDDEN = "This page can not be edited if you are not the author!"
DELETE_FORBIDDEN = "This page can not be deleted if you are not the author!"
FOREIGN_BLOCK = "Content block {id} does not belong to this page!"
REPEATED_BLOCK = "Content block {id} is submitted more than once!"


# --- Validation ---


def _has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def _parse_release_date(value: str | None) -> date | None:
    """Accept an ISO date or datetime; keep only the calendar day."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def _validate_draft(draft: PageDraftInput) -> list[PageError]:
    """Collect every validation message for a submitted page, without duplicates."""
    messages: list[tuple[str, str]] = []

    if draft.title is None:
        messages.append(("title", TITLE_MISSING))
        messages.append(("title", TITLE_EMPTY))
    elif not draft.title.strip():
        messages.append(("title", TITLE_EMPTY))

    try:
        _parse_release_date(draft.release_date)
    except ValueError:
        messages.append(("release_date", RELEASE_DATE_INVALID))

    if not draft.contents:
        messages.append(("contents", CONTENTS_MISSING))
    else:
        sort_numbers: set[int] = set()
        for block in draft.contents:
            if not _has_text(block.header):
                messages.append(("contents", HEADER_MISSING))
            if block.sort_number is None:
                messages.append(("contents", SORT_NUMBER_MISSING))
            elif block.sort_number in sort_numbers:
                messages.append(("contents", SORT_NUMBER_DUPLICATE))
            else:
                sort_numbers.add(block.sort_number)
            if not _has_text(block.paragraph) and block.image_id is None:
                messages.append(("contents", BODY_MISSING))

    unique = dict.fromkeys(messages)
    return [PageError(kind="validation", message=msg, field=f) for f, msg in unique]


def _referenced_image_ids(blocks: list[ContentBlockInput]) -> list[int]:
    # A paragraph wins over an image, so those image ids are never looked up
    return [b.image_id for b in blocks if not _has_text(b.paragraph) and b.image_id is not None]


def _resolve_images(
    blocks: list[ContentBlockInput], images: ImageRepoPort
) -> tuple[dict[int, Image], list[PageError]]:
    resolved = run_resolve_images(
        ResolveImagesInput(image_ids=_referenced_image_ids(blocks)), repo=images
    )
    if not resolved.success:
        return {}, [PageError(kind="not_found", message=IMAGE_NOT_FOUND, field="contents")]
    return resolved.images, []


def _to_draft(block: ContentBlockInput, images: dict[int, Image]) -> ContentDraft:
    assert block.header is not None and block.sort_number is not None
    body: Paragraph | Picture
    text = (block.paragraph or "").strip()
    if text:
        body = Paragraph(text=text)
    else:
        assert block.image_id is not None
        body = Picture(image=images[block.image_id])
    return ContentDraft(header=block.header.strip(), sort_number=block.sort_number, body=body)


def _to_ref(block: ContentBlockInput, images: dict[int, Image]) -> ContentRef:
    draft = _to_draft(block, images)
    if block.id is None or block.id < 0:
        return NewContent(draft=draft)
    return ExistingContent(id=block.id, draft=draft)


def _resolve_author(
    actor: User,
    requested_id: int | None,
    default_id: int,
    *,
    users: UserRepoPort,
    policy: PolicyPort,
) -> tuple[int, list[PageError]]:
    """Administrators may pick another author; everyone else keeps the default."""
    if requested_id is None or not policy.can_assign_author(actor):
        return default_id, []
    if users.get_by_id(requested_id) is None:
        return default_id, [PageError(kind="not_found", message=USER_NOT_FOUND, field="user")]
    return requested_id, []


# --- Materialization ---


def _materialize(
    row: PageRow,
    *,
    pages: PageRepoPort,
    users: UserRepoPort,
    time: TimePort,
) -> Page:
    author = users.get_by_id(row.user_id)
    if author is None:
        raise StoreError(f"Author {row.user_id} of page {row.id} is missing")

    return Page(
        id=row.id,
        title=row.title,
        release_date=row.release_date,
        creation_date=row.creation_date,
        deleted=row.deleted,
        status=page_status(row.release_date, time.today()),
        author=build_profile(author, pages=pages, time=time),
        contents=pages.list_contents(row.id),
    )


def _read_back(
    page_id: int,
    *,
    pages: PageRepoPort,
    users: UserRepoPort,
    time: TimePort,
) -> PageOutput:
    row = pages.get_row(page_id)
    if row is None:
        return PageOutput(
            errors=[PageError(kind="not_found", message=PAGE_NOT_FOUND)], success=False
        )
    return PageOutput(page=_materialize(row, pages=pages, users=users, time=time))


def _failed(errors: list[PageError]) -> PageOutput:
    return PageOutput(errors=errors, success=False)


def _block_errors(template: str, content_ids: list[int]) -> list[PageError]:
    return [
        PageError(kind="validation", message=template.format(id=content_id), field="contents")
        for content_id in content_ids
    ]


# --- Component Entry Points ---


def run_list(
    inp: ListPagesInput,
    *,
    pages: PageRepoPort,
    users: UserRepoPort,
    policy: PolicyPort,
    time: TimePort,
) -> PageListOutput:
    """
    List non-deleted pages ordered by release date (undated drafts first).

    Callers allowed to read every page (back-office) see all statuses;
    everybody else (front-office) only sees pages released by today.
    """
    if policy.check_permission(inp.actor, "pages:read_all"):
        rows = pages.list_rows()
    else:
        rows = pages.list_rows(released_on_or_before=time.today())

    if not rows:
        return PageListOutput(
            errors=[PageError(kind="not_found", message=NO_PAGES)], success=False
        )

    return PageListOutput(
        pages=[_materialize(row, pages=pages, users=users, time=time) for row in rows]
    )


def run_get(
    inp: GetPageInput,
    *,
    pages: PageRepoPort,
    users: UserRepoPort,
    time: TimePort,
) -> PageOutput:
    return _read_back(inp.page_id, pages=pages, users=users, time=time)


def run_create(
    inp: CreatePageInput,
    *,
    pages: PageRepoPort,
    users: UserRepoPort,
    images: ImageRepoPort,
    policy: PolicyPort,
    time: TimePort,
) -> PageOutput:
    if not policy.can_create_page(inp.actor):
        return _failed([PageError(kind="unauthorized", message=CREATE_FORBIDDEN)])

    draft = inp.draft
    errors = _validate_draft(draft)
    if errors:
        return _failed(errors)
    assert draft.title is not None and draft.contents

    found_images, errors = _resolve_images(draft.contents, images)
    if errors:
        return _failed(errors)

    author_id, errors = _resolve_author(
        inp.actor, draft.author_id, inp.actor.id, users=users, policy=policy
    )
    if errors:
        return _failed(errors)

    page_id = pages.create(
        title=draft.title.strip(),
        release_date=_parse_release_date(draft.release_date),
        creation_date=time.today(),
        user_id=author_id,
        contents=[_to_draft(block, found_images) for block in draft.contents],
    )
    logger.info("Page %s created by user %s (author %s)", page_id, inp.actor.id, author_id)

    return _read_back(page_id, pages=pages, users=users, time=time)


def run_update(
    inp: UpdatePageInput,
    *,
    pages: PageRepoPort,
    users: UserRepoPort,
    images: ImageRepoPort,
    policy: PolicyPort,
    time: TimePort,
) -> PageOutput:
    """
    Replace a page's title, release date, author and full content list.

    Blocks carrying an id of the page are updated in place, blocks without an
    id (or with a negative one) are inserted, and stored blocks missing from
    the submission are deleted.
    """
    row = pages.get_row(inp.page_id)
    if row is None:
        return _failed([PageError(kind="not_found", message=PAGE_NOT_FOUND)])

    if not policy.can_edit_page(inp.actor, row):
        return _failed([PageError(kind="unauthorized", message=EDIT_FORBIDDEN)])

    draft = inp.draft
    errors = _validate_draft(draft)
    if errors:
        return _failed(errors)
    assert draft.title is not None and draft.contents

    found_images, errors = _resolve_images(draft.contents, images)
    if errors:
        return _failed(errors)

    author_id, errors = _resolve_author(
        inp.actor, draft.author_id, row.user_id, users=users, policy=policy
    )
    if errors:
        return _failed(errors)

    refs = [_to_ref(block, found_images) for block in draft.contents]
    try:
        plan = reconcile(pages.list_contents(row.id), refs)
    except ForeignContentError as e:
        return _failed(_block_errors(FOREIGN_BLOCK, e.content_ids))
    except DuplicateContentError as e:
        return _failed(_block_errors(REPEATED_BLOCK, e.content_ids))

    pages.update(
        row.id,
        title=draft.title.strip(),
        release_date=_parse_release_date(draft.release_date),
        user_id=author_id,
        to_insert=plan.to_insert,
        to_update=plan.to_update,
        to_remove=plan.to_remove,
    )
    logger.info(
        "Page %s edited by user %s: %d inserted, %d updated, %d removed",
        row.id,
        inp.actor.id,
        len(plan.to_insert),
        len(plan.to_update),
        len(plan.to_remove),
    )

    return _read_back(row.id, pages=pages, users=users, time=time)


def run_delete(
    inp: DeletePageInput,
    *,
    pages: PageRepoPort,
    policy: PolicyPort,
) -> PageOutput:
    """Soft-delete a page. The row and its contents stay in the store."""
    row = pages.get_row(inp.page_id)
    if row is None:
        return _failed([PageError(kind="not_found", message=PAGE_NOT_FOUND)])

    if not policy.can_delete_page(inp.actor, row):
        return _failed([PageError(kind="unauthorized", message=DELETE_FORBIDDEN)])

    pages.soft_delete(row.id)
    logger.info("Page %s deleted by user %s", row.id, inp.actor.id)
    return PageOutput()
