from typing import Any

from fastapi import APIRouter, Depends, Response

from src.api.deps import (
    get_clock,
    get_current_user,
    get_image_repo,
    get_optional_user,
    get_page_repo,
    get_policy,
    get_user_repo,
)
from src.api.errors import raise_page_errors
from src.api.schemas import PageRequest, PageResponse
from src.components.pages import (
    ContentBlockInput,
    CreatePageInput,
    DeletePageInput,
    GetPageInput,
    ListPagesInput,
    PageDraftInput,
    UpdatePageInput,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_update,
)
from src.domain.entities import User

router = APIRouter()


def _to_draft(req: PageRequest) -> PageDraftInput:
    contents = None
    if req.contents is not None:
        contents = [
            ContentBlockInput(
                id=block.id,
                header=block.header,
                sort_number=block.sort_number,
                paragraph=block.paragraph,
                image_id=block.image.id if block.image else None,
            )
            for block in req.contents
        ]
    return PageDraftInput(
        title=req.title,
        release_date=req.release_date,
        contents=contents,
        author_id=req.user.id if req.user else None,
    )


@router.get("", response_model=list[PageResponse])
def list_pages(
    current_user: User | None = Depends(get_optional_user),
    pages: Any = Depends(get_page_repo),
    users: Any = Depends(get_user_repo),
    policy: Any = Depends(get_policy),
    clock: Any = Depends(get_clock),
) -> list[PageResponse]:
    """List pages. Anonymous callers only see published pages."""
    result = run_list(
        ListPagesInput(actor=current_user), pages=pages, users=users, policy=policy, time=clock
    )
    raise_page_errors(result.errors)
    return [PageResponse.from_page(page) for page in result.pages]


@router.get("/{page_id}", response_model=PageResponse)
def get_page(
    page_id: int,
    pages: Any = Depends(get_page_repo),
    users: Any = Depends(get_user_repo),
    clock: Any = Depends(get_clock),
) -> PageResponse:
    result = run_get(GetPageInput(page_id=page_id), pages=pages, users=users, time=clock)
    raise_page_errors(result.errors)
    assert result.page is not None
    return PageResponse.from_page(result.page)


@router.post("")
def create_page(
    req: PageRequest,
    current_user: User = Depends(get_current_user),
    pages: Any = Depends(get_page_repo),
    users: Any = Depends(get_user_repo),
    images: Any = Depends(get_image_repo),
    policy: Any = Depends(get_policy),
    clock: Any = Depends(get_clock),
) -> Response:
    """Create a page; administrators may author it on behalf of another user."""
    inp = CreatePageInput(actor=current_user, draft=_to_draft(req))
    result = run_create(
        inp, pages=pages, users=users, images=images, policy=policy, time=clock
    )
    raise_page_errors(result.errors)
    return Response(status_code=200)


@router.put("/{page_id}", response_model=PageResponse)
def update_page(
    page_id: int,
    req: PageRequest,
    current_user: User = Depends(get_current_user),
    pages: Any = Depends(get_page_repo),
    users: Any = Depends(get_user_repo),
    images: Any = Depends(get_image_repo),
    policy: Any = Depends(get_policy),
    clock: Any = Depends(get_clock),
) -> PageResponse:
    """Replace a page's fields and its whole content list."""
    inp = UpdatePageInput(actor=current_user, page_id=page_id, draft=_to_draft(req))
    result = run_update(
        inp, pages=pages, users=users, images=images, policy=policy, time=clock
    )
    raise_page_errors(result.errors)
    assert result.page is not None
    return PageResponse.from_page(result.page)


@router.delete("/{page_id}")
def delete_page(
    page_id: int,
    current_user: User = Depends(get_current_user),
    pages: Any = Depends(get_page_repo),
    policy: Any = Depends(get_policy),
) -> Response:
    inp = DeletePageInput(actor=current_user, page_id=page_id)
    result = run_delete(inp, pages=pages, policy=policy)
    raise_page_errors(result.errors)
    return Response(status_code=200)
