from typing import Any

from fastapi import APIRouter, Depends

from src.api.deps import get_clock, get_page_repo, get_user_repo
from src.api.schemas import UserResponse
from src.components.users import ListUsersInput, run_list_users

router = APIRouter()


@router.get("", response_model=list[UserResponse])
def list_users(
    user_repo: Any = Depends(get_user_repo),
    pages: Any = Depends(get_page_repo),
    clock: Any = Depends(get_clock),
) -> list[UserResponse]:
    """List all users with their page statistics."""
    result = run_list_users(ListUsersInput(), user_repo=user_repo, pages=pages, time=clock)
    return [UserResponse.from_profile(profile) for profile in result.profiles]
