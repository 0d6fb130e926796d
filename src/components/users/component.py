"""
Users component - user profiles with page statistics.

Statistics are recomputed on every read from the raw page rows of the user.
Raw rows never carry an author, so building a profile can't recurse back
into page materialization (which itself builds author profiles).
"""

from __future__ import annotations

from src.domain.entities import User, UserProfile
from src.domain.state import compute_statistics

from .models import GetUserInput, ListUsersInput, UserProfileListOutput, UserProfileOutput
from .ports import PageRowsPort, TimePort, UserRepoPort


def build_profile(user: User, *, pages: PageRowsPort, time: TimePort) -> UserProfile:
    """Enrich a user with counters computed from their pages."""
    rows = pages.list_rows_by_user(user.id)
    return UserProfile(user=user, statistics=compute_statistics(rows, time.today()))


def run_get_user(
    inp: GetUserInput,
    *,
    user_repo: UserRepoPort,
    pages: PageRowsPort,
    time: TimePort,
) -> UserProfileOutput:
    user = user_repo.get_by_id(inp.user_id)
    if user is None:
        return UserProfileOutput(success=False, error="User Not Found")
    return UserProfileOutput(profile=build_profile(user, pages=pages, time=time))


def run_list_users(
    inp: ListUsersInput,
    *,
    user_repo: UserRepoPort,
    pages: PageRowsPort,
    time: TimePort,
) -> UserProfileListOutput:
    profiles = [build_profile(u, pages=pages, time=time) for u in user_repo.list_all()]
    return UserProfileListOutput(profiles=profiles)
