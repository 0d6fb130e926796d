"""
Users component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import UserProfile


@dataclass(frozen=True)
class GetUserInput:
    user_id: int


@dataclass(frozen=True)
class ListUsersInput:
    pass


@dataclass(frozen=True)
class UserProfileOutput:
    profile: UserProfile | None = None
    success: bool = True
    error: str | None = None


@dataclass(frozen=True)
class UserProfileListOutput:
    profiles: list[UserProfile] = field(default_factory=list)
    success: bool = True
