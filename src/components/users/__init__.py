"""
Users component - user profiles enriched with page statistics.
"""

from .component import build_profile, run_get_user, run_list_users
from .models import GetUserInput, ListUsersInput, UserProfileListOutput, UserProfileOutput
from .ports import PageRowsPort, TimePort, UserRepoPort

__all__ = [
    # Entry points
    "build_profile",
    "run_get_user",
    "run_list_users",
    # Models
    "GetUserInput",
    "ListUsersInput",
    "UserProfileListOutput",
    "UserProfileOutput",
    # Ports
    "PageRowsPort",
    "TimePort",
    "UserRepoPort",
]
