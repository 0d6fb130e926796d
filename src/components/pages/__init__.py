"""
Pages component - authoring, listing and soft deletion of pages.
"""

from .component import run_create, run_delete, run_get, run_list, run_update
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

__all__ = [
    # Entry points
    "run_create",
    "run_delete",
    "run_get",
    "run_list",
    "run_update",
    # Input models
    "ContentBlockInput",
    "CreatePageInput",
    "DeletePageInput",
    "GetPageInput",
    "ListPagesInput",
    "PageDraftInput",
    # Output models
    "PageError",
    "PageListOutput",
    "PageOutput",
    # Ports
    "ImageRepoPort",
    "PageRepoPort",
    "PolicyPort",
    "TimePort",
    "UserRepoPort",
]
