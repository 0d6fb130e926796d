from typing import Any

from fastapi import APIRouter, Depends, Response

from src.api.deps import (
    Settings,
    get_clock,
    get_current_user,
    get_policy,
    get_settings,
    get_site_settings_repo,
)
from src.api.schemas import WebsiteNameRequest, WebsiteNameResponse
from src.components.settings import (
    GetSettingsInput,
    SetWebsiteNameInput,
    run_get,
    run_set_website_name,
)
from src.domain.entities import User
from src.domain.errors import AuthorizationError, ValidationError

router = APIRouter()


@router.get("", response_model=WebsiteNameResponse)
def get_website_name(
    repo: Any = Depends(get_site_settings_repo),
    settings: Settings = Depends(get_settings),
) -> WebsiteNameResponse:
    result = run_get(GetSettingsInput(), repo=repo, default_website_name=settings.website_name)
    return WebsiteNameResponse(website_name=result.settings.website_name)


@router.put("")
def set_website_name(
    req: WebsiteNameRequest,
    current_user: User = Depends(get_current_user),
    repo: Any = Depends(get_site_settings_repo),
    policy: Any = Depends(get_policy),
    clock: Any = Depends(get_clock),
) -> Response:
    """Rename the website (admin only)."""
    inp = SetWebsiteNameInput(actor=current_user, website_name=req.website_name)
    result = run_set_website_name(inp, repo=repo, policy=policy, time=clock)

    if not result.success:
        messages = [e.message for e in result.errors]
        if any(e.code == "unauthorized" for e in result.errors):
            raise AuthorizationError(messages)
        raise ValidationError(messages)

    return Response(status_code=200)
