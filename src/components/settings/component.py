"""
Settings component - site settings management.

The website name is a single process-wide value stored in a one-row table.
Reads fall back to the configured default when the row doesn't exist yet.
"""

from __future__ import annotations

import logging

from src.domain.entities import SiteSettings

from .models import (
    GetSettingsInput,
    GetSettingsOutput,
    SetWebsiteNameInput,
    SetWebsiteNameOutput,
    ValidationError,
)
from .ports import PolicyPort, SettingsRepoPort, TimePort

logger = logging.getLogger(__name__)

DEFAULT_WEBSITE_NAME = "CMSmall"


def get_default_settings(website_name: str = DEFAULT_WEBSITE_NAME) -> SiteSettings:
    """Fallback settings used when the DB row doesn't exist."""
    return SiteSettings(website_name=website_name)


def _validate_website_name(website_name: str | None) -> list[ValidationError]:
    if website_name is None:
        return [
            ValidationError(
                field="website_name",
                code="required",
                message="It is not allowed to edit the website name without information!",
            )
        ]
    if not website_name.strip():
        return [
            ValidationError(
                field="website_name",
                code="empty",
                message="The name of website can not be empty!",
            )
        ]
    return []


def run_get(
    inp: GetSettingsInput,
    *,
    repo: SettingsRepoPort,
    default_website_name: str = DEFAULT_WEBSITE_NAME,
) -> GetSettingsOutput:
    settings = repo.get()
    if settings is None:
        settings = get_default_settings(default_website_name)
    return GetSettingsOutput(settings=settings)


def run_set_website_name(
    inp: SetWebsiteNameInput,
    *,
    repo: SettingsRepoPort,
    policy: PolicyPort,
    time: TimePort,
) -> SetWebsiteNameOutput:
    """Rename the website. Admins only; authorization is checked before validation."""
    if not policy.can_edit_website_name(inp.actor):
        return SetWebsiteNameOutput(
            errors=[
                ValidationError(
                    field="website_name",
                    code="unauthorized",
                    message=(
                        "The website name can not be edited if you are not an administrator!"
                    ),
                )
            ],
            success=False,
        )

    errors = _validate_website_name(inp.website_name)
    if errors:
        return SetWebsiteNameOutput(errors=errors, success=False)

    assert inp.website_name is not None
    settings = repo.save(
        SiteSettings(website_name=inp.website_name.strip(), updated_at=time.now_utc())
    )
    logger.info("Website name changed to %r by user %s", settings.website_name, inp.actor.id)
    return SetWebsiteNameOutput(settings=settings)
