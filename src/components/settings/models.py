"""
Settings component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import SiteSettings, User


@dataclass(frozen=True)
class GetSettingsInput:
    """Input for getting settings."""

    pass


@dataclass(frozen=True)
class GetSettingsOutput:
    """Output from getting settings."""

    settings: SiteSettings


@dataclass(frozen=True)
class SetWebsiteNameInput:
    """Input for renaming the website."""

    actor: User
    website_name: str | None


@dataclass(frozen=True)
class ValidationError:
    """Validation error with actionable message."""

    field: str
    code: str
    message: str


@dataclass(frozen=True)
class SetWebsiteNameOutput:
    """Output from renaming the website."""

    settings: SiteSettings | None = None
    errors: list[ValidationError] = field(default_factory=list)
    success: bool = True
