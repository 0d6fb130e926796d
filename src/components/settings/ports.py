"""
Settings component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.domain.entities import SiteSettings, User


class SettingsRepoPort(Protocol):
    """Repository interface for settings."""

    def get(self) -> SiteSettings | None:
        """Get current settings, or None if not configured."""
        ...

    def save(self, settings: SiteSettings) -> SiteSettings:
        """Save or update settings (upsert)."""
        ...


class PolicyPort(Protocol):
    def can_edit_website_name(self, user: User | None) -> bool:
        ...


class TimePort(Protocol):
    """Port for time operations."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
