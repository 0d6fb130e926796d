"""
Settings component - Site settings management (website name).
"""

from .component import (
    DEFAULT_WEBSITE_NAME,
    get_default_settings,
    run_get,
    run_set_website_name,
)
from .models import (
    GetSettingsInput,
    GetSettingsOutput,
    SetWebsiteNameInput,
    SetWebsiteNameOutput,
    ValidationError,
)
from .ports import PolicyPort, SettingsRepoPort, TimePort

__all__ = [
    # Component entry points
    "run_get",
    "run_set_website_name",
    # Models
    "GetSettingsInput",
    "GetSettingsOutput",
    "SetWebsiteNameInput",
    "SetWebsiteNameOutput",
    "ValidationError",
    # Ports
    "PolicyPort",
    "SettingsRepoPort",
    "TimePort",
    # Functions
    "get_default_settings",
    # Constants
    "DEFAULT_WEBSITE_NAME",
]
