"""Link Casing Core - casing transforms and settings."""

from linkcase_core.casing import (
    CasingCommand,
    apply_casing,
    to_capital,
    to_lower,
    to_title,
    to_upper,
)
from linkcase_core.models import DEFAULT_SETTINGS, LinkCasingSettings
from linkcase_core.settings import (
    JsonSettingsStore,
    linkcase_home,
    load_settings,
    save_settings,
    settings_path,
)

__all__ = [
    "CasingCommand",
    "apply_casing",
    "to_lower",
    "to_upper",
    "to_title",
    "to_capital",
    # settings
    "DEFAULT_SETTINGS",
    "LinkCasingSettings",
    "JsonSettingsStore",
    "linkcase_home",
    "settings_path",
    "load_settings",
    "save_settings",
]

__version__ = "0.1.0"
