"""Per-user settings persistence.

Settings live in a single JSON object under the link-casing home directory so
that every host (CLI, interactive editor) sees the same toggle.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from linkcase_core.models import LinkCasingSettings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "data.json"


def linkcase_home() -> Path:
    """Return per-user home (override with LINKCASE_HOME)."""
    env = os.environ.get("LINKCASE_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return Path.home() / ".linkcase"


def settings_path() -> Path:
    """Path to settings JSON."""
    return linkcase_home() / SETTINGS_FILENAME


def load_settings(path: Path | None = None) -> LinkCasingSettings:
    """
    Load settings, falling back to defaults.

    A missing file is the normal first-run case. A corrupt file is logged and
    ignored; the next save overwrites it.
    """
    path = path or settings_path()
    if not path.exists():
        return LinkCasingSettings()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return LinkCasingSettings(**data)
    except (ValueError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable settings at {path}: {e}")
        return LinkCasingSettings()


def save_settings(settings: LinkCasingSettings, path: Path | None = None) -> None:
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.lctmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(by_alias=True), f, indent=2)
    tmp.replace(path)


class JsonSettingsStore:
    """Settings store backed by a JSON file (defaults to ``settings_path()``)."""

    def __init__(self, path: Path | None = None):
        self._path = path

    @property
    def path(self) -> Path:
        # Resolved lazily so LINKCASE_HOME changes (tests, CLI env) are honoured
        return self._path or settings_path()

    def load(self) -> LinkCasingSettings:
        return load_settings(self.path)

    def save(self, settings: LinkCasingSettings) -> None:
        save_settings(settings, self.path)
