from __future__ import annotations

from pathlib import Path

import pytest

from linkcase_core import LinkCasingSettings


class MemoryStore:
    """Settings store kept in memory; records every save."""

    def __init__(self, settings: LinkCasingSettings | None = None):
        self.settings = settings or LinkCasingSettings()
        self.saved: list[LinkCasingSettings] = []

    def load(self) -> LinkCasingSettings:
        return self.settings

    def save(self, settings: LinkCasingSettings) -> None:
        self.settings = settings
        self.saved.append(settings)


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def linkcase_home(tmp_path: Path, monkeypatch) -> Path:
    """Isolated LINKCASE_HOME so tests never touch the real settings file."""
    home = tmp_path / "LINKCASE_HOME"
    home.mkdir()
    monkeypatch.setenv("LINKCASE_HOME", str(home))
    return home
