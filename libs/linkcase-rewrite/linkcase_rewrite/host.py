"""Wiring between the rewrite engine and an editor host.

The host owns the document and the caret; this module only needs the small
surface described by :class:`EditorHost`. Writing the rewritten text back to
the host fires the host's change notification again, so every write happens
while a :class:`ReentrancyGuard` is held and the handler ignores the
notifications it causes itself.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol

from linkcase_core.models import LinkCasingSettings
from linkcase_core.settings import JsonSettingsStore

from linkcase_rewrite.engine import RewritePlan, plan_rewrite

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], object]


class EditorHost(Protocol):
    """Minimal editor surface consumed by the controller."""

    def get_full_text(self) -> str: ...

    def set_full_text(self, text: str) -> None: ...

    def get_caret_offset(self) -> int: ...

    def set_caret_offset(self, offset: int) -> None: ...

    def on_content_changed(self, callback: ChangeCallback) -> None: ...


class SettingsStore(Protocol):
    def load(self) -> LinkCasingSettings: ...

    def save(self, settings: LinkCasingSettings) -> None: ...


class ReentrancyGuard:
    """Marks the span during which the controller is writing to its host."""

    def __init__(self) -> None:
        self._held = False

    @property
    def active(self) -> bool:
        return self._held

    @contextmanager
    def hold(self) -> Iterator[None]:
        if self._held:
            raise RuntimeError("ReentrancyGuard is already held")
        self._held = True
        try:
            yield
        finally:
            self._held = False


class LinkCasingController:
    """Runs one rewrite pass per host content change."""

    def __init__(self, host: EditorHost, store: SettingsStore | None = None):
        self.host = host
        self.store = store if store is not None else JsonSettingsStore()
        self.settings = self.store.load()
        self.guard = ReentrancyGuard()
        self.last_plan: RewritePlan | None = None

    def attach(self) -> "LinkCasingController":
        """Register :meth:`handle_content_changed` with the host."""
        self.host.on_content_changed(self.handle_content_changed)
        return self

    def handle_content_changed(self) -> bool:
        """
        Rewrite the host document if it contains casing commands.

        Returns True when the host was updated. Notifications raised by our own
        write are ignored, so a single edit triggers at most one pass.
        """
        if self.guard.active:
            return False

        original = self.host.get_full_text()
        caret = self.host.get_caret_offset()
        plan = plan_rewrite(original, caret, self.settings)
        self.last_plan = plan
        if not plan.changed:
            return False

        with self.guard.hold():
            self.host.set_full_text(plan.text)
            if plan.caret is not None:
                self.host.set_caret_offset(plan.caret)
        return True

    def set_lowercase_first_word_only(self, enabled: bool) -> None:
        """Settings toggle: update in memory and persist."""
        self.settings = self.settings.model_copy(update={"lowercase_first_word_only": enabled})
        self.store.save(self.settings)
        logger.info(f"lowercaseFirstWordOnly set to {enabled}")


class InMemoryEditor:
    """
    A plain-string editor host.

    Replacing the text keeps the caret at the same offset, clamped to the new
    length, which stands in for an editor's default offset mapping. Every text
    change notifies listeners synchronously, as a real editor would.
    """

    def __init__(self, text: str = "", caret: int | None = None):
        self._text = text
        self._caret = len(text) if caret is None else caret
        self._listeners: list[ChangeCallback] = []
        self.writes = 0

    def get_full_text(self) -> str:
        return self._text

    def set_full_text(self, text: str) -> None:
        self._text = text
        self._caret = min(self._caret, len(text))
        self.writes += 1
        self._notify()

    def get_caret_offset(self) -> int:
        return self._caret

    def set_caret_offset(self, offset: int) -> None:
        self._caret = max(0, min(offset, len(self._text)))

    def on_content_changed(self, callback: ChangeCallback) -> None:
        self._listeners.append(callback)

    def type_text(self, chars: str) -> None:
        """Insert ``chars`` at the caret one character at a time, like typing."""
        for ch in chars:
            self._text = self._text[: self._caret] + ch + self._text[self._caret :]
            self._caret += 1
            self._notify()

    def _notify(self) -> None:
        for cb in list(self._listeners):
            cb()
