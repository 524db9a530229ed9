"""Casing-command rewriting for Obsidian-style wiki links.

Four markup forms are recognised, checked in this order:

  1) postfix alias:  [[target|alias]]\\u   -> [[target|ALIAS]]
  2) postfix link:   [[Target]]\\l         -> [[Target|target]]
  3) inline alias:   [[target|ALIAS\\l]]   -> [[target|alias]]
  4) inline link:    [[Target\\l]]         -> [[Target|target]]

Each form is substituted over the whole text before the next one scans the
result. Postfix forms go first so a trailing command is consumed before any
in-link command is considered.

Link forms collapse to a plain ``[[target]]`` when the transform leaves the
target unchanged; alias forms always keep their alias.

Anything that does not match the grammar is left alone. There is no error
path.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from linkcase_core.casing import CasingCommand, apply_casing
from linkcase_core.models import DEFAULT_SETTINGS, LinkCasingSettings

logger = logging.getLogger(__name__)


class PatternForm(Enum):
    """Markup forms in precedence order."""

    POSTFIX_ALIAS = "postfix_alias"
    POSTFIX_LINK = "postfix_link"
    INLINE_ALIAS = "inline_alias"
    INLINE_LINK = "inline_link"


# The character-class exclusions differ per form and are load-bearing:
# a postfix alias may contain "\" (the command sits outside the brackets),
# an inline alias may not.
_PATTERNS: dict[PatternForm, re.Pattern[str]] = {
    PatternForm.POSTFIX_ALIAS: re.compile(r"\[\[([^\]|]+)\|([^\]]+)\]\]\\([lutc])"),
    PatternForm.POSTFIX_LINK: re.compile(r"\[\[([^\]|\\]+)\]\]\\([lutc])"),
    PatternForm.INLINE_ALIAS: re.compile(r"\[\[([^\]|]+)\|([^\]\\]+)\\([lutc])\]\]"),
    PatternForm.INLINE_LINK: re.compile(r"\[\[([^\]|\\]+)\\([lutc])\]\]"),
}

FORM_ORDER: tuple[PatternForm, ...] = tuple(PatternForm)
_ALIAS_FORMS = frozenset({PatternForm.POSTFIX_ALIAS, PatternForm.INLINE_ALIAS})


@dataclass(frozen=True)
class PatternOccurrence:
    """One located match of a markup form; ``end`` is exclusive."""

    form: PatternForm
    start: int
    end: int
    link_target: str
    alias_text: str | None
    command: CasingCommand

    @property
    def has_alias(self) -> bool:
        return self.alias_text is not None

    def contains(self, offset: int) -> bool:
        """Both ends count: a caret just before ``[[`` or just after the command is inside."""
        return self.start <= offset <= self.end


@dataclass
class RewritePlan:
    """Result of one caret-aware pass over a document."""

    text: str
    caret: int | None
    changed: bool
    occurrence: PatternOccurrence | None = None


def _occurrence_from_match(form: PatternForm, m: re.Match[str]) -> PatternOccurrence:
    if form in _ALIAS_FORMS:
        target, alias, cmd = m.group(1), m.group(2), m.group(3)
    else:
        target, alias, cmd = m.group(1), None, m.group(2)
    return PatternOccurrence(
        form=form,
        start=m.start(),
        end=m.end(),
        link_target=target,
        alias_text=alias,
        command=CasingCommand(cmd),
    )


def find_occurrences(text: str, form: PatternForm) -> list[PatternOccurrence]:
    """All non-overlapping occurrences of ``form`` in ``text``, left to right."""
    return [_occurrence_from_match(form, m) for m in _PATTERNS[form].finditer(text)]


def render_occurrence(
    occurrence: PatternOccurrence, settings: LinkCasingSettings | None = None
) -> str:
    """Replacement markup for a single occurrence."""
    settings = settings or DEFAULT_SETTINGS
    first_word_only = settings.lowercase_first_word_only

    if occurrence.alias_text is not None:
        alias = apply_casing(
            occurrence.command, occurrence.alias_text, first_word_only=first_word_only
        )
        return f"[[{occurrence.link_target}|{alias}]]"

    target = occurrence.link_target
    alias = apply_casing(occurrence.command, target, first_word_only=first_word_only)
    # No-op transform: drop the command and keep a plain link
    if alias == target:
        return f"[[{target}]]"
    return f"[[{target}|{alias}]]"


def rewrite_text_counted(
    text: str, settings: LinkCasingSettings | None = None
) -> tuple[str, int]:
    """Apply all four forms in precedence order; returns (new_text, replacements)."""
    settings = settings or DEFAULT_SETTINGS
    total = 0
    result = text
    for form in FORM_ORDER:

        def _replace(m: re.Match[str], form: PatternForm = form) -> str:
            return render_occurrence(_occurrence_from_match(form, m), settings)

        result, n = _PATTERNS[form].subn(_replace, result)
        total += n
    return result, total


def rewrite_text(text: str, settings: LinkCasingSettings | None = None) -> str:
    """Rewrite every casing command in ``text`` in a single global pass."""
    return rewrite_text_counted(text, settings)[0]


def find_enclosing_occurrence(text: str, caret: int) -> PatternOccurrence | None:
    """
    First occurrence whose span contains ``caret``.

    Forms are tried in precedence order and, within a form, left to right.
    When the caret sits on a boundary shared by two adjacent occurrences the
    earlier form wins, and within one form the leftmost occurrence wins.
    """
    for form in FORM_ORDER:
        for m in _PATTERNS[form].finditer(text):
            if m.start() <= caret <= m.end():
                return _occurrence_from_match(form, m)
            if m.start() > caret:
                break
    return None


def plan_rewrite(
    text: str, caret: int, settings: LinkCasingSettings | None = None
) -> RewritePlan:
    """
    Rewrite ``text`` and work out where the caret should go.

    If the caret is inside an occurrence it lands right after the closing
    ``]]`` of that occurrence's replacement. The prefix before the occurrence
    is rewritten on its own to account for earlier replacements shifting
    offsets. Otherwise ``caret`` is None and the host keeps its own mapping.
    An unchanged document never moves the caret.
    """
    settings = settings or DEFAULT_SETTINGS

    occurrence = find_enclosing_occurrence(text, caret)
    new_caret: int | None = None
    if occurrence is not None:
        prefix = rewrite_text(text[: occurrence.start], settings)
        new_caret = len(prefix) + len(render_occurrence(occurrence, settings))

    output, replaced = rewrite_text_counted(text, settings)
    changed = output != text
    if not changed:
        return RewritePlan(text=text, caret=None, changed=False)

    logger.debug(
        f"Rewrote {replaced} occurrence(s); caret {caret} -> "
        f"{new_caret if new_caret is not None else 'host default'}"
    )
    return RewritePlan(text=output, caret=new_caret, changed=True, occurrence=occurrence)
