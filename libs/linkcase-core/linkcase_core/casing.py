"""Casing transforms applied to wiki-link aliases.

Four commands are recognised after a backslash in link markup:

  \\l  lower     "Link Name"  -> "link name"
  \\u  upper     "Link Name"  -> "LINK NAME"
  \\t  title     "link NAME"  -> "Link Name"
  \\c  capital   "link NAME"  -> "Link name"

Every transform is total (empty string included), idempotent, and works on
arbitrary Unicode note names rather than ASCII only.
"""
from __future__ import annotations

import unicodedata
from enum import Enum

APOSTROPHES = frozenset("'’")


class CasingCommand(Enum):
    """Casing command letters accepted by the link grammar."""

    LOWER = "l"
    UPPER = "u"
    TITLE = "t"
    CAPITAL = "c"


def _is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def _is_word_char(ch: str) -> bool:
    """Letters, combining marks, digits and underscore continue a word."""
    cat = unicodedata.category(ch)
    return cat[0] in ("L", "M", "N") or ch == "_"


def _starts_word(text: str, i: int) -> bool:
    """True if the letter at ``text[i]`` opens a new word."""
    if i == 0:
        return True
    prev = text[i - 1]
    if _is_word_char(prev):
        return False
    # an apostrophe between two letters (don't, l’homme) stays inside the word
    if prev in APOSTROPHES and i >= 2 and _is_word_char(text[i - 2]):
        return False
    return True


def to_upper(text: str) -> str:
    return text.upper()


def to_capital(text: str) -> str:
    lower = text.lower()
    if not lower:
        return lower
    return lower[0].upper() + lower[1:]


def to_title(text: str) -> str:
    """
    Lowercase everything, then uppercase the first letter of each word.

    Lowercasing first makes "ALL CAPS TITLE" and "all caps title" produce the
    same result.
    """
    lower = text.lower()
    out: list[str] = []
    for i, ch in enumerate(lower):
        if _is_letter(ch) and _starts_word(lower, i):
            out.append(ch.upper())
        else:
            out.append(ch)
    return "".join(out)


def _leading_word_end(text: str) -> int:
    """Index just past the leading run of letters, marks and apostrophes."""
    end = 0
    for ch in text:
        if ch in APOSTROPHES or unicodedata.category(ch)[0] in ("L", "M"):
            end += 1
        else:
            break
    return end


def to_lower(text: str, first_word_only: bool = False) -> str:
    """
    Lowercase ``text``.

    With ``first_word_only`` only the leading word is lowercased and the rest
    is returned untouched, which keeps proper names in sentence-cased note
    titles ("Trip to Paris" -> "trip to Paris").
    """
    if not first_word_only:
        return text.lower()
    end = _leading_word_end(text)
    return text[:end].lower() + text[end:]


def apply_casing(
    command: CasingCommand | str, text: str, *, first_word_only: bool = False
) -> str:
    """Apply the transform bound to ``command`` (enum member or its letter)."""
    cmd = CasingCommand(command)
    if cmd is CasingCommand.LOWER:
        return to_lower(text, first_word_only=first_word_only)
    if cmd is CasingCommand.UPPER:
        return to_upper(text)
    if cmd is CasingCommand.TITLE:
        return to_title(text)
    return to_capital(text)
