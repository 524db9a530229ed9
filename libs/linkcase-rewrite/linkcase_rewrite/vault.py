"""Apply casing commands across a Markdown vault.

Useful for notes written outside a live editor (imports, synced files) that
still contain ``\\l``/``\\u``/``\\t``/``\\c`` link commands.

  • Only Markdown files (*.md) are scanned.
  • YAML front-matter is preserved byte-for-byte; only the body is rewritten.
  • Writes are atomic (temp file + replace).
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from linkcase_core.models import LinkCasingSettings

from linkcase_rewrite.engine import rewrite_text_counted

logger = logging.getLogger(__name__)

_FM_RE = re.compile(r"^---\s*\r?\n(.*?)\r?\n---\s*\r?\n?", re.DOTALL)


@dataclass
class FileChange:
    relpath: str
    replacements: int


@dataclass
class VaultRewriteReport:
    files_changed: int = 0
    total_replacements: int = 0
    changes: list[FileChange] = field(default_factory=list)


def _split_front_matter(content: str) -> tuple[str, str]:
    m = _FM_RE.match(content)
    if not m:
        return "", content
    return content[: m.end()], content[m.end() :]


def rewrite_file(
    path: Path, settings: LinkCasingSettings | None = None, *, dry_run: bool = False
) -> int:
    """Rewrite one Markdown file in place; returns the number of replacements."""
    # newline="" keeps CRLF files CRLF
    with open(path, encoding="utf-8", newline="") as f:
        content = f.read()
    header, body = _split_front_matter(content)
    new_body, n = rewrite_text_counted(body, settings)
    if new_body == body:
        return 0
    if dry_run:
        return n

    tmp = path.parent / f".{path.name}.lctmp"
    with open(tmp, "w", encoding="utf-8", newline="") as f:
        f.write(f"{header}{new_body}")
    tmp.replace(path)
    return n


def rewrite_vault(
    vault_path: Path,
    settings: LinkCasingSettings | None = None,
    *,
    dry_run: bool = False,
    exclude_files: Iterable[Path] | None = None,
) -> VaultRewriteReport:
    """
    Rewrite casing commands in every Markdown file under ``vault_path``.

    With ``dry_run`` nothing is written but the report lists what would change.
    """
    vault_path = vault_path.resolve()
    exclude_abs = {p.resolve() for p in (exclude_files or [])}
    report = VaultRewriteReport()

    for md_file in sorted(vault_path.rglob("*.md")):
        if md_file.resolve() in exclude_abs:
            continue
        rel = md_file.relative_to(vault_path).as_posix()
        try:
            n = rewrite_file(md_file, settings, dry_run=dry_run)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping {rel}: {e}")
            continue
        if n > 0:
            logger.info(f"{'Would rewrite' if dry_run else 'Rewrote'} {n} link(s) in {rel}")
            report.files_changed += 1
            report.total_replacements += n
            report.changes.append(FileChange(relpath=rel, replacements=n))

    return report
