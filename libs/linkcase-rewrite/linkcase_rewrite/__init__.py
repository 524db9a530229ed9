"""Link Casing Rewrite - casing-command engine, editor wiring and vault rewrite."""

from linkcase_rewrite.engine import (
    FORM_ORDER,
    PatternForm,
    PatternOccurrence,
    RewritePlan,
    find_enclosing_occurrence,
    find_occurrences,
    plan_rewrite,
    render_occurrence,
    rewrite_text,
    rewrite_text_counted,
)
from linkcase_rewrite.host import (
    EditorHost,
    InMemoryEditor,
    LinkCasingController,
    ReentrancyGuard,
    SettingsStore,
)
from linkcase_rewrite.vault import FileChange, VaultRewriteReport, rewrite_file, rewrite_vault

__all__ = [
    "FORM_ORDER",
    "PatternForm",
    "PatternOccurrence",
    "RewritePlan",
    "find_occurrences",
    "find_enclosing_occurrence",
    "render_occurrence",
    "rewrite_text",
    "rewrite_text_counted",
    "plan_rewrite",
    # host wiring
    "EditorHost",
    "SettingsStore",
    "ReentrancyGuard",
    "LinkCasingController",
    "InMemoryEditor",
    # vault
    "FileChange",
    "VaultRewriteReport",
    "rewrite_file",
    "rewrite_vault",
]

__version__ = "0.1.0"
