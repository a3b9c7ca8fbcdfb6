from workbench.changes.crud import get_changes
from workbench.changes.diff import (
    DiffSegment,
    aligned_diff,
    approval_transition_label,
    compact_diff,
    segments_text,
)
from workbench.changes.models import (
    TranslationChange,
    TranslationChangePublic,
    TranslationChangesPublic,
)
from workbench.changes.recorder import record_change

__all__ = [
    # Models
    "TranslationChange",
    "TranslationChangePublic",
    "TranslationChangesPublic",
    # CRUD
    "get_changes",
    # Diffing
    "DiffSegment",
    "aligned_diff",
    "approval_transition_label",
    "compact_diff",
    "segments_text",
    # Recording
    "record_change",
]
