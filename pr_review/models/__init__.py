from __future__ import annotations

from pr_review.models.change import ChangeKind, ChangeSet, Commit, FileChange
from pr_review.models.report import (
    CHANGE_SET_WIDE,
    BestPracticesVerdict,
    Finding,
    ReviewReport,
    Severity,
    Statistics,
)

__all__ = [
    "CHANGE_SET_WIDE",
    "BestPracticesVerdict",
    "ChangeKind",
    "ChangeSet",
    "Commit",
    "FileChange",
    "Finding",
    "ReviewReport",
    "Severity",
    "Statistics",
]
