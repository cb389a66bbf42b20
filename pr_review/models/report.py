from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# File value for findings that apply to the whole change-set rather than one file.
CHANGE_SET_WIDE = "(change-set)"


class Severity(str, Enum):
    """Severity level for review findings."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return _WEIGHTS[self]


_WEIGHTS = {Severity.HIGH: 3, Severity.MEDIUM: 2, Severity.LOW: 1}


@dataclass(frozen=True, slots=True)
class Finding:
    """A single review suggestion, targeted at a file or at the whole change-set."""

    file: str
    message: str
    severity: Severity
    line: Optional[int] = None

    @property
    def is_change_set_wide(self) -> bool:
        return self.file == CHANGE_SET_WIDE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"file": self.file}
        if self.line is not None:
            data["line"] = self.line
        data["message"] = self.message
        data["severity"] = self.severity.value
        return data


@dataclass(frozen=True, slots=True)
class Statistics:
    files_changed: int = 0
    additions: int = 0
    deletions: int = 0

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions

    def to_dict(self) -> Dict[str, int]:
        return {
            "filesChanged": self.files_changed,
            "additions": self.additions,
            "deletions": self.deletions,
            "totalChanges": self.total_changes,
        }


@dataclass(frozen=True, slots=True)
class BestPracticesVerdict:
    commit_messages: bool
    branch_naming: bool
    test_coverage: bool
    documentation_updated: bool

    def to_dict(self) -> Dict[str, bool]:
        return {
            "commitMessages": self.commit_messages,
            "branchNaming": self.branch_naming,
            "testCoverage": self.test_coverage,
            "documentationUpdated": self.documentation_updated,
        }


@dataclass(slots=True)
class ReviewReport:
    """Review output for a single change-set."""

    summary: str
    statistics: Statistics
    best_practices: BestPracticesVerdict
    suggestions: List[Finding] = field(default_factory=list)

    @property
    def high_count(self) -> int:
        return sum(1 for f in self.suggestions if f.severity == Severity.HIGH)

    @property
    def medium_count(self) -> int:
        return sum(1 for f in self.suggestions if f.severity == Severity.MEDIUM)

    @property
    def low_count(self) -> int:
        return sum(1 for f in self.suggestions if f.severity == Severity.LOW)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form consumed by the HTTP layer and UI."""
        return {
            "summary": self.summary,
            "suggestions": [finding.to_dict() for finding in self.suggestions],
            "statistics": self.statistics.to_dict(),
            "bestPractices": self.best_practices.to_dict(),
        }
