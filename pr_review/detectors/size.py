from __future__ import annotations

from typing import List, Optional

from pr_review.detectors.base import SourceDetector, count_lines
from pr_review.models import Finding, Severity


class FileSizeDetector(SourceDetector):
    name = "size"

    def __init__(self, max_lines: int = 300) -> None:
        self.max_lines = max_lines

    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        lines = count_lines(content)
        if lines <= self.max_lines:
            return []
        return [
            Finding(
                file=path,
                message=f"File is too large ({lines} lines). Consider splitting it into smaller modules.",
                severity=Severity.MEDIUM,
            )
        ]
