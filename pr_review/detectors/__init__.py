from __future__ import annotations

from typing import List

from pr_review.detectors.base import ChangeSetDetector, Detector, SourceDetector
from pr_review.detectors.complexity import ComplexityDetector
from pr_review.detectors.components import ComponentDetector
from pr_review.detectors.coverage import NO_TEST_FILE_MARKER, CoverageGapDetector
from pr_review.detectors.diff import MovedCodeDetector, find_moved_blocks
from pr_review.detectors.performance import PerformanceDetector
from pr_review.detectors.security import SecurityDetector
from pr_review.detectors.size import FileSizeDetector
from pr_review.detectors.style import StyleDetector


def default_detectors(*, large_file_lines: int = 300) -> List[Detector]:
    """Per-file detectors in the order their findings are reported."""
    return [
        FileSizeDetector(max_lines=large_file_lines),
        ComplexityDetector(),
        SecurityDetector(),
        PerformanceDetector(),
        StyleDetector(),
        ComponentDetector(),
        MovedCodeDetector(),
    ]


def default_change_set_detectors() -> List[ChangeSetDetector]:
    return [CoverageGapDetector()]


__all__ = [
    "NO_TEST_FILE_MARKER",
    "ChangeSetDetector",
    "ComplexityDetector",
    "ComponentDetector",
    "Detector",
    "FileSizeDetector",
    "MovedCodeDetector",
    "PerformanceDetector",
    "SecurityDetector",
    "SourceDetector",
    "StyleDetector",
    "CoverageGapDetector",
    "default_change_set_detectors",
    "default_detectors",
    "find_moved_blocks",
]
