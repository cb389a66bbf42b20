from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath
from typing import Iterable, List, Set

from pr_review.detectors.base import ChangeSetDetector, is_source_file
from pr_review.models import ChangeSet, Finding, Severity

logger = logging.getLogger(__name__)

NO_TEST_FILE_MARKER = "No corresponding test file"

SOURCE_SEGMENT = "src/"
TEST_SEGMENTS = ("tests/", "test/", "__tests__/")
TEST_SUFFIXES = (".test", ".spec")

_TEST_PATH = re.compile(r"(?:^|/)(?:tests?|__tests__)/|\.(?:test|spec)\.[^/]+$")


def is_test_path(path: str) -> bool:
    return bool(_TEST_PATH.search(path))


def candidate_test_paths(path: str) -> List[str]:
    """Plausible locations of the test file for a source file under ``src/``."""
    pure = PurePosixPath(path)
    suffixed = [str(pure.with_name(f"{pure.stem}{suffix}{pure.suffix}")) for suffix in TEST_SUFFIXES]

    candidates: List[str] = []
    for base in [path, *suffixed]:
        for segment in TEST_SEGMENTS:
            candidates.append(base.replace(SOURCE_SEGMENT, segment, 1))
    candidates.extend(suffixed)
    return candidates


class CoverageGapDetector(ChangeSetDetector):
    """Flags changed source files whose test file is not part of the same change-set."""

    name = "test-coverage"

    def detect_change_set(self, change_set: ChangeSet) -> List[Finding]:
        changed: Set[str] = set(change_set.paths)
        findings: List[Finding] = []

        for change in change_set.files:
            if change.new_content is None or not self._needs_test(change.path):
                continue
            if self._has_test(change.path, changed):
                continue
            logger.debug(f"No test found in change-set for {change.path}")
            findings.append(
                Finding(
                    file=change.path,
                    message=f"{NO_TEST_FILE_MARKER} found for {change.path}. Add or update tests for this change.",
                    severity=Severity.HIGH,
                )
            )

        return findings

    @staticmethod
    def _needs_test(path: str) -> bool:
        return SOURCE_SEGMENT in path and is_source_file(path) and not is_test_path(path)

    @staticmethod
    def _has_test(path: str, changed: Iterable[str]) -> bool:
        candidates = set(candidate_test_paths(path))
        return any(other in candidates for other in changed if other != path)
