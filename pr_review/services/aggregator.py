from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from pr_review.detectors import (
    ChangeSetDetector,
    Detector,
    default_change_set_detectors,
    default_detectors,
)
from pr_review.detectors.base import count_lines
from pr_review.errors import AnalysisError
from pr_review.models import ChangeSet, FileChange, Finding, Statistics

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AggregateResult:
    """Findings in encounter order plus change statistics for one change-set."""

    findings: List[Finding] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)


class Aggregator:
    """Runs every detector over every changed file and merges the results."""

    def __init__(
        self,
        detectors: Optional[Sequence[Detector]] = None,
        change_set_detectors: Optional[Sequence[ChangeSetDetector]] = None,
        *,
        max_files: Optional[int] = None,
    ) -> None:
        self._detectors = list(detectors) if detectors is not None else default_detectors()
        self._change_set_detectors = (
            list(change_set_detectors) if change_set_detectors is not None else default_change_set_detectors()
        )
        self._max_files = max_files

    def aggregate(self, change_set: ChangeSet) -> AggregateResult:
        findings: List[Finding] = []
        seen_messages: Set[str] = set()
        additions = 0
        deletions = 0

        files = list(change_set.files)
        if self._max_files is not None and len(files) > self._max_files:
            logger.info(f"Analysing the first {self._max_files} of {len(files)} files in change-set {change_set.identifier}")
            files = files[: self._max_files]

        for change in files:
            content = change.new_text
            if content is None:
                continue

            old_content = change.old_text
            new_lines = count_lines(content)
            additions += new_lines
            if old_content is not None:
                deletions += max(0, count_lines(old_content) - new_lines)

            try:
                file_findings = self._analyze_file(change, content, old_content)
            except AnalysisError as exc:
                logger.warning(f"Skipping findings for {change.path}: {exc}")
                continue

            self._merge(findings, seen_messages, file_findings)

        for detector in self._change_set_detectors:
            self._merge(findings, seen_messages, detector.detect_change_set(change_set))

        statistics = Statistics(
            files_changed=len(change_set.files),
            additions=additions,
            deletions=deletions,
        )
        logger.debug(
            f"Change-set {change_set.identifier}: {len(findings)} findings, "
            f"+{statistics.additions}/-{statistics.deletions}"
        )
        return AggregateResult(findings=findings, statistics=statistics)

    def _analyze_file(self, change: FileChange, content: str, old_content: Optional[str]) -> List[Finding]:
        findings: List[Finding] = []
        for detector in self._detectors:
            try:
                findings.extend(detector.detect(content, change.path, old_content))
            except Exception as exc:
                raise AnalysisError(change.path, f"{detector.name} detector failed: {exc}") from exc
        return findings

    @staticmethod
    def _merge(findings: List[Finding], seen_messages: Set[str], new_findings: Sequence[Finding]) -> None:
        # Change-set-wide findings are kept once per message, first seen wins.
        for finding in new_findings:
            if finding.is_change_set_wide:
                if finding.message in seen_messages:
                    continue
                seen_messages.add(finding.message)
            findings.append(finding)
