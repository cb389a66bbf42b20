from __future__ import annotations

from typing import List, Sequence

from pr_review.detectors import NO_TEST_FILE_MARKER
from pr_review.models import BestPracticesVerdict, ChangeSet, Finding, ReviewReport, Severity, Statistics
from pr_review.policy import check_branch_name, check_commit_messages, check_documentation
from pr_review.services.aggregator import AggregateResult


def rank_findings(findings: Sequence[Finding]) -> List[Finding]:
    """Highest severity first; equal severities keep their original order."""
    return sorted(findings, key=lambda finding: finding.severity.weight, reverse=True)


class ReportBuilder:
    """Assembles the final report from aggregated findings and policy checks."""

    def build(self, change_set: ChangeSet, result: AggregateResult) -> ReviewReport:
        suggestions = rank_findings(result.findings)
        best_practices = BestPracticesVerdict(
            commit_messages=check_commit_messages(change_set.commits),
            branch_naming=check_branch_name(change_set.source_branch),
            test_coverage=not any(NO_TEST_FILE_MARKER in finding.message for finding in suggestions),
            documentation_updated=check_documentation(change_set.paths),
        )
        return ReviewReport(
            summary=self._summary(change_set, suggestions, result.statistics),
            statistics=result.statistics,
            best_practices=best_practices,
            suggestions=suggestions,
        )

    @staticmethod
    def _summary(change_set: ChangeSet, suggestions: Sequence[Finding], statistics: Statistics) -> str:
        high = sum(1 for finding in suggestions if finding.severity == Severity.HIGH)
        medium = sum(1 for finding in suggestions if finding.severity == Severity.MEDIUM)
        return (
            f"PR #{change_set.identifier}: {change_set.title} - "
            f"{high} high and {medium} medium priority issues found. "
            f"{statistics.files_changed} files changed with {statistics.total_changes} total changes "
            f"(+{statistics.additions}/-{statistics.deletions})."
        )
