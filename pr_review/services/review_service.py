from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rich.console import Console  # type: ignore[import]
from rich.table import Table  # type: ignore[import]

from pr_review.changeset_ingest import (
    LATEST,
    ChangeSetId,
    ChangeSetProvider,
    ChangeSetSummary,
    GitChangeSetProvider,
)
from pr_review.detectors import default_detectors
from pr_review.errors import AggregateFailure, ReviewError
from pr_review.models import ReviewReport, Severity
from pr_review.services.aggregator import Aggregator
from pr_review.services.report_builder import ReportBuilder

logger = logging.getLogger(__name__)

_SEVERITY_STYLES = {
    Severity.HIGH: "bold red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
}


@dataclass(slots=True)
class ReviewServiceConfig:
    repo_path: Path
    target_ref: str = "main"
    max_files: Optional[int] = None
    large_file_lines: int = 300


class ReviewService:
    """Coordinates fetching a change-set, running the detectors and building the report."""

    def __init__(
        self,
        provider: ChangeSetProvider,
        aggregator: Optional[Aggregator] = None,
        builder: Optional[ReportBuilder] = None,
    ) -> None:
        self._provider = provider
        self._aggregator = aggregator or Aggregator()
        self._builder = builder or ReportBuilder()

    def review(self, identifier: ChangeSetId = LATEST) -> ReviewReport:
        """
        Review a single change-set.

        Args:
            identifier: Pull request number, or "latest" for the most recent one.

        Returns:
            A complete ReviewReport.

        Raises:
            NotFoundError / ConfigurationError: from the provider, unchanged.
            AggregateFailure: if aggregation or report building fails.
        """
        change_set = self._provider.get_change_set(identifier)
        logger.info(f"Reviewing change-set {change_set.identifier} ({len(change_set.files)} files)")

        try:
            result = self._aggregator.aggregate(change_set)
            report = self._builder.build(change_set, result)
        except ReviewError:
            raise
        except Exception as exc:
            raise AggregateFailure(f"Review of change-set {change_set.identifier} failed: {exc}") from exc

        logger.info(
            f"Change-set {change_set.identifier}: {report.high_count} high, "
            f"{report.medium_count} medium, {report.low_count} low findings"
        )
        return report

    @classmethod
    def from_config(cls, config: ReviewServiceConfig) -> ReviewService:
        """Service reading pull requests from a local clone, with the detectors tuned by ``config``."""
        provider = GitChangeSetProvider(config.repo_path, target_ref=config.target_ref)
        aggregator = Aggregator(
            default_detectors(large_file_lines=config.large_file_lines),
            max_files=config.max_files,
        )
        return cls(provider, aggregator)

    def latest_change_sets(self, count: int = 5) -> List[ChangeSetSummary]:
        return self._provider.list_change_sets(count)

    @staticmethod
    def render_console_summary(report: ReviewReport, *, console: Optional[Console] = None) -> None:
        console = console or Console()
        console.rule(f"[bold cyan]{report.summary}[/bold cyan]")

        stats = Table("Files changed", "Additions", "Deletions", "Total changes", show_header=True, header_style="bold magenta")
        stats.add_row(
            str(report.statistics.files_changed),
            str(report.statistics.additions),
            str(report.statistics.deletions),
            str(report.statistics.total_changes),
        )
        console.print(stats)

        practices = report.best_practices
        for label, passed in (
            ("Commit messages", practices.commit_messages),
            ("Branch naming", practices.branch_naming),
            ("Test coverage", practices.test_coverage),
            ("Documentation updated", practices.documentation_updated),
        ):
            mark = "[green]✓[/green]" if passed else "[red]✗[/red]"
            console.print(f"{mark} {label}")

        if not report.suggestions:
            console.print("[green]No actionable suggestions.[/green]")
            return

        table = Table("Severity", "File", "Line", "Message", show_header=True, header_style="bold magenta")
        for finding in report.suggestions:
            style = _SEVERITY_STYLES[finding.severity]
            table.add_row(
                f"[{style}]{finding.severity.value}[/{style}]",
                finding.file,
                "" if finding.line is None else str(finding.line),
                finding.message,
            )
        console.print(table)
