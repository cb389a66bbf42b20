from __future__ import annotations

from pr_review.services.aggregator import AggregateResult, Aggregator
from pr_review.services.report_builder import ReportBuilder, rank_findings
from pr_review.services.review_service import ReviewService, ReviewServiceConfig

__all__ = [
    "AggregateResult",
    "Aggregator",
    "ReportBuilder",
    "ReviewService",
    "ReviewServiceConfig",
    "rank_findings",
]
