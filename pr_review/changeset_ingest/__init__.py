from __future__ import annotations

from pr_review.changeset_ingest.git_repository import GitChangeSetProvider
from pr_review.changeset_ingest.provider import (
    LATEST,
    ChangeSetId,
    ChangeSetProvider,
    ChangeSetSummary,
    InMemoryChangeSetProvider,
)

__all__ = [
    "LATEST",
    "ChangeSetId",
    "ChangeSetProvider",
    "ChangeSetSummary",
    "GitChangeSetProvider",
    "InMemoryChangeSetProvider",
]
