from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Literal, Optional, Union

from pr_review.errors import NotFoundError
from pr_review.models import ChangeSet

LATEST = "latest"

ChangeSetId = Union[int, Literal["latest"]]


@dataclass(frozen=True, slots=True)
class ChangeSetSummary:
    """Listing entry for a change-set, without file contents."""

    identifier: int
    title: str
    source_branch: str
    target_branch: str
    description: str = ""
    status: str = "active"
    created_by: str = "Unknown"
    creation_date: Optional[datetime] = None
    repository: str = "Unknown"


class ChangeSetProvider(ABC):
    """Interface for sources of change-sets (pull requests)."""

    @abstractmethod
    def get_change_set(self, identifier: ChangeSetId) -> ChangeSet:
        """Return the change-set, or raise NotFoundError."""
        raise NotImplementedError

    @abstractmethod
    def list_change_sets(self, count: int = 5) -> List[ChangeSetSummary]:
        """Most recent change-sets first."""
        raise NotImplementedError


def summarize(change_set: ChangeSet, repository: str = "Unknown") -> ChangeSetSummary:
    return ChangeSetSummary(
        identifier=change_set.identifier,
        title=change_set.title,
        source_branch=change_set.source_branch,
        target_branch=change_set.target_branch,
        description=change_set.description,
        repository=repository,
    )


class InMemoryChangeSetProvider(ChangeSetProvider):
    """Serves change-sets that were already fetched; "latest" is the highest identifier."""

    def __init__(self, change_sets: Iterable[ChangeSet] = (), repository: str = "Unknown") -> None:
        self.repository = repository
        self._change_sets: Dict[int, ChangeSet] = {cs.identifier: cs for cs in change_sets}

    def add(self, change_set: ChangeSet) -> None:
        self._change_sets[change_set.identifier] = change_set

    def get_change_set(self, identifier: ChangeSetId) -> ChangeSet:
        if identifier == LATEST:
            if not self._change_sets:
                raise NotFoundError("No change-sets available")
            identifier = max(self._change_sets)
        try:
            return self._change_sets[identifier]
        except KeyError:
            raise NotFoundError(f"Change-set {identifier} not found") from None

    def list_change_sets(self, count: int = 5) -> List[ChangeSetSummary]:
        newest = sorted(self._change_sets, reverse=True)[:count]
        return [summarize(self._change_sets[identifier], self.repository) for identifier in newest]
