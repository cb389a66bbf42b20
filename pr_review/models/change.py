from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ChangeKind(str, Enum):
    """Kind of change applied to a file in a change-set."""
    ADDED = "added"
    EDITED = "edited"
    DELETED = "deleted"
    RENAMED = "renamed"


def _decode(data: bytes | None) -> Optional[str]:
    if data is None:
        return None
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class FileChange:
    """Represents a single file in a change-set, with its contents before and after."""

    path: str
    kind: ChangeKind
    new_content: Optional[bytes] = None
    old_content: Optional[bytes] = None

    @property
    def new_text(self) -> Optional[str]:
        return _decode(self.new_content)

    @property
    def old_text(self) -> Optional[str]:
        return _decode(self.old_content)


@dataclass(frozen=True, slots=True)
class Commit:
    message: str


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """A pull request: branches, changed files and commits, fixed for one review run."""

    identifier: int
    title: str
    source_branch: str
    target_branch: str
    files: Tuple[FileChange, ...] = field(default_factory=tuple)
    commits: Tuple[Commit, ...] = field(default_factory=tuple)
    description: str = ""

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(change.path for change in self.files)
