from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from git import Commit as GitCommit, Diff, Repo  # type: ignore[import]
from git.exc import GitCommandError  # type: ignore[import]

from pr_review.changeset_ingest.provider import (
    LATEST,
    ChangeSetId,
    ChangeSetProvider,
    ChangeSetSummary,
)
from pr_review.errors import ConfigurationError, NotFoundError
from pr_review.models import ChangeKind, ChangeSet, Commit, FileChange

logger = logging.getLogger(__name__)

_MERGE_MESSAGE = re.compile(r"^Merge pull request #(\d+) from (\S+)")


@dataclass(slots=True)
class _PullRequestMerge:
    identifier: int
    source_branch: str
    merge: GitCommit


class GitChangeSetProvider(ChangeSetProvider):
    """Reads pull requests from the merge commits of a local repository.

    Every merge commit on the first-parent history of ``target_ref`` whose
    message reads ``Merge pull request #<n> from <owner>/<branch>`` is
    change-set ``<n>``.
    """

    def __init__(self, repo_path: str | Path, target_ref: str = "main") -> None:
        self.repo_path = Path(repo_path)
        self.target_ref = target_ref
        if not self.repo_path.exists():
            raise ConfigurationError(f"Repository path does not exist: {self.repo_path}")

        try:
            self._repo = Repo(self.repo_path)
        except Exception as exc:  # pragma: no cover - GitPython error types vary
            raise ConfigurationError(f"Failed to open repository: {exc}") from exc

        if self._repo.bare:
            raise ConfigurationError("Bare repositories are not supported")

    def get_change_set(self, identifier: ChangeSetId) -> ChangeSet:
        for merge in self._iter_merges():
            if identifier == LATEST or merge.identifier == identifier:
                try:
                    return self._map_merge(merge)
                except (GitCommandError, ValueError) as exc:
                    raise NotFoundError(f"Contents of pull request {merge.identifier} are unavailable: {exc}") from exc
        raise NotFoundError(f"Pull request {identifier} not found on {self.target_ref}")

    def list_change_sets(self, count: int = 5) -> List[ChangeSetSummary]:
        summaries: List[ChangeSetSummary] = []
        for merge in self._iter_merges():
            if len(summaries) >= count:
                break
            summaries.append(
                ChangeSetSummary(
                    identifier=merge.identifier,
                    title=self._title(merge.merge),
                    source_branch=merge.source_branch,
                    target_branch=self.target_ref,
                    description=self._description(merge.merge),
                    status="completed",
                    created_by=merge.merge.author.name,
                    creation_date=merge.merge.committed_datetime,
                    repository=self.repo_path.resolve().name,
                )
            )
        logger.debug(f"Found {len(summaries)} pull requests on {self.target_ref}")
        return summaries

    def _iter_merges(self) -> Iterator[_PullRequestMerge]:
        try:
            commits = self._repo.iter_commits(self.target_ref, first_parent=True)
            for commit in commits:
                if len(commit.parents) < 2:
                    continue
                match = _MERGE_MESSAGE.match(commit.message)
                if not match:
                    continue
                yield _PullRequestMerge(
                    identifier=int(match.group(1)),
                    source_branch=self._strip_owner(match.group(2)),
                    merge=commit,
                )
        except (GitCommandError, ValueError) as exc:
            raise NotFoundError(f"Unknown target ref {self.target_ref}: {exc}") from exc

    def _map_merge(self, pr: _PullRequestMerge) -> ChangeSet:
        base, head = pr.merge.parents[0], pr.merge.parents[1]
        merge_bases = self._repo.merge_base(base, head)
        fork_point = merge_bases[0] if merge_bases else base

        file_changes = [self._map_diff(diff) for diff in fork_point.diff(head)]
        commits = list(self._repo.iter_commits(f"{fork_point.hexsha}..{head.hexsha}"))
        commits.reverse()  # oldest first

        return ChangeSet(
            identifier=pr.identifier,
            title=self._title(pr.merge),
            source_branch=pr.source_branch,
            target_branch=self.target_ref,
            files=tuple(file_changes),
            commits=tuple(Commit(message=commit.message.strip()) for commit in commits),
            description=self._description(pr.merge),
        )

    def _map_diff(self, diff: Diff) -> FileChange:
        kind = self._derive_kind(diff)
        return FileChange(
            path=diff.b_path or diff.a_path or "",
            kind=kind,
            new_content=None if kind == ChangeKind.DELETED else self._read_blob(diff.b_blob),
            old_content=None if kind == ChangeKind.ADDED else self._read_blob(diff.a_blob),
        )

    def _derive_kind(self, diff: Diff) -> ChangeKind:
        if diff.new_file:
            return ChangeKind.ADDED
        if diff.deleted_file:
            return ChangeKind.DELETED
        if diff.renamed_file:
            return ChangeKind.RENAMED
        return ChangeKind.EDITED

    def _read_blob(self, blob) -> Optional[bytes]:  # type: ignore[no-untyped-def]
        if blob is None:
            return None
        try:
            return blob.data_stream.read()
        except Exception as exc:
            logger.warning(f"Could not read blob {blob.path}: {exc}")
            return None

    def _title(self, merge: GitCommit) -> str:
        body = merge.message.strip().split("\n", 1)
        if len(body) > 1 and body[1].strip():
            return body[1].strip().split("\n", 1)[0]
        return merge.parents[1].summary if len(merge.parents) > 1 else merge.summary

    def _description(self, merge: GitCommit) -> str:
        # Merge message: header, blank line, title, then the description paragraphs.
        body = merge.message.strip().split("\n", 1)
        if len(body) < 2:
            return ""
        parts = body[1].strip().split("\n", 1)
        return parts[1].strip() if len(parts) > 1 else ""

    @staticmethod
    def _strip_owner(ref: str) -> str:
        # "owner/feature/x" -> "feature/x"
        owner, _, branch = ref.partition("/")
        return branch or owner
