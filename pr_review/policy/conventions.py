from __future__ import annotations

import re
from typing import Iterable

from pr_review.models import Commit

CONVENTIONAL_COMMIT = re.compile(r"(feat|fix|docs|style|refactor|test|chore)(\(.+\))?: .{1,50}")
BRANCH_NAME = re.compile(r"(feature|bugfix|hotfix|release)/[a-z0-9-]+")
REF_PREFIX = "refs/heads/"
MIN_COMMIT_LENGTH = 10


def is_conventional_commit(message: str) -> bool:
    """Check one commit message: conventional subject line, minimum length, no WIP."""
    subject = message.strip().split("\n", 1)[0].rstrip()
    if not CONVENTIONAL_COMMIT.fullmatch(subject):
        return False
    if len(message.strip()) < MIN_COMMIT_LENGTH:
        return False
    return "wip" not in message.lower()


def check_commit_messages(commits: Iterable[Commit]) -> bool:
    return all(is_conventional_commit(commit.message) for commit in commits)


def normalize_branch(branch: str) -> str:
    if branch.startswith(REF_PREFIX):
        return branch[len(REF_PREFIX):]
    return branch


def check_branch_name(branch: str) -> bool:
    return bool(BRANCH_NAME.fullmatch(normalize_branch(branch)))


def check_documentation(paths: Iterable[str]) -> bool:
    return any("README" in path or "docs/" in path or path.endswith(".md") for path in paths)
