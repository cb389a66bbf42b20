from __future__ import annotations

from pr_review.policy.conventions import (
    check_branch_name,
    check_commit_messages,
    check_documentation,
    is_conventional_commit,
    normalize_branch,
)

__all__ = [
    "check_branch_name",
    "check_commit_messages",
    "check_documentation",
    "is_conventional_commit",
    "normalize_branch",
]
