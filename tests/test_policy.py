from __future__ import annotations

import pytest  # type: ignore[import]

from pr_review.models import Commit
from pr_review.policy import (
    check_branch_name,
    check_commit_messages,
    check_documentation,
    is_conventional_commit,
    normalize_branch,
)


@pytest.mark.parametrize(
    "message",
    [
        "feat: add login form",
        "fix(auth): handle expired tokens",
        "docs: describe deployment\n\nLonger body that may run past fifty characters without issue.",
        "chore(deps): bump fastapi",
    ],
)
def test_conventional_commits_pass(message: str) -> None:
    assert is_conventional_commit(message)


@pytest.mark.parametrize(
    "message",
    [
        "update stuff",
        "feat: x",
        "feat: wip login form",
        "WIP fix: handle tokens",
        "fix(auth): Wip on expired tokens",
        "feature: add login form",
        "feat:add login form",
        "feat: " + "a" * 51,
    ],
)
def test_non_conventional_commits_fail(message: str) -> None:
    assert not is_conventional_commit(message)


def test_single_bad_commit_fails_the_change_set() -> None:
    commits = [Commit("feat: add login form"), Commit("fix: typo in header"), Commit("wip")]

    assert check_commit_messages(commits[:2])
    assert not check_commit_messages(commits)


def test_no_commits_pass() -> None:
    assert check_commit_messages([])


@pytest.mark.parametrize(
    "branch, expected",
    [
        ("feature/add-login", True),
        ("refs/heads/bugfix/issue-42", True),
        ("hotfix/2024-outage", True),
        ("release/v2", True),
        ("my-branch", False),
        ("Feature/Add-Login", False),
        ("feature/add_login", False),
        ("chore/cleanup", False),
        ("feature/", False),
        ("feature/x\n", False),
        ("feature/x\nmain", False),
    ],
)
def test_branch_naming(branch: str, expected: bool) -> None:
    assert check_branch_name(branch) is expected


def test_normalize_branch_strips_ref_namespace() -> None:
    assert normalize_branch("refs/heads/feature/x") == "feature/x"
    assert normalize_branch("feature/x") == "feature/x"


@pytest.mark.parametrize(
    "paths, expected",
    [
        (["src/app.ts", "README.md"], True),
        (["docs/setup.txt"], True),
        (["CHANGELOG.md"], True),
        (["packages/api/README"], True),
        (["src/app.ts", "tests/app.test.ts"], False),
        ([], False),
    ],
)
def test_documentation(paths, expected: bool) -> None:
    assert check_documentation(paths) is expected
