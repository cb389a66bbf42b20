from __future__ import annotations

import pytest  # type: ignore[import]

from pr_review.models import ChangeKind, ChangeSet, Commit, FileChange, Finding, Severity, Statistics
from pr_review.services import AggregateResult, ReportBuilder, rank_findings


@pytest.fixture()
def change_set() -> ChangeSet:
    return ChangeSet(
        identifier=42,
        title="Add login form",
        source_branch="refs/heads/feature/add-login",
        target_branch="refs/heads/main",
        files=(
            FileChange(path="src/login.ts", kind=ChangeKind.ADDED, new_content=b"export {};\n"),
            FileChange(path="README.md", kind=ChangeKind.EDITED, new_content=b"# App\n", old_content=b"# App\n"),
        ),
        commits=(Commit("feat: add login form"), Commit("docs: mention login in readme")),
    )


def test_rank_findings_is_stable() -> None:
    findings = [
        Finding(file="a", message="low one", severity=Severity.LOW),
        Finding(file="b", message="first high", severity=Severity.HIGH),
        Finding(file="c", message="medium", severity=Severity.MEDIUM),
        Finding(file="d", message="second high", severity=Severity.HIGH),
    ]

    ranked = rank_findings(findings)

    assert [f.message for f in ranked] == ["first high", "second high", "medium", "low one"]


def test_build_report(change_set: ChangeSet) -> None:
    result = AggregateResult(
        findings=[
            Finding(file="src/login.ts", message="Use 'let' or 'const' instead of 'var'.", severity=Severity.MEDIUM),
            Finding(file="src/login.ts", line=3, message="Direct HTML injection detected.", severity=Severity.HIGH),
        ],
        statistics=Statistics(files_changed=2, additions=12, deletions=3),
    )

    report = ReportBuilder().build(change_set, result)

    assert report.summary == (
        "PR #42: Add login form - 1 high and 1 medium priority issues found. "
        "2 files changed with 15 total changes (+12/-3)."
    )
    assert [f.severity for f in report.suggestions] == [Severity.HIGH, Severity.MEDIUM]
    assert report.best_practices.commit_messages
    assert report.best_practices.branch_naming
    assert report.best_practices.test_coverage
    assert report.best_practices.documentation_updated


def test_test_coverage_follows_no_test_file_finding(change_set: ChangeSet) -> None:
    result = AggregateResult(
        findings=[
            Finding(
                file="src/login.ts",
                message="No corresponding test file found for src/login.ts. Add or update tests for this change.",
                severity=Severity.HIGH,
            )
        ],
        statistics=Statistics(files_changed=2),
    )

    report = ReportBuilder().build(change_set, result)

    assert report.best_practices.test_coverage is False


def test_report_to_dict(change_set: ChangeSet) -> None:
    result = AggregateResult(
        findings=[
            Finding(file="src/login.ts", line=7, message="Broad DOM query.", severity=Severity.LOW),
            Finding(file="src/login.ts", message="File is too large.", severity=Severity.MEDIUM),
        ],
        statistics=Statistics(files_changed=2, additions=5, deletions=1),
    )

    data = ReportBuilder().build(change_set, result).to_dict()

    assert data["suggestions"] == [
        {"file": "src/login.ts", "message": "File is too large.", "severity": "medium"},
        {"file": "src/login.ts", "line": 7, "message": "Broad DOM query.", "severity": "low"},
    ]
    assert data["statistics"] == {"filesChanged": 2, "additions": 5, "deletions": 1, "totalChanges": 6}
    assert data["bestPractices"] == {
        "commitMessages": True,
        "branchNaming": True,
        "testCoverage": True,
        "documentationUpdated": True,
    }
