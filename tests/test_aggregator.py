from __future__ import annotations

from typing import List, Optional

from pr_review.detectors import Detector, default_detectors
from pr_review.models import CHANGE_SET_WIDE, ChangeKind, ChangeSet, FileChange, Finding, Severity
from pr_review.services import Aggregator


def _file(path: str, new: Optional[str], old: Optional[str] = None, kind: ChangeKind = ChangeKind.EDITED) -> FileChange:
    return FileChange(
        path=path,
        kind=kind,
        new_content=None if new is None else new.encode("utf-8"),
        old_content=None if old is None else old.encode("utf-8"),
    )


def _change_set(*files: FileChange) -> ChangeSet:
    return ChangeSet(
        identifier=12,
        title="Refactor config loading",
        source_branch="feature/config",
        target_branch="main",
        files=tuple(files),
    )


class ExplodingDetector(Detector):
    name = "exploding"

    def detect(self, content: str, path: str, prior: Optional[str] = None) -> List[Finding]:  # noqa: D401 - simple stub
        if "boom" in path:
            raise RuntimeError("unexpected input")
        return [Finding(file=path, message="checked", severity=Severity.LOW)]


def test_sensitive_env_var_is_reported_once_per_change_set() -> None:
    content = "export const key = process.env.API_KEY;\n"
    change_set = _change_set(_file("lib/a.ts", content), _file("lib/b.ts", content))

    result = Aggregator().aggregate(change_set)

    matching = [f for f in result.findings if "API_KEY" in f.message]
    assert len(matching) == 1
    assert matching[0].file == CHANGE_SET_WIDE


def test_per_file_findings_are_not_deduplicated() -> None:
    content = "el.innerHTML = markup;\n"
    change_set = _change_set(_file("lib/a.js", content), _file("lib/b.js", content))

    result = Aggregator().aggregate(change_set)

    assert [f.file for f in result.findings] == ["lib/a.js", "lib/b.js"]


def test_statistics_use_line_count_delta() -> None:
    old = "\n".join(f"line {i}" for i in range(10))
    new = "\n".join(f"line {i}" for i in range(4))
    change_set = _change_set(
        _file("notes/a.txt", new, old),
        _file("notes/b.txt", "one\ntwo\nthree\n", None, ChangeKind.ADDED),
        _file("notes/c.txt", old, new),
        _file("notes/d.txt", None, old, ChangeKind.DELETED),
    )

    statistics = Aggregator().aggregate(change_set).statistics

    assert statistics.files_changed == 4
    assert statistics.additions == 4 + 3 + 10
    assert statistics.deletions == 6
    assert statistics.total_changes == statistics.additions + statistics.deletions


def test_deletion_only_change_set() -> None:
    change_set = _change_set(
        _file("src/old.ts", None, "export const legacy = eval('1');\n", ChangeKind.DELETED),
        _file("src/older.ts", None, None, ChangeKind.DELETED),
    )

    result = Aggregator().aggregate(change_set)

    assert result.findings == []
    assert result.statistics.files_changed == 2
    assert result.statistics.additions == 0
    assert result.statistics.deletions == 0
    assert result.statistics.total_changes == 0


def test_failing_file_is_isolated(caplog) -> None:
    change_set = _change_set(_file("lib/boom.ts", "a\nb\n"), _file("lib/fine.ts", "a\n"))

    result = Aggregator([ExplodingDetector()], []).aggregate(change_set)

    assert [f.file for f in result.findings] == ["lib/fine.ts"]
    assert result.statistics.additions == 3
    assert "lib/boom.ts" in caplog.text


def test_max_files_caps_analysis() -> None:
    change_set = _change_set(_file("lib/a.ts", "a\n"), _file("lib/b.ts", "b\n"), _file("lib/c.ts", "c\n"))

    result = Aggregator([ExplodingDetector()], [], max_files=2).aggregate(change_set)

    assert [f.file for f in result.findings] == ["lib/a.ts", "lib/b.ts"]
    assert result.statistics.files_changed == 3


def test_detector_order_is_preserved_within_a_file() -> None:
    content = "var total = 0;\n" + "\n".join("const value = 1;" for _ in range(301))

    findings = Aggregator(default_detectors(), []).aggregate(_change_set(_file("lib/big.ts", content))).findings

    assert "too large" in findings[0].message
    assert "'var'" in findings[1].message


class SharedFindingDetector(Detector):
    name = "shared"

    def detect(self, content: str, path: str, prior: Optional[str] = None) -> List[Finding]:  # noqa: D401 - simple stub
        return [
            Finding(file=path, message=f"checked {path}", severity=Severity.LOW),
            Finding(file=CHANGE_SET_WIDE, line=int(content), message="shared concern", severity=Severity.MEDIUM),
        ]


def test_deduplication_keeps_first_occurrence_in_place() -> None:
    change_set = _change_set(_file("lib/a.ts", "4"), _file("lib/b.ts", "9"), _file("lib/c.ts", "2"))

    findings = Aggregator([SharedFindingDetector()], []).aggregate(change_set).findings

    assert [(f.file, f.line) for f in findings] == [
        ("lib/a.ts", None),
        (CHANGE_SET_WIDE, 4),
        ("lib/b.ts", None),
        ("lib/c.ts", None),
    ]


def test_sensitive_env_var_stays_between_the_files_that_raised_it() -> None:
    content = "document.body.innerHTML = markup;\nconst apiKey = process.env.API_KEY;\n"
    change_set = _change_set(_file("lib/a.js", content), _file("lib/b.js", content))

    result = Aggregator().aggregate(change_set)

    assert [f.file for f in result.findings] == ["lib/a.js", CHANGE_SET_WIDE, "lib/b.js"]
