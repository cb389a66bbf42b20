from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import List, Optional

from pr_review.models import ChangeSet, Finding

SOURCE_EXTENSIONS = frozenset({".js", ".jsx", ".ts", ".tsx"})
COMPONENT_EXTENSIONS = frozenset({".jsx", ".tsx"})


def extension(path: str) -> str:
    return PurePosixPath(path).suffix.lower()


def is_source_file(path: str) -> bool:
    return extension(path) in SOURCE_EXTENSIONS


def is_component_file(path: str) -> bool:
    return extension(path) in COMPONENT_EXTENSIONS


def line_of(content: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return content.count("\n", 0, offset) + 1


def split_lines(content: str) -> List[str]:
    """Lines split on newline characters only, the same breaks ``line_of`` counts."""
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def count_lines(content: str) -> int:
    return len(split_lines(content))


def matching_close(content: str, open_index: int, opening: str = "{", closing: str = "}") -> int:
    """Index of the bracket closing the one at ``open_index``, or the end of content if unbalanced."""
    depth = 0
    for index in range(open_index, len(content)):
        char = content[index]
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return index
    return len(content)


class Detector(ABC):
    """Interface for per-file pattern detectors.

    Implementations must be pure: no I/O and no state shared between calls.
    Absence of a pattern yields an empty list.
    """

    name: str = "detector"

    @abstractmethod
    def detect(self, content: str, path: str, prior: Optional[str] = None) -> List[Finding]:
        raise NotImplementedError


class SourceDetector(Detector):
    """Detector that only activates on JavaScript/TypeScript source files."""

    def detect(self, content: str, path: str, prior: Optional[str] = None) -> List[Finding]:
        if not is_source_file(path):
            return []
        return self.scan(content, path, prior)

    @abstractmethod
    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        raise NotImplementedError


class ChangeSetDetector(ABC):
    """Interface for checks that need every changed path of a change-set."""

    name: str = "change-set detector"

    @abstractmethod
    def detect_change_set(self, change_set: ChangeSet) -> List[Finding]:
        raise NotImplementedError
