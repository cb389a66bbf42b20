from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pr_review.detectors.base import SourceDetector, split_lines
from pr_review.models import Finding, Severity

BLOCK_SIZE = 5


def find_moved_blocks(old: str, new: str, block_size: int = BLOCK_SIZE) -> int:
    """Count blocks of ``block_size`` lines that appear unchanged but relocated in ``new``.

    A window of the old content matches the first identical window of the new
    content. It counts as moved when the two line positions differ by more
    than ``block_size``. Any match advances the scan past the whole block so
    overlapping windows are not counted twice. Whitespace-only windows are
    skipped since they match almost anywhere.
    """
    old_lines = split_lines(old)
    new_lines = split_lines(new)

    first_position: Dict[Tuple[str, ...], int] = {}
    for index in range(len(new_lines) - block_size + 1):
        first_position.setdefault(tuple(new_lines[index:index + block_size]), index)

    moved = 0
    index = 0
    while index <= len(old_lines) - block_size:
        block = tuple(old_lines[index:index + block_size])
        position = first_position.get(block)
        if position is None or not any(line.strip() for line in block):
            index += 1
            continue
        if abs(position - index) > block_size:
            moved += 1
        index += block_size
    return moved


class MovedCodeDetector(SourceDetector):
    """Suggests extracting shared code when many blocks were moved verbatim."""

    name = "moved-code"

    def __init__(self, block_size: int = BLOCK_SIZE, max_moved_blocks: int = 3) -> None:
        self.block_size = block_size
        self.max_moved_blocks = max_moved_blocks

    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        if prior is None:
            return []
        moved = find_moved_blocks(prior, content, self.block_size)
        if moved <= self.max_moved_blocks:
            return []
        return [
            Finding(
                file=path,
                message=f"{moved} code blocks were moved without changes. Consider extracting them into shared code.",
                severity=Severity.MEDIUM,
            )
        ]
