from __future__ import annotations

import re
from typing import List, Optional

from pr_review.detectors.base import SourceDetector, line_of, matching_close
from pr_review.models import Finding, Severity

# Header only; the body extends to the brace that balances the opening one.
_FUNCTION_HEADER = re.compile(r"function\s+([A-Za-z_$][\w$]*)\s*\([^)]*\)\s*\{")
_BRANCH_TOKENS = re.compile(r"\b(?:if|while|for|switch|catch)\b|&&|\|\|")
_ASYNC_MARKERS = re.compile(r"\.then\s*\(|\bawait\b|\bnew\s+Promise\b")


class ComplexityDetector(SourceDetector):
    """Flags branch-heavy functions and long chains of asynchronous operations."""

    name = "complexity"

    def __init__(self, max_branches: int = 10, max_async_markers: int = 3) -> None:
        self.max_branches = max_branches
        self.max_async_markers = max_async_markers

    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        findings: List[Finding] = []

        for match in _FUNCTION_HEADER.finditer(content):
            body = content[match.end():matching_close(content, match.end() - 1)]
            branches = len(_BRANCH_TOKENS.findall(body))
            if branches > self.max_branches:
                findings.append(
                    Finding(
                        file=path,
                        line=line_of(content, match.start()),
                        message=(
                            f"Function '{match.group(1)}' has high cyclomatic complexity ({branches} branches). "
                            "Consider breaking it into smaller functions."
                        ),
                        severity=Severity.HIGH,
                    )
                )

        async_markers = len(_ASYNC_MARKERS.findall(content))
        if async_markers > self.max_async_markers:
            findings.append(
                Finding(
                    file=path,
                    message=(
                        f"Deep nesting of async operations detected ({async_markers} promise/await markers). "
                        "Consider flattening the flow with async/await helpers."
                    ),
                    severity=Severity.MEDIUM,
                )
            )

        return findings
