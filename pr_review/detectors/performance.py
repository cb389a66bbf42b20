from __future__ import annotations

import re
from typing import List, Optional

from pr_review.detectors.base import SourceDetector, line_of
from pr_review.models import CHANGE_SET_WIDE, Finding, Severity

_PROTOTYPE_MUTATION = re.compile(
    r"\b(?:Array|Object|String|Number|Boolean|Function|Date|RegExp|Promise|Map|Set)"
    r"\.prototype\.[A-Za-z_$][\w$]*\s*=(?!=)"
)
_ITERATION_TOKENS = re.compile(r"\bfor\b|\bwhile\b|\.forEach\s*\(|\.map\s*\(|\.filter\s*\(|\.reduce\s*\(")
_QUERY_ALL = re.compile(r"\bquerySelectorAll\s*\(")


class PerformanceDetector(SourceDetector):
    name = "performance"

    def __init__(self, max_iterations: int = 5) -> None:
        self.max_iterations = max_iterations

    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        findings: List[Finding] = []

        if _PROTOTYPE_MUTATION.search(content):
            findings.append(
                Finding(
                    file=CHANGE_SET_WIDE,
                    message="Modifying built-in prototypes can cause conflicts and deoptimize hot paths.",
                    severity=Severity.MEDIUM,
                )
            )

        iterations = len(_ITERATION_TOKENS.findall(content))
        if iterations > self.max_iterations:
            findings.append(
                Finding(
                    file=path,
                    message=f"Multiple loops or iterations detected ({iterations}). Check for potential performance bottlenecks.",
                    severity=Severity.MEDIUM,
                )
            )

        query = _QUERY_ALL.search(content)
        if query:
            findings.append(
                Finding(
                    file=path,
                    line=line_of(content, query.start()),
                    message="Broad DOM query with querySelectorAll. Narrow the selector or cache the result.",
                    severity=Severity.LOW,
                )
            )

        return findings
