from __future__ import annotations

import re
from typing import List, Optional

from pr_review.detectors.base import SourceDetector, line_of
from pr_review.models import Finding, Severity

_SHORT_DECLARATION = re.compile(r"\b(?:const|let|var)\s+([A-Za-z_$][\w$]?)\s*(?=[=;:,])")
_VAR_DECLARATION = re.compile(r"\bvar\s+[A-Za-z_$]")


class StyleDetector(SourceDetector):
    name = "style"

    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        findings: List[Finding] = []

        short_names: List[str] = []
        for match in _SHORT_DECLARATION.finditer(content):
            if match.group(1) not in short_names:
                short_names.append(match.group(1))
        if short_names:
            findings.append(
                Finding(
                    file=path,
                    message=f"Unclear variable naming ({', '.join(short_names)}). Use descriptive names.",
                    severity=Severity.MEDIUM,
                )
            )

        legacy = _VAR_DECLARATION.search(content)
        if legacy:
            findings.append(
                Finding(
                    file=path,
                    line=line_of(content, legacy.start()),
                    message="Use 'let' or 'const' instead of 'var' for block-scoped declarations.",
                    severity=Severity.MEDIUM,
                )
            )

        return findings
