from __future__ import annotations

import re
from typing import List, Optional

from pr_review.detectors.base import SourceDetector, line_of
from pr_review.models import CHANGE_SET_WIDE, Finding, Severity

_DYNAMIC_CODE = re.compile(r"\beval\s*\(|\bnew\s+Function\s*\(")
_HTML_INJECTION = re.compile(r"\.innerHTML\s*=(?!=)|\bdangerouslySetInnerHTML\b")
_SENSITIVE_ENV = re.compile(r"process\.env\.([A-Za-z0-9_]*(?:KEY|SECRET|PASSWORD)[A-Za-z0-9_]*)")


class SecurityDetector(SourceDetector):
    """Pattern-based security checks.

    Dynamic code execution and sensitive environment variables are reported
    once for the whole change-set; HTML injection is reported per file.
    """

    name = "security"

    def scan(self, content: str, path: str, prior: Optional[str]) -> List[Finding]:
        findings: List[Finding] = []

        if _DYNAMIC_CODE.search(content):
            findings.append(
                Finding(
                    file=CHANGE_SET_WIDE,
                    message="Use of eval() or Function constructor detected. This can lead to code injection vulnerabilities.",
                    severity=Severity.HIGH,
                )
            )

        injection = _HTML_INJECTION.search(content)
        if injection:
            findings.append(
                Finding(
                    file=path,
                    line=line_of(content, injection.start()),
                    message="Direct HTML injection detected. Sanitize content or avoid setting innerHTML to prevent XSS.",
                    severity=Severity.HIGH,
                )
            )

        seen: set[str] = set()
        for match in _SENSITIVE_ENV.finditer(content):
            variable = match.group(1)
            if variable in seen:
                continue
            seen.add(variable)
            findings.append(
                Finding(
                    file=CHANGE_SET_WIDE,
                    message=f"Sensitive environment variable '{variable}' referenced. Make sure it is never exposed to the client.",
                    severity=Severity.HIGH,
                )
            )

        return findings
