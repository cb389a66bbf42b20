from __future__ import annotations

import re
from typing import List, Optional

from pr_review.detectors.base import Detector, is_component_file, line_of, matching_close
from pr_review.models import Finding, Severity

_CONDITIONAL_HOOK = re.compile(r"\bif\s*\([^)]*\)\s*\{?[^{}]*?\buse(?:State|Effect)\s*\(")
_EFFECT_CALL = re.compile(r"\buseEffect\s*\(")
_EMPTY_DEPS = re.compile(r",\s*\[\s*\]\s*\Z")


class ComponentDetector(Detector):
    """React hook rules for .jsx/.tsx component files."""

    name = "components"

    def detect(self, content: str, path: str, prior: Optional[str] = None) -> List[Finding]:
        if not is_component_file(path):
            return []

        findings: List[Finding] = []

        conditional = _CONDITIONAL_HOOK.search(content)
        if conditional:
            findings.append(
                Finding(
                    file=path,
                    line=line_of(content, conditional.start()),
                    message="React hooks (useState/useEffect) must not be called conditionally.",
                    severity=Severity.HIGH,
                )
            )

        effect = self._empty_dependency_effect(content)
        if effect is not None:
            findings.append(
                Finding(
                    file=path,
                    line=line_of(content, effect),
                    message="useEffect with an empty dependency array. Verify that it should only run once on mount.",
                    severity=Severity.MEDIUM,
                )
            )

        return findings

    @staticmethod
    def _empty_dependency_effect(content: str) -> Optional[int]:
        """Offset of the first useEffect call whose own argument list ends with ``[]``."""
        for call in _EFFECT_CALL.finditer(content):
            arguments = content[call.end():matching_close(content, call.end() - 1, "(", ")")]
            if _EMPTY_DEPS.search(arguments):
                return call.start()
        return None
