from collections import Counter
from dataclasses import dataclass
from typing import Dict, Sequence

from codelens.analyzer.dto import Issue, IssueSeverity, Vulnerability, VulnerabilitySeverity


@dataclass(frozen=True)
class IssueCounts:
    errors: int
    warnings: int
    suggestions: int

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.suggestions

    def labels(self) -> list[str]:
        return [
            pluralize(self.errors, "Error"),
            pluralize(self.warnings, "Warning"),
            pluralize(self.suggestions, "Suggestion"),
        ]


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def count_issues(issues: Sequence[Issue]) -> IssueCounts:
    counts = Counter(issue.severity for issue in issues)
    return IssueCounts(
        errors=counts.get(IssueSeverity.ERROR, 0),
        warnings=counts.get(IssueSeverity.WARNING, 0),
        suggestions=counts.get(IssueSeverity.INFO, 0),
    )


def count_vulnerabilities(vulnerabilities: Sequence[Vulnerability]) -> Dict[str, int]:
    counts = Counter(vulnerability.severity for vulnerability in vulnerabilities)
    return {severity.value: counts.get(severity, 0) for severity in VulnerabilitySeverity}
