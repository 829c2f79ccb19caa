"""Maps review findings onto source line numbers.

Issues are expanded over their line range first, in input order. Security
vulnerabilities are appended afterwards unless an issue already placed on the
same line says the same thing, judged by :func:`similarity`.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence

from codelens.analyzer.dto import Issue, Vulnerability
from codelens.analyzer.similarity import DEFAULT_CONTAINMENT_SCORE, similarity

logger = logging.getLogger(__name__)

DEFAULT_DUPLICATE_THRESHOLD = 0.7


class AnnotationKind(Enum):
    ISSUE = "issue"
    VULNERABILITY = "vulnerability"


@dataclass(frozen=True)
class Annotation:
    kind: AnnotationKind
    payload: Issue | Vulnerability


LineAnnotations = Dict[int, List[Annotation]]


def issue_line_range(issue: Issue) -> range:
    """Lines covered by ``issue``, clamped so the range is never empty or below line 1."""
    start_line = max(issue.line, 1)
    end_line = issue.end_line if issue.end_line is not None else issue.line
    end_line = max(end_line, start_line)
    return range(start_line, end_line + 1)


def is_duplicate(
        vulnerability: Vulnerability,
        line_annotations: Sequence[Annotation],
        threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
        containment_score: float = DEFAULT_CONTAINMENT_SCORE,
) -> bool:
    for annotation in line_annotations:
        if annotation.kind is not AnnotationKind.ISSUE:
            continue

        score = similarity(annotation.payload.message, vulnerability.description, containment_score)
        if score > threshold:
            return True

    return False


def aggregate(
        issues: Sequence[Issue],
        vulnerabilities: Sequence[Vulnerability],
        threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
        containment_score: float = DEFAULT_CONTAINMENT_SCORE,
) -> LineAnnotations:
    line_map: LineAnnotations = {}

    for issue in issues:
        for line_number in issue_line_range(issue):
            line_map.setdefault(line_number, []).append(Annotation(AnnotationKind.ISSUE, issue))

    suppressed = 0
    for vulnerability in vulnerabilities:
        line_number = max(vulnerability.line, 1)
        line_annotations = line_map.get(line_number, [])

        if is_duplicate(vulnerability, line_annotations, threshold, containment_score):
            suppressed += 1
            continue

        line_map.setdefault(line_number, []).append(Annotation(AnnotationKind.VULNERABILITY, vulnerability))

    if suppressed:
        logger.debug("Suppressed %d vulnerabilities duplicating issues on the same line", suppressed)

    return line_map
