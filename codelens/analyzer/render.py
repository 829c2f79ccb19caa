import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name

from codelens.analyzer.annotations import (
    Annotation,
    DEFAULT_DUPLICATE_THRESHOLD,
    aggregate,
)
from codelens.analyzer.dto import Issue, Vulnerability
from codelens.analyzer.language import LanguageTag, classify
from codelens.analyzer.similarity import DEFAULT_CONTAINMENT_SCORE
from codelens.analyzer.stats import IssueCounts, count_issues, count_vulnerabilities

logger = logging.getLogger(__name__)

PYGMENTS_LEXERS: Dict[LanguageTag, str] = {
    LanguageTag.JSX: "jsx",
    LanguageTag.TSX: "tsx",
    LanguageTag.TYPESCRIPT: "typescript",
    LanguageTag.JAVASCRIPT: "javascript",
    LanguageTag.PYTHON: "python",
    LanguageTag.JAVA: "java",
    LanguageTag.C: "c",
    LanguageTag.CPP: "cpp",
    LanguageTag.CSHARP: "csharp",
    LanguageTag.MARKUP: "html",
    LanguageTag.CSS: "css",
    LanguageTag.JSON: "json",
    LanguageTag.GO: "go",
    LanguageTag.RUST: "rust",
    LanguageTag.BASH: "bash",
    LanguageTag.YAML: "yaml",
}


@dataclass
class ReviewLine:
    number: int
    text: str
    html: str
    annotations: List[Annotation] = field(default_factory=list)


@dataclass
class ReviewDocument:
    language: LanguageTag
    lines: List[ReviewLine]
    issue_counts: IssueCounts
    vulnerability_counts: Dict[str, int]
    summary: Optional[str] = None


def split_source_lines(code: str) -> List[str]:
    return code.split("\n")


def lexer_for(language: LanguageTag) -> Lexer:
    return get_lexer_by_name(PYGMENTS_LEXERS[language], stripnl=False, ensurenl=False)


def highlight_lines(lines: Sequence[str], language: LanguageTag) -> List[str]:
    """Highlight every line on its own, the way the review table renders them."""
    lexer = lexer_for(language)
    formatter = HtmlFormatter(nowrap=True)

    return [highlight(line or " ", lexer, formatter).rstrip("\n") for line in lines]


def build_review(
        code: str,
        issues: Sequence[Issue],
        vulnerabilities: Sequence[Vulnerability],
        summary: Optional[str] = None,
        threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
        containment_score: float = DEFAULT_CONTAINMENT_SCORE,
) -> ReviewDocument:
    source_lines = split_source_lines(code)
    language = classify(code)
    highlighted = highlight_lines(source_lines, language)
    line_annotations = aggregate(issues, vulnerabilities, threshold, containment_score)

    review_lines: List[ReviewLine] = [
        ReviewLine(
            number=index + 1,
            text=text,
            html=html,
            annotations=line_annotations.get(index + 1, []),
        )
        for index, (text, html) in enumerate(zip(source_lines, highlighted))
    ]

    outside = [line_number for line_number in line_annotations if line_number > len(source_lines)]
    if outside:
        logger.warning(
            "Findings reference %d line(s) past the end of a %d-line document: %s",
            len(outside), len(source_lines), sorted(outside),
        )

    return ReviewDocument(
        language=language,
        lines=review_lines,
        issue_counts=count_issues(issues),
        vulnerability_counts=count_vulnerabilities(vulnerabilities),
        summary=summary,
    )
