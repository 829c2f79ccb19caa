"""Tests for review document rendering and summary counts."""

import pytest

from codelens.analyzer.annotations import AnnotationKind
from codelens.analyzer.dto import Issue, IssueSeverity, Vulnerability, VulnerabilitySeverity
from codelens.analyzer.language import LanguageTag
from codelens.analyzer.render import PYGMENTS_LEXERS, build_review, highlight_lines
from codelens.analyzer.stats import count_issues, count_vulnerabilities, pluralize


class TestHighlightLines:
    def test_every_tag_has_a_lexer(self):
        assert set(PYGMENTS_LEXERS) == set(LanguageTag)

    def test_highlights_each_line_independently(self):
        html = highlight_lines(["def foo():", "    return 1"], LanguageTag.PYTHON)

        assert len(html) == 2
        assert 'class="k"' in html[0]
        assert "\n" not in html[0]

    def test_empty_line_renders_placeholder(self):
        html = highlight_lines([""], LanguageTag.PYTHON)

        assert html[0] != ""

    @pytest.mark.parametrize("language", list(LanguageTag))
    def test_highlighted_lines_carry_no_line_break(self, language):
        html = highlight_lines(["x = 1", "", "  y"], language)

        assert len(html) == 3
        assert not any(line.endswith("\n") for line in html)


class TestBuildReview:
    def test_one_review_line_per_source_line(self):
        code = "def foo():\n    pass\n"
        issue = Issue(line=1, message="Missing docstring", severity=IssueSeverity.INFO)

        document = build_review(code, [issue], [])

        assert document.language is LanguageTag.PYTHON
        assert [line.number for line in document.lines] == [1, 2, 3]
        assert [line.text for line in document.lines] == ["def foo():", "    pass", ""]
        assert [annotation.payload for annotation in document.lines[0].annotations] == [issue]
        assert document.lines[1].annotations == []
        assert document.lines[2].annotations == []

    def test_merges_vulnerabilities_and_counts(self):
        code = "import os\nos.system(cmd)"
        issue = Issue(line=2, message="Avoid os.system", severity=IssueSeverity.WARNING)
        vulnerability = Vulnerability(
            line=2,
            description="Command injection through unsanitized cmd argument",
            severity=VulnerabilitySeverity.CRITICAL,
            category="Command Injection",
            recommendation="Use subprocess.run with an argument list.",
        )

        document = build_review(code, [issue], [vulnerability], summary="Small script.")

        assert [annotation.kind for annotation in document.lines[1].annotations] == [
            AnnotationKind.ISSUE,
            AnnotationKind.VULNERABILITY,
        ]
        assert document.summary == "Small script."
        assert document.issue_counts.warnings == 1
        assert document.vulnerability_counts["critical"] == 1

    def test_findings_past_the_end_do_not_break_rendering(self):
        issue = Issue(line=40, message="Unreachable line reference", severity=IssueSeverity.ERROR)

        document = build_review("x = 1", [issue], [])

        assert len(document.lines) == 1
        assert document.lines[0].annotations == []


class TestStats:
    def test_counts_issue_severities(self):
        issues = [
            Issue(line=1, message="a", severity=IssueSeverity.ERROR),
            Issue(line=2, message="b", severity=IssueSeverity.INFO),
            Issue(line=3, message="c", severity=IssueSeverity.INFO),
        ]

        counts = count_issues(issues)

        assert (counts.errors, counts.warnings, counts.suggestions) == (1, 0, 2)
        assert counts.total == 3
        assert counts.labels() == ["1 Error", "0 Warnings", "2 Suggestions"]

    def test_vulnerability_counts_include_every_severity(self):
        counts = count_vulnerabilities([])

        assert counts == {"critical": 0, "high": 0, "medium": 0, "low": 0, "info": 0}

    def test_pluralize(self):
        assert pluralize(1, "Warning") == "1 Warning"
        assert pluralize(3, "Warning") == "3 Warnings"
