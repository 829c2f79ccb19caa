"""Tests for mapping issues and vulnerabilities onto source lines."""

import pytest

from codelens.analyzer.annotations import AnnotationKind, aggregate, issue_line_range
from codelens.analyzer.dto import Issue, IssueSeverity, Vulnerability, VulnerabilitySeverity
from codelens.analyzer.similarity import similarity


def make_issue(line, message="Variable shadows an outer binding", end_line=None, severity=IssueSeverity.WARNING):
    return Issue(line=line, message=message, severity=severity, end_line=end_line)


def make_vulnerability(line, description="Hardcoded credentials in source", severity=VulnerabilitySeverity.HIGH):
    return Vulnerability(
        line=line,
        description=description,
        severity=severity,
        category="Secrets",
        recommendation="Load credentials from the environment.",
    )


def payloads(line_map, line_number):
    return [annotation.payload for annotation in line_map.get(line_number, [])]


class TestIssueExpansion:
    def test_issue_range_covers_every_line(self):
        """Given an issue spanning lines 3-5, it appears on exactly those lines."""
        issue = make_issue(3, end_line=5)

        line_map = aggregate([issue], [])

        assert sorted(line_map) == [3, 4, 5]
        for line_number in (3, 4, 5):
            assert payloads(line_map, line_number) == [issue]

    def test_missing_end_line_means_single_line(self):
        issue = make_issue(7)

        line_map = aggregate([issue], [])

        assert list(line_map) == [7]

    def test_end_line_before_start_is_clamped(self):
        issue = make_issue(6, end_line=2)

        assert list(issue_line_range(issue)) == [6]
        assert list(aggregate([issue], [])) == [6]

    def test_line_below_one_is_clamped(self):
        issue = make_issue(0, end_line=2)

        assert list(issue_line_range(issue)) == [1, 2]

    def test_same_line_issues_keep_input_order(self):
        first = make_issue(2, message="first finding on this line")
        second = make_issue(2, message="second finding on this line")
        third = make_issue(1, end_line=2, message="range finding covering two lines")

        line_map = aggregate([first, second, third], [])

        assert payloads(line_map, 2) == [first, second, third]


class TestVulnerabilityPlacement:
    def test_empty_inputs_give_empty_mapping(self):
        assert aggregate([], []) == {}

    def test_vulnerability_on_line_without_issues_is_kept(self):
        vulnerability = make_vulnerability(4, description="Unsanitized user input reaches database query")

        line_map = aggregate([make_issue(1)], [vulnerability])

        assert payloads(line_map, 4) == [vulnerability]
        assert line_map[4][0].kind is AnnotationKind.VULNERABILITY

    def test_vulnerabilities_follow_issues_on_the_same_line(self):
        issue = make_issue(5, message="Function is too long to follow")
        vulnerability = make_vulnerability(5)

        line_map = aggregate([issue], [vulnerability])

        assert [annotation.kind for annotation in line_map[5]] == [
            AnnotationKind.ISSUE,
            AnnotationKind.VULNERABILITY,
        ]

    def test_vulnerabilities_are_never_deduplicated_against_each_other(self):
        first = make_vulnerability(8)
        second = make_vulnerability(8)

        line_map = aggregate([], [first, second])

        assert payloads(line_map, 8) == [first, second]


class TestDuplicateSuppression:
    def test_contained_description_is_suppressed(self):
        """Given an issue and a vulnerability saying the same thing on line 10, only the issue is shown."""
        issue = make_issue(10, message="SQL injection risk in query builder", severity=IssueSeverity.ERROR)
        vulnerability = make_vulnerability(10, description="Potential SQL injection risk in query builder")

        line_map = aggregate([issue], [vulnerability])

        assert payloads(line_map, 10) == [issue]

    def test_high_word_overlap_is_suppressed(self):
        issue = make_issue(3, message="Unsanitized user input reaches database query")
        vulnerability = make_vulnerability(3, description="Unsanitized user input reaches the database query directly")

        line_map = aggregate([issue], [vulnerability])

        assert payloads(line_map, 3) == [issue]

    def test_partial_word_overlap_below_default_threshold_is_kept(self):
        """Given descriptions sharing 4 of 6 long words (0.667), the vulnerability survives the 0.7 default."""
        issue = make_issue(10, message="SQL injection risk in query builder", severity=IssueSeverity.ERROR)
        vulnerability = make_vulnerability(10, description="Possible SQL injection risk in the query builder function")

        line_map = aggregate([issue], [vulnerability])

        assert similarity(issue.message, vulnerability.description) == pytest.approx(4 / 6)
        assert payloads(line_map, 10) == [issue, vulnerability]

    def test_lower_threshold_suppresses_partial_overlap(self):
        issue = make_issue(10, message="SQL injection risk in query builder")
        vulnerability = make_vulnerability(10, description="Possible SQL injection risk in the query builder function")

        line_map = aggregate([issue], [vulnerability], threshold=0.5)

        assert payloads(line_map, 10) == [issue]

    def test_duplicate_on_another_line_is_not_compared(self):
        issue = make_issue(1, message="SQL injection risk in query builder")
        vulnerability = make_vulnerability(2, description="SQL injection risk in query builder")

        line_map = aggregate([issue], [vulnerability])

        assert payloads(line_map, 2) == [vulnerability]

    def test_multi_line_issue_deduplicates_on_each_line_it_touches(self):
        issue = make_issue(4, end_line=6, message="Shell command built from request parameters")
        inside = make_vulnerability(5, description="Shell command built from request parameters")
        outside = make_vulnerability(7, description="Shell command built from request parameters")

        line_map = aggregate([issue], [inside, outside])

        assert payloads(line_map, 5) == [issue]
        assert payloads(line_map, 7) == [outside]

    def test_aggregation_is_repeatable(self):
        issues = [make_issue(1, end_line=2)]
        vulnerabilities = [make_vulnerability(2), make_vulnerability(9)]

        assert aggregate(issues, vulnerabilities) == aggregate(issues, vulnerabilities)
