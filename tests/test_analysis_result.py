"""
AnalysisResult Tests
====================
Grouped views, counts, top files and the two text reports.
"""

import pytest

from code_quality.contracts.load import validate_instance
from code_quality.model import SEVERITY_ORDER, TYPE_ORDER, AnalyzerType, Severity
from code_quality.model.analysis_result import AnalysisResult
from code_quality.model.issue import Issue


def make_issue(
    file_name: str = "A.java",
    line: int = 1,
    message: str = "msg",
    type: AnalyzerType = AnalyzerType.BUG,
    severity: Severity = Severity.LOW,
    rule_id: str = "BUG_NULL_DEREF_001",
) -> Issue:
    return Issue(
        file_name=file_name,
        line_number=line,
        message=message,
        type=type,
        severity=severity,
        rule_id=rule_id,
    )


EMPTY_SUMMARY = (
    "Code Analysis Summary\n"
    "====================\n"
    "\n"
    "Total issues found: 0\n"
    "\n"
    "Issues by type:\n"
    "- Bug: 0\n"
    "- Vulnerability: 0\n"
    "- Performance: 0\n"
    "- Style: 0\n"
    "\n"
    "Issues by severity:\n"
    "- Critical: 0\n"
    "- High: 0\n"
    "- Medium: 0\n"
    "- Low: 0\n"
    "- Info: 0\n"
    "\n"
    "Top files with issues:\n"
)


class TestEnums:
    """Descriptor tables and ordering."""

    def test_type_order_and_names(self):
        assert [t.display_name for t in TYPE_ORDER] == [
            "Bug", "Vulnerability", "Performance", "Style",
        ]
        assert AnalyzerType.BUG.description == "Identifies potential bugs and logical errors"

    def test_severity_rank_descends(self):
        ranks = [s.rank for s in SEVERITY_ORDER]
        assert ranks == sorted(ranks, reverse=True)
        assert Severity.CRITICAL.rank > Severity.INFO.rank
        assert Severity.LOW.description == "Consider fixing"

    def test_issue_str(self):
        issue = make_issue(message="boom", line=7, severity=Severity.HIGH)
        assert str(issue) == "[Bug][High] A.java (line 7): boom"


class TestGroupedViews:
    """group_by_* and count_by_*."""

    def test_group_by_file_keeps_first_seen_order(self):
        result = AnalysisResult([
            make_issue("B.java"), make_issue("A.java"), make_issue("B.java", line=2),
        ])
        groups = result.group_by_file()

        assert list(groups) == ["B.java", "A.java"]
        assert [i.line_number for i in groups["B.java"]] == [1, 2]

    def test_group_by_type_and_severity(self):
        result = AnalysisResult([
            make_issue(type=AnalyzerType.STYLE, severity=Severity.MEDIUM),
            make_issue(type=AnalyzerType.BUG, severity=Severity.HIGH),
            make_issue(type=AnalyzerType.STYLE, severity=Severity.LOW),
        ])
        assert list(result.group_by_type()) == [AnalyzerType.STYLE, AnalyzerType.BUG]
        assert len(result.group_by_type()[AnalyzerType.STYLE]) == 2
        assert list(result.group_by_severity()) == [
            Severity.MEDIUM, Severity.HIGH, Severity.LOW,
        ]

    def test_counts_are_zero_filled(self):
        result = AnalysisResult([make_issue(type=AnalyzerType.STYLE)])
        assert result.count_by_type() == {
            AnalyzerType.BUG: 0,
            AnalyzerType.VULNERABILITY: 0,
            AnalyzerType.PERFORMANCE: 0,
            AnalyzerType.STYLE: 1,
        }
        assert sum(result.count_by_severity().values()) == 1
        assert list(result.count_by_severity()) == list(SEVERITY_ORDER)


class TestTopFiles:
    """top_files ranking."""

    def test_descending_with_first_seen_ties(self):
        issues = (
            [make_issue("X.java")]
            + [make_issue("Y.java")] * 3
            + [make_issue("Z.java")]
            + [make_issue("W.java")] * 3
        )
        top = AnalysisResult(issues).top_files()
        assert top == [("Y.java", 3), ("W.java", 3), ("X.java", 1), ("Z.java", 1)]

    def test_at_most_five(self):
        issues = [make_issue(f"F{i}.java") for i in range(8)]
        assert len(AnalysisResult(issues).top_files()) == 5


class TestSummary:
    """summary() text."""

    def test_empty_result(self):
        assert AnalysisResult().summary() == EMPTY_SUMMARY

    def test_counts_and_top_files(self):
        result = AnalysisResult([
            make_issue("A.java", severity=Severity.CRITICAL, type=AnalyzerType.VULNERABILITY),
            make_issue("A.java"),
            make_issue("B.java", type=AnalyzerType.STYLE),
        ])
        text = result.summary()

        assert "Total issues found: 3\n" in text
        assert "- Vulnerability: 1\n" in text
        assert "- Bug: 1\n" in text
        assert "- Critical: 1\n" in text
        assert text.endswith("Top files with issues:\n- A.java: 2 issues\n- B.java: 1 issues\n")


class TestRecommendations:
    """recommendations() text."""

    def test_empty_result_has_only_heading(self):
        assert AnalysisResult().recommendations() == (
            "Recommendations\n===============\n\nGeneral Recommendations:\n"
        )

    def test_critical_and_high_sections(self):
        result = AnalysisResult([
            make_issue("A.java", 3, "bad sql", AnalyzerType.VULNERABILITY, Severity.CRITICAL),
            make_issue("B.java", 9, "ref eq", AnalyzerType.BUG, Severity.HIGH),
            make_issue("C.java", 1, "style", AnalyzerType.STYLE, Severity.LOW),
        ])
        text = result.recommendations()

        assert "Critical Issues (Fix Immediately):\n- A.java (line 3): bad sql\n" in text
        assert "High Priority Issues (Fix Soon):\n- B.java (line 9): ref eq\n" in text
        assert "style" not in text.split("General Recommendations:")[0]

    def test_general_advice_in_enum_order(self):
        result = AnalysisResult([
            make_issue(type=AnalyzerType.STYLE),
            make_issue(type=AnalyzerType.BUG),
        ])
        general = result.recommendations().split("General Recommendations:\n")[1]
        assert general == (
            "- Bug Prevention: Review error handling and null checks in your code.\n"
            "- Code Style: Follow consistent naming conventions and add proper documentation.\n"
        )

    def test_no_high_section_without_high_issues(self):
        result = AnalysisResult([make_issue(severity=Severity.CRITICAL)])
        assert "High Priority Issues" not in result.recommendations()


class TestSerialisation:
    """to_dict() and extend()."""

    def test_to_dict_validates_against_schema(self):
        result = AnalysisResult(
            [make_issue(severity=Severity.HIGH)], files_analyzed=2,
        )
        payload = result.to_dict()

        validate_instance(payload, "analysis_result.schema.json")
        assert payload["summary"]["by_type"]["bug"] == 1
        assert payload["summary"]["top_files"] == [{"file_name": "A.java", "count": 1}]
        assert payload["issues"][0]["path"] == "A.java"

    def test_extend_appends_in_order(self):
        first = AnalysisResult([make_issue("A.java")], files_analyzed=1)
        first.extend(AnalysisResult([make_issue("B.java")], files_analyzed=1))

        assert [i.file_name for i in first.issues] == ["A.java", "B.java"]
        assert first.files_analyzed == 2


@pytest.mark.parametrize("severity", list(Severity))
def test_issues_with_severity(severity):
    result = AnalysisResult([make_issue(severity=s) for s in Severity])
    assert [i.severity for i in result.issues_with_severity(severity)] == [severity]
