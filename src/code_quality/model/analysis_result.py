"""AnalysisResult: aggregated issues plus the grouped and textual views."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from code_quality import __version__
from code_quality.model import (
    SEVERITY_ORDER,
    TYPE_ORDER,
    AnalyzerType,
    Severity,
)
from code_quality.model.issue import Issue

TOP_FILES_LIMIT = 5

# One advisory sentence per analyzer type, emitted in TYPE_ORDER.
GENERAL_ADVICE: dict[AnalyzerType, str] = {
    AnalyzerType.BUG: "Bug Prevention: Review error handling and null checks in your code.",
    AnalyzerType.VULNERABILITY: (
        "Security: Use parameterized queries for database operations "
        "and validate all user inputs."
    ),
    AnalyzerType.PERFORMANCE: (
        "Performance: Optimize loops and string operations, "
        "and be mindful of collection operations."
    ),
    AnalyzerType.STYLE: (
        "Code Style: Follow consistent naming conventions and add proper documentation."
    ),
}


@dataclass(slots=True)
class AnalysisResult:
    """Ordered issues from one analysis invocation.

    Order is file-visitation order, then analyzer-registration order within
    a file; every grouped view below preserves it.
    """

    issues: list[Issue] = field(default_factory=list)
    files_analyzed: int = 0
    tool_version: str = __version__

    # ── grouped views ───────────────────────────────────────────────

    def group_by_file(self) -> dict[str, list[Issue]]:
        groups: dict[str, list[Issue]] = {}
        for issue in self.issues:
            groups.setdefault(issue.file_name, []).append(issue)
        return groups

    def group_by_type(self) -> dict[AnalyzerType, list[Issue]]:
        groups: dict[AnalyzerType, list[Issue]] = {}
        for issue in self.issues:
            groups.setdefault(issue.type, []).append(issue)
        return groups

    def group_by_severity(self) -> dict[Severity, list[Issue]]:
        groups: dict[Severity, list[Issue]] = {}
        for issue in self.issues:
            groups.setdefault(issue.severity, []).append(issue)
        return groups

    def count_by_type(self) -> dict[AnalyzerType, int]:
        """Zero-filled counts over every analyzer type."""
        counts = Counter(issue.type for issue in self.issues)
        return {t: counts.get(t, 0) for t in TYPE_ORDER}

    def count_by_severity(self) -> dict[Severity, int]:
        """Zero-filled counts over every severity."""
        counts = Counter(issue.severity for issue in self.issues)
        return {s: counts.get(s, 0) for s in SEVERITY_ORDER}

    def top_files(self, limit: int = TOP_FILES_LIMIT) -> list[tuple[str, int]]:
        """Files with the most issues; ties keep first-seen order."""
        counts: dict[str, int] = {}
        for issue in self.issues:
            counts[issue.file_name] = counts.get(issue.file_name, 0) + 1
        ranked = sorted(counts.items(), key=lambda item: -item[1])
        return ranked[:limit]

    def issues_with_severity(self, severity: Severity) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity == severity]

    # ── text reports ────────────────────────────────────────────────

    def summary(self) -> str:
        lines: list[str] = [
            "Code Analysis Summary",
            "====================",
            "",
            f"Total issues found: {len(self.issues)}",
            "",
            "Issues by type:",
        ]
        for analyzer_type, count in self.count_by_type().items():
            lines.append(f"- {analyzer_type.display_name}: {count}")
        lines.append("")

        lines.append("Issues by severity:")
        for severity, count in self.count_by_severity().items():
            lines.append(f"- {severity.display_name}: {count}")
        lines.append("")

        lines.append("Top files with issues:")
        for file_name, count in self.top_files():
            lines.append(f"- {file_name}: {count} issues")
        return "\n".join(lines) + "\n"

    def recommendations(self) -> str:
        lines: list[str] = ["Recommendations", "===============", ""]

        sections = (
            (Severity.CRITICAL, "Critical Issues (Fix Immediately):"),
            (Severity.HIGH, "High Priority Issues (Fix Soon):"),
        )
        for severity, heading in sections:
            matching = self.issues_with_severity(severity)
            if not matching:
                continue
            lines.append(heading)
            for issue in matching:
                lines.append(
                    f"- {issue.file_name} (line {issue.line_number}): {issue.message}"
                )
            lines.append("")

        lines.append("General Recommendations:")
        present = {issue.type for issue in self.issues}
        for analyzer_type in TYPE_ORDER:
            if analyzer_type in present:
                lines.append(f"- {GENERAL_ADVICE[analyzer_type]}")
        return "\n".join(lines) + "\n"

    # ── composition ─────────────────────────────────────────────────

    def extend(self, other: AnalysisResult) -> None:
        """Append *other*'s issues after ours (walk-order concatenation)."""
        self.issues.extend(other.issues)
        self.files_analyzed += other.files_analyzed

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the JSON document described by ``analysis_result.schema.json``."""
        return {
            "schema_version": "analysis_result_v1",
            "tool_version": self.tool_version,
            "summary": {
                "files_analyzed": self.files_analyzed,
                "total_issues": len(self.issues),
                "by_type": {t.value: c for t, c in self.count_by_type().items()},
                "by_severity": {s.value: c for s, c in self.count_by_severity().items()},
                "top_files": [
                    {"file_name": name, "count": count}
                    for name, count in self.top_files()
                ],
            },
            "issues": [issue.to_dict() for issue in self.issues],
        }
