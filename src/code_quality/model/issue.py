"""Issue: the normalized analyzer output for a single detected problem."""

from __future__ import annotations

from dataclasses import dataclass

from . import AnalyzerType, Severity


@dataclass(frozen=True, slots=True)
class Issue:
    """Immutable record of one finding.

    ``file_name`` is the base name of the analyzed file and is the key used
    by the grouped views; ``path`` keeps the full location for
    machine-readable output.
    """

    file_name: str
    line_number: int          # 1-based
    message: str
    type: AnalyzerType
    severity: Severity
    rule_id: str = ""
    path: str = ""

    def __str__(self) -> str:
        return (
            f"[{self.type.display_name}][{self.severity.display_name}] "
            f"{self.file_name} (line {self.line_number}): {self.message}"
        )

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "file_name": self.file_name,
            "path": self.path or self.file_name,
            "line_number": self.line_number,
            "message": self.message,
            "type": self.type.value,
            "severity": self.severity.value,
            "rule_id": self.rule_id,
        }
