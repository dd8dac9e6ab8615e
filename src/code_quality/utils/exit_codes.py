"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success: no issue at or above the failure threshold
  1   Violation: analysis found an issue at or above ``--fail-on``
  2   Error: usage error, missing path, invalid document
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from code_quality.model import Severity
from code_quality.model.analysis_result import AnalysisResult


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2


def exit_code_for(result: AnalysisResult, fail_on: Optional[Severity]) -> ExitCode:
    """VIOLATION when any issue ranks at or above *fail_on*; ``None`` never fails."""
    if fail_on is None:
        return ExitCode.SUCCESS
    if any(issue.severity.rank >= fail_on.rank for issue in result.issues):
        return ExitCode.VIOLATION
    return ExitCode.SUCCESS
