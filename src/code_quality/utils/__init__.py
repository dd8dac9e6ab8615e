"""Shared utilities for code_quality."""

from code_quality.utils.exit_codes import ExitCode, exit_code_for
from code_quality.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = [
    "ExitCode",
    "exit_code_for",
    "stable_json_dump",
    "stable_json_dumps",
]
