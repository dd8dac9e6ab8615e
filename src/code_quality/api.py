"""
code_quality.api
================

Programmatic entrypoints for using code_quality as a backend engine.

Goals:
  - No argparse / CLI dependencies
  - Stable, JSON-friendly outputs that match the bundled schema

Non-goals:
  - Owning presentation: callers render results

Usage::

    from code_quality.api import analyze_path

    result = analyze_path("src/main/java")
    print(result.summary())
    payload = result.to_dict()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from code_quality.contracts.load import validate_instance
from code_quality.core.config import AnalysisConfig
from code_quality.core.service import AnalysisService
from code_quality.model.analysis_result import AnalysisResult

RESULT_SCHEMA = "analysis_result.schema.json"

__all__ = [
    "RESULT_SCHEMA",
    "analyze_directory",
    "analyze_file",
    "analyze_path",
    "result_to_dict",
    "validate_instance",
]


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def _service(config: Optional[AnalysisConfig]) -> AnalysisService:
    return AnalysisService(config or AnalysisConfig.from_env())


def analyze_file(
    path: str | Path,
    *,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Analyze a single Java file.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    return _service(config).analyze_file(_to_path(path))


def analyze_directory(
    path: str | Path,
    *,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Analyze every Java file under a directory tree.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    return _service(config).analyze_directory(_to_path(path))


def analyze_path(
    path: str | Path,
    *,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Analyze *path*, dispatching on file vs directory."""
    path_p = _to_path(path)
    if not path_p.exists():
        raise FileNotFoundError(f"analyze_path: path does not exist: {path_p}")
    return _service(config).analyze_path(path_p)


def result_to_dict(result: AnalysisResult, *, validate: bool = True) -> dict[str, Any]:
    """Schema-aligned dict for *result*, validated unless told otherwise."""
    payload = result.to_dict()
    if validate:
        validate_instance(payload, RESULT_SCHEMA)
    return payload
