"""
Analyze Router
==============
Endpoints for running Java code analysis.
"""
from pathlib import Path

from fastapi import APIRouter, HTTPException

from code_quality import api as core_api
from code_quality.web_api.config import Settings
from code_quality.web_api.schemas.analyze import (
    AnalyzeRequest,
    AnalyzeResponse,
    AnalyzeSummary,
)

router = APIRouter()


@router.post("/", response_model=AnalyzeResponse)
def run_analysis(request: AnalyzeRequest):
    """
    Analyze a Java file or directory tree.

    - **path**: Local path to analyze
    - **max_method_lines**: Optional long-method threshold
    """
    target = Path(request.path)
    if not target.exists():
        raise HTTPException(status_code=404, detail=f"Path not found: {request.path}")

    config = Settings.analysis_config(request.max_method_lines)

    try:
        result = core_api.analyze_path(target, config=config)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    payload = result.to_dict()
    summary = payload["summary"]
    return AnalyzeResponse(
        status="complete",
        summary=AnalyzeSummary(
            files_analyzed=summary["files_analyzed"],
            total_issues=summary["total_issues"],
            by_type=summary["by_type"],
            by_severity=summary["by_severity"],
        ),
        summary_text=result.summary(),
        recommendations=result.recommendations(),
        issues=payload["issues"],
    )
