"""
Analyze Schemas
===============
Request and response models for analysis endpoints.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Request to analyze a Java file or directory"""

    path: str = Field(..., description="Local path to a .java file or a directory")
    max_method_lines: Optional[int] = Field(
        default=None, ge=1, description="Override the long-method threshold"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "path": "/path/to/project/src/main/java",
            }
        }


class IssueModel(BaseModel):
    """One reported issue"""

    file_name: str
    path: str
    line_number: int
    message: str
    type: str
    severity: str
    rule_id: str = ""


class AnalyzeSummary(BaseModel):
    """Counts for an analysis run"""

    files_analyzed: int = Field(default=0)
    total_issues: int = Field(default=0)
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_severity: Dict[str, int] = Field(default_factory=dict)


class AnalyzeResponse(BaseModel):
    """Response from an analyze operation"""

    status: str = Field(..., description="Analysis status: complete or failed")
    summary: AnalyzeSummary
    summary_text: str = Field(default="", description="Plain-text summary report")
    recommendations: str = Field(default="", description="Plain-text recommendations")
    issues: List[IssueModel] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "complete",
                "summary": {
                    "files_analyzed": 3,
                    "total_issues": 2,
                    "by_type": {"bug": 1, "vulnerability": 0, "performance": 0, "style": 1},
                    "by_severity": {"critical": 0, "high": 1, "medium": 0, "low": 1, "info": 0},
                },
                "issues": [],
            }
        }
