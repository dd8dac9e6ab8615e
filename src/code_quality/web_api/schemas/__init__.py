"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .analyze import AnalyzeRequest, AnalyzeResponse, AnalyzeSummary, IssueModel

__all__ = ["AnalyzeRequest", "AnalyzeResponse", "AnalyzeSummary", "IssueModel"]
