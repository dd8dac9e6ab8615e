"""
Code Quality Web API
====================
FastAPI-based REST API for Java code analysis.

Quick Start:
    uvicorn code_quality.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
