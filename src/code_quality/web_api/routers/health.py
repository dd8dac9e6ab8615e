"""
Health Check Router
==================
Endpoints for health checks and readiness probes.
"""
from fastapi import APIRouter

from code_quality import __version__
from code_quality.core.parser import JavaSourceParser, ParseError

router = APIRouter()

_PROBE_SOURCE = b"class Probe {}\n"


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK if the service is running.
    """
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check():
    """
    Readiness check endpoint.
    Returns OK once the Java grammar can parse a trivial unit.
    """
    try:
        JavaSourceParser().parse_bytes(_PROBE_SOURCE, "<probe>")
    except ParseError:
        return {"status": "unavailable"}
    return {"status": "ready", "language": "java"}
