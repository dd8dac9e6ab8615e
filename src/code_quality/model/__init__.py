"""Enums shared across the parser, analyzer and reporting layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Descriptor:
    """Display metadata attached to an enum member."""

    name: str
    description: str


class Severity(str, Enum):
    """Issue severity, declared from most to least urgent."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def display_name(self) -> str:
        return _SEVERITY_DESCRIPTORS[self].name

    @property
    def description(self) -> str:
        return _SEVERITY_DESCRIPTORS[self].description

    @property
    def rank(self) -> int:
        """Higher is more urgent (CRITICAL=4 … INFO=0)."""
        return len(SEVERITY_ORDER) - 1 - SEVERITY_ORDER.index(self)


class AnalyzerType(str, Enum):
    """Issue category: one per registered analyzer."""

    BUG = "bug"
    VULNERABILITY = "vulnerability"
    PERFORMANCE = "performance"
    STYLE = "style"

    @property
    def display_name(self) -> str:
        return _TYPE_DESCRIPTORS[self].name

    @property
    def description(self) -> str:
        return _TYPE_DESCRIPTORS[self].description


SEVERITY_ORDER: tuple[Severity, ...] = tuple(Severity)
TYPE_ORDER: tuple[AnalyzerType, ...] = tuple(AnalyzerType)

_SEVERITY_DESCRIPTORS: dict[Severity, Descriptor] = {
    Severity.CRITICAL: Descriptor("Critical", "Must be fixed immediately"),
    Severity.HIGH: Descriptor("High", "Should be fixed soon"),
    Severity.MEDIUM: Descriptor("Medium", "Should be fixed"),
    Severity.LOW: Descriptor("Low", "Consider fixing"),
    Severity.INFO: Descriptor("Info", "Informational only"),
}

_TYPE_DESCRIPTORS: dict[AnalyzerType, Descriptor] = {
    AnalyzerType.BUG: Descriptor("Bug", "Identifies potential bugs and logical errors"),
    AnalyzerType.VULNERABILITY: Descriptor("Vulnerability", "Identifies security vulnerabilities"),
    AnalyzerType.PERFORMANCE: Descriptor("Performance", "Identifies performance issues"),
    AnalyzerType.STYLE: Descriptor("Style", "Identifies coding style issues"),
}
