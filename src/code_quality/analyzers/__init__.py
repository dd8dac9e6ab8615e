"""Analyzers turn one parsed source unit into a list of issues.

Every analyzer satisfies the ``Analyzer`` protocol: it exposes ``id``,
``version`` and ``type`` and implements ``analyze(unit) -> list[Issue]``.
Analyzers are stateless; a unit without a tree yields no issues.

Available analyzers:
    - BugAnalyzer: null dereference, infinite loops, empty catch, ``==`` misuse
    - VulnerabilityAnalyzer: injection, secrets, weak crypto and friends
    - PerformanceAnalyzer: loop and collection inefficiencies
    - StyleAnalyzer: naming, Javadoc, long methods
"""

from __future__ import annotations

from typing import Protocol

from code_quality.core.parser import SourceUnit
from code_quality.model import AnalyzerType
from code_quality.model.issue import Issue


class Analyzer(Protocol):
    """Every analyzer must expose ``id``, ``version``, ``type`` and ``analyze()``."""

    id: str
    version: str
    type: AnalyzerType

    def analyze(self, unit: SourceUnit) -> list[Issue]:
        """Return the issues found in *unit*, in detection order."""
        ...


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "BugAnalyzer":
        from .bug import BugAnalyzer
        return BugAnalyzer
    if name == "PerformanceAnalyzer":
        from .performance import PerformanceAnalyzer
        return PerformanceAnalyzer
    if name == "StyleAnalyzer":
        from .style import StyleAnalyzer
        return StyleAnalyzer
    if name == "VulnerabilityAnalyzer":
        from .vulnerability import VulnerabilityAnalyzer
        return VulnerabilityAnalyzer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
