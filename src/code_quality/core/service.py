"""Analysis service: runs every registered analyzer over parsed sources."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from code_quality.analyzers.bug import BugAnalyzer
from code_quality.analyzers.performance import PerformanceAnalyzer
from code_quality.analyzers.style import StyleAnalyzer
from code_quality.analyzers.vulnerability import VulnerabilityAnalyzer
from code_quality.core.config import AnalysisConfig
from code_quality.core.parser import JavaSourceParser, SourceUnit
from code_quality.model.analysis_result import AnalysisResult
from code_quality.model.issue import Issue

if TYPE_CHECKING:
    from code_quality.analyzers import Analyzer

_logger = logging.getLogger(__name__)


def default_analyzers(config: AnalysisConfig) -> list[Analyzer]:
    """The standard registry, in reporting order."""
    return [
        BugAnalyzer(),
        VulnerabilityAnalyzer(),
        PerformanceAnalyzer(),
        StyleAnalyzer(max_method_lines=config.max_method_lines),
    ]


class AnalysisService:
    """Parses sources and merges analyzer output into an ``AnalysisResult``.

    The analyzer list is fixed at construction.  Within one file issues
    appear in analyzer order; across files they follow the directory walk.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        analyzers: Sequence[Analyzer] | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.parser = JavaSourceParser(self.config)
        self.analyzers: tuple[Analyzer, ...] = tuple(
            analyzers if analyzers is not None else default_analyzers(self.config)
        )

    def analyze_unit(self, unit: SourceUnit) -> list[Issue]:
        """Run every analyzer over *unit*.

        An analyzer that raises is logged and contributes nothing for this
        unit; the remaining analyzers still run.
        """
        issues: list[Issue] = []
        if unit.tree is None:
            return issues
        for analyzer in self.analyzers:
            analyzer_id = getattr(analyzer, "id", type(analyzer).__name__)
            try:
                issues.extend(analyzer.analyze(unit))
            except Exception:
                _logger.exception(
                    "Analyzer '%s' raised on %s; skipped", analyzer_id, unit.path
                )
        return issues

    def analyze_file(self, path: Path | str) -> AnalysisResult:
        """Analyze one file.

        Raises ``FileNotFoundError`` for a missing path.  A non-Java file or
        one that fails to parse yields an empty result.
        """
        unit = self.parser.load(Path(path))
        return AnalysisResult(
            issues=self.analyze_unit(unit),
            files_analyzed=1 if unit.tree is not None else 0,
        )

    def analyze_directory(self, path: Path | str) -> AnalysisResult:
        """Analyze every Java file under *path*.

        Raises ``FileNotFoundError`` for a missing directory.  Files that do
        not parse are skipped.
        """
        workers = self.config.max_workers
        units = self.parser.walk(Path(path), max_workers=workers)
        _logger.info("Analyzing %d file(s) under %s", len(units), path)

        if workers > 1 and len(units) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                per_unit = list(pool.map(self.analyze_unit, units))
        else:
            per_unit = [self.analyze_unit(unit) for unit in units]

        result = AnalysisResult(files_analyzed=len(units))
        for issues in per_unit:
            result.issues.extend(issues)
        return result

    def analyze_path(self, path: Path | str) -> AnalysisResult:
        """Dispatch to ``analyze_directory`` or ``analyze_file``."""
        path = Path(path)
        if path.is_dir():
            return self.analyze_directory(path)
        return self.analyze_file(path)
