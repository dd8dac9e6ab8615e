"""Analysis configuration dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

# Version-control metadata never holds analyzable sources.
_DEFAULT_IGNORE_DIRS = frozenset({".git", ".hg", ".svn"})


@dataclass(frozen=True)
class AnalysisConfig:
    """Immutable analysis configuration.

    ``max_workers`` bounds the thread pool used for directory analysis;
    ``1`` keeps everything on the calling thread.
    """

    extensions: tuple[str, ...] = (".java",)
    ignore_dirs: frozenset[str] = _DEFAULT_IGNORE_DIRS
    follow_symlinks: bool = False
    max_workers: int = 1
    max_method_lines: int = 30

    @classmethod
    def from_env(cls, **overrides) -> AnalysisConfig:
        """Build a config, letting ``CODE_QUALITY_*`` variables override defaults."""
        config = cls(**overrides)
        workers = os.environ.get("CODE_QUALITY_MAX_WORKERS", "")
        if workers and "max_workers" not in overrides:
            config = replace(config, max_workers=max(1, int(workers)))
        method_lines = os.environ.get("CODE_QUALITY_MAX_METHOD_LINES", "")
        if method_lines and "max_method_lines" not in overrides:
            config = replace(config, max_method_lines=int(method_lines))
        return config
