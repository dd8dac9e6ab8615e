"""File discovery: find Java sources in canonical walk order."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from code_quality.core.config import AnalysisConfig


def is_source_file(path: Path, cfg: AnalysisConfig) -> bool:
    """True when *path* carries one of the analyzed extensions."""
    return path.suffix.lower() in cfg.extensions


def iter_source_files(root: Path, cfg: AnalysisConfig | None = None) -> Iterator[Path]:
    """Yield source files under *root*, depth-first.

    Entries of each directory are visited in lexicographic order and a
    subdirectory is expanded where it sorts, so the sequence is stable for
    an unchanged tree.
    """
    cfg = cfg or AnalysisConfig()
    if not root.is_dir():
        return
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError:
        return
    for entry in entries:
        if entry.is_symlink() and not cfg.follow_symlinks:
            continue
        if entry.is_dir():
            if entry.name in cfg.ignore_dirs:
                continue
            yield from iter_source_files(entry, cfg)
        elif entry.is_file() and is_source_file(entry, cfg):
            yield entry
