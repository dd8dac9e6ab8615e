"""Reports: human and machine renderings of an analysis result."""

from code_quality.reports.exporters import EXPORT_FORMATS, export_result

__all__ = [
    "EXPORT_FORMATS",
    "export_result",
]
