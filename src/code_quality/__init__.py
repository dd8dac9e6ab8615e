"""code_quality: rule-based quality analysis for Java sources."""

__all__ = [
    "__version__",
    "analyze_file",
    "analyze_directory",
    "analyze_path",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic engine entrypoints (shell use).
from code_quality.api import (  # noqa: E402, F401
    analyze_directory,
    analyze_file,
    analyze_path,
    validate_instance,
)
