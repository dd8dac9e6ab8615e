"""
HTTP shell settings.

Server options come from ``CODE_QUALITY_API_*`` variables; analysis options
reuse ``AnalysisConfig.from_env`` so the CLI and the API read the same
``CODE_QUALITY_MAX_WORKERS`` / ``CODE_QUALITY_MAX_METHOD_LINES`` knobs.
"""
import os
from dataclasses import dataclass, field, replace
from typing import List, Mapping, Optional

from code_quality.core.config import AnalysisConfig

ENV_PREFIX = "CODE_QUALITY_API_"


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in ("true", "1", "yes")


def _as_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Server binding, CORS and docs switches for the API process"""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls()
        if f"{ENV_PREFIX}HOST" in env:
            settings = replace(settings, host=env[f"{ENV_PREFIX}HOST"])
        if f"{ENV_PREFIX}PORT" in env:
            settings = replace(settings, port=int(env[f"{ENV_PREFIX}PORT"]))
        if f"{ENV_PREFIX}DEBUG" in env:
            settings = replace(settings, debug=_as_bool(env[f"{ENV_PREFIX}DEBUG"]))
        if f"{ENV_PREFIX}CORS_ORIGINS" in env:
            settings = replace(
                settings, cors_origins=_as_list(env[f"{ENV_PREFIX}CORS_ORIGINS"])
            )
        return settings

    @staticmethod
    def analysis_config(max_method_lines: Optional[int] = None) -> AnalysisConfig:
        """Per-request analysis config; a request threshold beats the environment."""
        if max_method_lines is None:
            return AnalysisConfig.from_env()
        return AnalysisConfig.from_env(max_method_lines=max_method_lines)


settings = Settings.from_env()
