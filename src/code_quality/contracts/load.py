"""Load and validate JSON instances against the bundled schemas.

Usage::

    from code_quality.contracts.load import validate_instance, validate_file

    validate_instance(result.to_dict(), "analysis_result.schema.json")
    validate_file(Path("out/result.json"), "analysis_result.schema.json")
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"

# schema file -> the schema_version an instance must declare
_EXPECTED_VERSIONS = {
    "analysis_result.schema.json": "analysis_result_v1",
}


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/code_quality/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("code_quality") / SCHEMA_DIR / name) as p:
        if not p.exists():
            raise FileNotFoundError(f"Unknown schema: {name}")
        return p


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)


def validate_file(instance_path: Path, schema_name: str) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))

    # Readable error before the generic jsonschema traceback.
    expected = _EXPECTED_VERSIONS.get(schema_name)
    if expected is not None and isinstance(instance, dict):
        sv = instance.get("schema_version")
        if sv != expected:
            raise ValueError(
                f"{instance_path}: expected schema_version={expected!r}, got {sv!r}"
            )

    validate_instance(instance, schema_name)
