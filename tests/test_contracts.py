"""Schema loading and validation of analysis results."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from code_quality.api import RESULT_SCHEMA, result_to_dict
from code_quality.contracts.load import load_schema, validate_file, validate_instance
from code_quality.core.service import AnalysisService

FIXTURE_REPO = Path(__file__).resolve().parent / "fixtures" / "repos" / "java_mixed"


@pytest.fixture(scope="module")
def payload():
    return result_to_dict(AnalysisService().analyze_directory(FIXTURE_REPO))


def test_schema_is_bundled():
    schema = load_schema(RESULT_SCHEMA)
    assert schema["properties"]["schema_version"]["const"] == "analysis_result_v1"


def test_real_result_validates(payload):
    validate_instance(payload, RESULT_SCHEMA)
    assert payload["summary"]["total_issues"] == len(payload["issues"])


def test_bad_severity_rejected(payload):
    broken = json.loads(json.dumps(payload))
    broken["issues"][0]["severity"] = "catastrophic"
    with pytest.raises(jsonschema.ValidationError):
        validate_instance(broken, RESULT_SCHEMA)


def test_validate_file_checks_schema_version(tmp_path, payload):
    doc = dict(payload, schema_version="analysis_result_v0")
    path = tmp_path / "result.json"
    path.write_text(json.dumps(doc), encoding="utf-8")

    with pytest.raises(ValueError, match="schema_version"):
        validate_file(path, RESULT_SCHEMA)


def test_unknown_schema(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema("nope.schema.json")
