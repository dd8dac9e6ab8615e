"""Rule registry contract: buckets, ID format, and analyzer coverage."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from code_quality import rules
from code_quality.core.service import AnalysisService
from code_quality.model import AnalyzerType

FIXTURE_REPO = Path(__file__).resolve().parent / "fixtures" / "repos" / "java_mixed"

_PREFIX_TYPE = {
    "BUG": AnalyzerType.BUG,
    "VUL": AnalyzerType.VULNERABILITY,
    "PERF": AnalyzerType.PERFORMANCE,
    "STY": AnalyzerType.STYLE,
}


class TestRegistryInvariants:
    """The import-time checks hold and the buckets are well formed."""

    def test_buckets_sorted_unique_disjoint(self):
        for ids in (rules.PUBLIC_RULE_IDS, rules.EXPERIMENTAL_RULE_IDS, rules.DEPRECATED_RULE_IDS):
            assert ids == sorted(set(ids))
        assert not set(rules.PUBLIC_RULE_IDS) & set(rules.EXPERIMENTAL_RULE_IDS)

    def test_all_is_union(self):
        assert set(rules.ALL_RULE_IDS) == (
            set(rules.PUBLIC_RULE_IDS)
            | set(rules.EXPERIMENTAL_RULE_IDS)
            | set(rules.DEPRECATED_RULE_IDS)
        )

    @pytest.mark.parametrize("rule_id", rules.ALL_RULE_IDS)
    def test_id_format_and_known_prefix(self, rule_id):
        assert re.match(r"^[A-Z]{2,4}_[A-Z][A-Z0-9_]*_[0-9]{3}$", rule_id)
        assert rule_id.split("_", 1)[0] in _PREFIX_TYPE

    def test_magic_number_is_experimental(self):
        assert rules.STY_MAGIC_NUMBER_001 in rules.EXPERIMENTAL_RULE_IDS


def test_emitted_rule_ids_are_registered_and_typed():
    """Every issue carries a registered rule ID whose prefix matches its type."""
    result = AnalysisService().analyze_directory(FIXTURE_REPO)

    assert result.issues
    for issue in result.issues:
        assert issue.rule_id in rules.ALL_RULE_IDS
        assert _PREFIX_TYPE[issue.rule_id.split("_", 1)[0]] == issue.type
