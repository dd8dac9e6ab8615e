"""Canonical rule ID registry.

Single source of truth for every rule ID carried on an ``Issue``.

Structure:
  PUBLIC_RULE_IDS       - stable, supported, safe for downstream consumption
  EXPERIMENTAL_RULE_IDS - unstable, may change or be removed
  DEPRECATED_RULE_IDS   - scheduled for removal, do not add new usage
  ALL_RULE_IDS          - union of all buckets (internal use only)
"""

from __future__ import annotations

# ── Bug (public) ────────────────────────────────────────────────────
BUG_NULL_DEREF_001 = "BUG_NULL_DEREF_001"
BUG_INFINITE_LOOP_001 = "BUG_INFINITE_LOOP_001"
BUG_EMPTY_CATCH_001 = "BUG_EMPTY_CATCH_001"
BUG_REF_EQUALITY_001 = "BUG_REF_EQUALITY_001"

# ── Performance (public) ────────────────────────────────────────────
PERF_STRING_CONCAT_LOOP_001 = "PERF_STRING_CONCAT_LOOP_001"
PERF_LOOP_SIZE_CALL_001 = "PERF_LOOP_SIZE_CALL_001"
PERF_FOREACH_REMOVE_001 = "PERF_FOREACH_REMOVE_001"
PERF_ARRAYLIST_CAPACITY_001 = "PERF_ARRAYLIST_CAPACITY_001"
PERF_BOXING_LOOP_001 = "PERF_BOXING_LOOP_001"

# ── Style (public) ──────────────────────────────────────────────────
STY_CLASS_NAME_001 = "STY_CLASS_NAME_001"
STY_METHOD_NAME_001 = "STY_METHOD_NAME_001"
STY_FIELD_NAME_001 = "STY_FIELD_NAME_001"
STY_CONSTANT_NAME_001 = "STY_CONSTANT_NAME_001"
STY_CLASS_JAVADOC_001 = "STY_CLASS_JAVADOC_001"
STY_METHOD_JAVADOC_001 = "STY_METHOD_JAVADOC_001"
STY_LONG_METHOD_001 = "STY_LONG_METHOD_001"

# ── Style (experimental) ────────────────────────────────────────────
STY_MAGIC_NUMBER_001 = "STY_MAGIC_NUMBER_001"

# ── Vulnerability (public) ──────────────────────────────────────────
VUL_SQL_INJECTION_001 = "VUL_SQL_INJECTION_001"
VUL_COMMAND_INJECTION_001 = "VUL_COMMAND_INJECTION_001"
VUL_XSS_001 = "VUL_XSS_001"
VUL_PATH_TRAVERSAL_001 = "VUL_PATH_TRAVERSAL_001"
VUL_HARDCODED_SECRET_001 = "VUL_HARDCODED_SECRET_001"
VUL_WEAK_CRYPTO_001 = "VUL_WEAK_CRYPTO_001"
VUL_INSECURE_RANDOM_001 = "VUL_INSECURE_RANDOM_001"
VUL_UNSAFE_DESERIALIZATION_001 = "VUL_UNSAFE_DESERIALIZATION_001"

# ── Buckets ─────────────────────────────────────────────────────────

PUBLIC_RULE_IDS: list[str] = sorted([
    # Bug
    BUG_NULL_DEREF_001,
    BUG_INFINITE_LOOP_001,
    BUG_EMPTY_CATCH_001,
    BUG_REF_EQUALITY_001,
    # Performance
    PERF_STRING_CONCAT_LOOP_001,
    PERF_LOOP_SIZE_CALL_001,
    PERF_FOREACH_REMOVE_001,
    PERF_ARRAYLIST_CAPACITY_001,
    PERF_BOXING_LOOP_001,
    # Style
    STY_CLASS_NAME_001,
    STY_METHOD_NAME_001,
    STY_FIELD_NAME_001,
    STY_CONSTANT_NAME_001,
    STY_CLASS_JAVADOC_001,
    STY_METHOD_JAVADOC_001,
    STY_LONG_METHOD_001,
    # Vulnerability
    VUL_SQL_INJECTION_001,
    VUL_COMMAND_INJECTION_001,
    VUL_XSS_001,
    VUL_PATH_TRAVERSAL_001,
    VUL_HARDCODED_SECRET_001,
    VUL_WEAK_CRYPTO_001,
    VUL_INSECURE_RANDOM_001,
    VUL_UNSAFE_DESERIALIZATION_001,
])

EXPERIMENTAL_RULE_IDS: list[str] = sorted([
    # Matches identifier nodes only, so it stays silent on real sources.
    STY_MAGIC_NUMBER_001,
])

DEPRECATED_RULE_IDS: list[str] = sorted([
    # Add deprecated rules here before removal
])

# Union of all buckets (internal use only)
ALL_RULE_IDS: list[str] = sorted(set(
    PUBLIC_RULE_IDS
    + EXPERIMENTAL_RULE_IDS
    + DEPRECATED_RULE_IDS
))


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    # Multi-segment IDs like PERF_STRING_CONCAT_LOOP_001
    rule_re = re.compile(r"^[A-Z]{2,4}_[A-Z][A-Z0-9_]*_[0-9]{3}$")

    def _check_bucket(name: str, ids: list[str]) -> None:
        if ids != sorted(ids):
            raise AssertionError(f"{name} must be sorted")
        if len(ids) != len(set(ids)):
            raise AssertionError(f"{name} must contain unique IDs")
        bad = [x for x in ids if not rule_re.match(x)]
        if bad:
            raise AssertionError(f"{name} contains invalid rule IDs: {bad}")

    _check_bucket("PUBLIC_RULE_IDS", PUBLIC_RULE_IDS)
    _check_bucket("EXPERIMENTAL_RULE_IDS", EXPERIMENTAL_RULE_IDS)
    _check_bucket("DEPRECATED_RULE_IDS", DEPRECATED_RULE_IDS)
    _check_bucket("ALL_RULE_IDS", ALL_RULE_IDS)

    pub = set(PUBLIC_RULE_IDS)
    exp = set(EXPERIMENTAL_RULE_IDS)
    dep = set(DEPRECATED_RULE_IDS)
    overlap = (pub & exp) | (pub & dep) | (exp & dep)
    if overlap:
        raise AssertionError(
            f"Rule ID buckets must be disjoint; overlaps: {sorted(overlap)}"
        )

    union = pub | exp | dep
    if set(ALL_RULE_IDS) != union:
        raise AssertionError(
            "ALL_RULE_IDS must equal union(PUBLIC, EXPERIMENTAL, DEPRECATED)"
        )


_assert_rule_registry_invariants()
