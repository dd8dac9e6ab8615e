"""Bug analyzer: textual heuristics for likely logic errors."""

from __future__ import annotations

import re

from code_quality.core.parser import ParsedTree, SourceUnit
from code_quality.model import AnalyzerType, Severity
from code_quality.model.issue import Issue
from code_quality.rules import (
    BUG_EMPTY_CATCH_001,
    BUG_INFINITE_LOOP_001,
    BUG_NULL_DEREF_001,
    BUG_REF_EQUALITY_001,
)

_DIGITS = re.compile(r"\d+")
_EQUALITY_OPERATORS = frozenset({"==", "!="})


def _is_null_or_number(text: str) -> bool:
    return text == "null" or _DIGITS.fullmatch(text) is not None


class BugAnalyzer:
    """Finds potential bugs.

    Rules:
      BUG_NULL_DEREF_001: member access in a method that never mentions null
      BUG_INFINITE_LOOP_001: ``while(true)`` / ``while (true)`` in a body
      BUG_EMPTY_CATCH_001: body contains ``catch`` and ``{}``
      BUG_REF_EQUALITY_001: ``==`` / ``!=`` between non-null, non-numeric operands
    """

    id: str = "bug"
    version: str = "1.0.0"
    type: AnalyzerType = AnalyzerType.BUG

    def analyze(self, unit: SourceUnit) -> list[Issue]:
        tree = unit.tree
        if tree is None:
            return []

        issues: list[Issue] = []
        issues.extend(self._check_null_dereferences(unit, tree))
        issues.extend(self._check_infinite_loops(unit, tree))
        issues.extend(self._check_empty_catch_blocks(unit, tree))
        issues.extend(self._check_equality_comparisons(unit, tree))
        return issues

    def _issue(
        self,
        unit: SourceUnit,
        line: int,
        message: str,
        severity: Severity,
        rule_id: str,
    ) -> Issue:
        return Issue(
            file_name=unit.file_name,
            line_number=line,
            message=message,
            type=self.type,
            severity=severity,
            rule_id=rule_id,
            path=str(unit.path),
        )

    def _check_null_dereferences(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for method in tree.find_all("method_declaration"):
            body = tree.body_of(method)
            if body is None:
                continue
            method_text = tree.render(tree.attached_comment(method)) + tree.render(method)
            if "." in tree.render(body) and "null" not in method_text:
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Method might contain null pointer dereference: {tree.name_of(method)}",
                    Severity.HIGH,
                    BUG_NULL_DEREF_001,
                ))
        return issues

    def _check_infinite_loops(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for method in tree.find_all("method_declaration"):
            body = tree.body_of(method)
            if body is None:
                continue
            text = tree.render(body)
            if "while(true)" in text or "while (true)" in text:
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Method contains a potential infinite loop: {tree.name_of(method)}",
                    Severity.MEDIUM,
                    BUG_INFINITE_LOOP_001,
                ))
        return issues

    def _check_empty_catch_blocks(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        # The two tokens need not belong to the same block.
        issues: list[Issue] = []
        for method in tree.find_all("method_declaration"):
            body = tree.body_of(method)
            if body is None:
                continue
            text = tree.render(body)
            if "catch" in text and "{}" in text:
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Method contains empty catch block: {tree.name_of(method)}",
                    Severity.MEDIUM,
                    BUG_EMPTY_CATCH_001,
                ))
        return issues

    def _check_equality_comparisons(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for expr in tree.find_all("binary_expression", postorder=True):
            operator = tree.render(tree.field_of(expr, "operator"))
            if operator not in _EQUALITY_OPERATORS:
                continue
            left = tree.render(tree.field_of(expr, "left"))
            right = tree.render(tree.field_of(expr, "right"))
            if _is_null_or_number(left) or _is_null_or_number(right):
                continue
            issues.append(self._issue(
                unit,
                tree.line_of(expr),
                "Possible incorrect equality comparison. "
                f"Consider using .equals() instead of {operator}",
                Severity.HIGH,
                BUG_REF_EQUALITY_001,
            ))
        return issues
