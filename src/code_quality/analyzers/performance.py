"""Performance analyzer: loop and collection inefficiencies."""

from __future__ import annotations

from code_quality.core.parser import ParsedTree, SourceUnit
from code_quality.model import AnalyzerType, Severity
from code_quality.model.issue import Issue
from code_quality.rules import (
    PERF_ARRAYLIST_CAPACITY_001,
    PERF_BOXING_LOOP_001,
    PERF_FOREACH_REMOVE_001,
    PERF_LOOP_SIZE_CALL_001,
    PERF_STRING_CONCAT_LOOP_001,
)

_TYPE_DECLARATIONS = ("class_declaration", "interface_declaration")
_FIELD_DECLARATIONS = frozenset({"field_declaration", "constant_declaration"})
_WRAPPER_TYPES = ("Integer", "Double", "Long", "Float", "Boolean")


def _mentions_loop(text: str) -> bool:
    return "for" in text or "while" in text


class PerformanceAnalyzer:
    """Finds performance problems.

    Rules:
      PERF_STRING_CONCAT_LOOP_001: ``String`` built with ``+=`` in a looping body
      PERF_LOOP_SIZE_CALL_001: ``.size()`` evaluated in a ``for`` condition
      PERF_FOREACH_REMOVE_001: ``.remove(`` inside an enhanced ``for``
      PERF_ARRAYLIST_CAPACITY_001: ``ArrayList`` field without an initializer
      PERF_BOXING_LOOP_001: wrapper types used in a looping body
    """

    id: str = "performance"
    version: str = "1.0.0"
    type: AnalyzerType = AnalyzerType.PERFORMANCE

    def analyze(self, unit: SourceUnit) -> list[Issue]:
        tree = unit.tree
        if tree is None:
            return []

        issues: list[Issue] = []
        issues.extend(self._check_string_concatenation(unit, tree))
        issues.extend(self._check_loop_conditions(unit, tree))
        issues.extend(self._check_foreach_removal(unit, tree))
        issues.extend(self._check_collection_fields(unit, tree))
        issues.extend(self._check_boxing(unit, tree))
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

    def _method_bodies(self, tree: ParsedTree):
        for method in tree.find_all("method_declaration"):
            body = tree.body_of(method)
            if body is not None:
                yield method, tree.render(body)

    def _check_string_concatenation(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for method, body in self._method_bodies(tree):
            if _mentions_loop(body) and "+=" in body and "String" in body:
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    "Inefficient string concatenation in loop. "
                    f"Consider using StringBuilder: {tree.name_of(method)}",
                    Severity.MEDIUM,
                    PERF_STRING_CONCAT_LOOP_001,
                ))
        return issues

    def _check_loop_conditions(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for loop in tree.find_all("for_statement", postorder=True):
            condition = tree.field_of(loop, "condition")
            if condition is not None and ".size()" in tree.render(condition):
                issues.append(self._issue(
                    unit,
                    tree.line_of(loop),
                    "Inefficient loop: Collection size() called in loop condition. "
                    "Store size in a variable before the loop.",
                    Severity.LOW,
                    PERF_LOOP_SIZE_CALL_001,
                ))
        return issues

    def _check_foreach_removal(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for loop in tree.find_all("enhanced_for_statement", postorder=True):
            if ".remove(" in tree.render(tree.body_of(loop)):
                issues.append(self._issue(
                    unit,
                    tree.line_of(loop),
                    "Inefficient collection modification: Removing elements during "
                    "foreach loop can cause ConcurrentModificationException. "
                    "Use Iterator.remove() instead.",
                    Severity.MEDIUM,
                    PERF_FOREACH_REMOVE_001,
                ))
        return issues

    def _check_collection_fields(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for declaration in tree.find_all(*_TYPE_DECLARATIONS):
            body = tree.body_of(declaration)
            if body is None:
                continue
            for member in body.named_children:
                if member.type not in _FIELD_DECLARATIONS:
                    continue
                declarators = tree.field_names(member)
                if not declarators:
                    continue
                first, _name = declarators[0]
                declared_type = tree.render(tree.field_of(member, "type"))
                if "ArrayList" in declared_type and tree.field_of(first, "value") is None:
                    issues.append(self._issue(
                        unit,
                        tree.line_of(member),
                        "Consider initializing ArrayList with an initial capacity "
                        "if the size is known.",
                        Severity.LOW,
                        PERF_ARRAYLIST_CAPACITY_001,
                    ))
        return issues

    def _check_boxing(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for method, body in self._method_bodies(tree):
            if any(t in body for t in _WRAPPER_TYPES) and _mentions_loop(body):
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Method may have boxing/unboxing overhead in loops: {tree.name_of(method)}",
                    Severity.LOW,
                    PERF_BOXING_LOOP_001,
                ))
        return issues
