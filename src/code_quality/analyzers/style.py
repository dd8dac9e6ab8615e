"""Style analyzer: naming conventions, Javadoc and method length."""

from __future__ import annotations

import re

from code_quality.core.parser import ParsedTree, SourceUnit
from code_quality.model import AnalyzerType, Severity
from code_quality.model.issue import Issue
from code_quality.rules import (
    STY_CLASS_JAVADOC_001,
    STY_CLASS_NAME_001,
    STY_CONSTANT_NAME_001,
    STY_FIELD_NAME_001,
    STY_LONG_METHOD_001,
    STY_MAGIC_NUMBER_001,
    STY_METHOD_JAVADOC_001,
    STY_METHOD_NAME_001,
)

CLASS_PATTERN = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
METHOD_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*$")
VARIABLE_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*$")
CONSTANT_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")

DEFAULT_MAX_METHOD_LINES = 30

_TYPE_DECLARATIONS = ("class_declaration", "interface_declaration")
_FIELD_DECLARATIONS = ("field_declaration", "constant_declaration")
_DIGITS = re.compile(r"\d+")


class StyleAnalyzer:
    """Finds coding style issues.

    Rules:
      STY_CLASS_NAME_001: class/interface name is not PascalCase
      STY_METHOD_NAME_001: method name is not camelCase
      STY_FIELD_NAME_001: field name is not camelCase
      STY_CONSTANT_NAME_001: ``static final`` field is not UPPER_CASE
      STY_CLASS_JAVADOC_001: class/interface without ``/** */``
      STY_METHOD_JAVADOC_001: ``public`` method without ``/** */``
      STY_LONG_METHOD_001: body longer than ``max_method_lines`` lines
      STY_MAGIC_NUMBER_001: numeric identifier other than 0/1
    """

    id: str = "style"
    version: str = "1.0.0"
    type: AnalyzerType = AnalyzerType.STYLE

    def __init__(self, max_method_lines: int = DEFAULT_MAX_METHOD_LINES) -> None:
        self.max_method_lines = max_method_lines

    def analyze(self, unit: SourceUnit) -> list[Issue]:
        tree = unit.tree
        if tree is None:
            return []

        issues: list[Issue] = []
        issues.extend(self._check_naming_conventions(unit, tree))
        issues.extend(self._check_missing_javadoc(unit, tree))
        issues.extend(self._check_long_methods(unit, tree))
        issues.extend(self._check_magic_numbers(unit, tree))
        return issues

    def _issue(
        self,
        unit: SourceUnit,
        line: int,
        message: str,
        rule_id: str,
        severity: Severity = Severity.LOW,
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

    # ── naming ──────────────────────────────────────────────────────

    def _check_naming_conventions(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []

        for declaration in tree.find_all(*_TYPE_DECLARATIONS):
            name = tree.name_of(declaration)
            if not CLASS_PATTERN.match(name):
                issues.append(self._issue(
                    unit,
                    tree.line_of(declaration),
                    f"Class name '{name}' does not follow the PascalCase naming convention",
                    STY_CLASS_NAME_001,
                ))

        for method in tree.find_all("method_declaration"):
            name = tree.name_of(method)
            if not METHOD_PATTERN.match(name):
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Method name '{name}' does not follow the camelCase naming convention",
                    STY_METHOD_NAME_001,
                ))

        for field in tree.find_all(*_FIELD_DECLARATIONS):
            issues.extend(self._check_field_names(unit, tree, field))

        return issues

    def _check_field_names(self, unit: SourceUnit, tree: ParsedTree, field) -> list[Issue]:
        # Only written modifiers count, so implicit interface constants do not.
        is_constant = {"static", "final"} <= tree.modifiers_of(field)

        issues: list[Issue] = []
        line = tree.line_of(field)
        for _declarator, name in tree.field_names(field):
            if is_constant:
                if not CONSTANT_PATTERN.match(name):
                    issues.append(self._issue(
                        unit,
                        line,
                        f"Constant '{name}' does not follow the UPPER_CASE naming convention",
                        STY_CONSTANT_NAME_001,
                    ))
            elif not VARIABLE_PATTERN.match(name):
                issues.append(self._issue(
                    unit,
                    line,
                    f"Field '{name}' does not follow the camelCase naming convention",
                    STY_FIELD_NAME_001,
                ))
        return issues

    # ── documentation ───────────────────────────────────────────────

    def _check_missing_javadoc(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []

        for declaration in tree.find_all(*_TYPE_DECLARATIONS):
            if tree.doc_comment(declaration) is None:
                issues.append(self._issue(
                    unit,
                    tree.line_of(declaration),
                    f"Class '{tree.name_of(declaration)}' is missing Javadoc comment",
                    STY_CLASS_JAVADOC_001,
                ))

        for method in tree.find_all("method_declaration"):
            if "public" not in tree.modifiers_of(method):
                continue
            if tree.doc_comment(method) is None:
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Public method '{tree.name_of(method)}' is missing Javadoc comment",
                    STY_METHOD_JAVADOC_001,
                ))

        return issues

    # ── size ────────────────────────────────────────────────────────

    def _check_long_methods(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for method in tree.find_all("method_declaration"):
            body = tree.body_of(method)
            if body is None:
                continue
            line_count = len(tree.render(body).split("\n"))
            if line_count > self.max_method_lines:
                issues.append(self._issue(
                    unit,
                    tree.line_of(method),
                    f"Method '{tree.name_of(method)}' is too long ({line_count} lines). "
                    "Consider refactoring.",
                    STY_LONG_METHOD_001,
                    Severity.MEDIUM,
                ))
        return issues

    # ── literals ────────────────────────────────────────────────────

    def _check_magic_numbers(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        # Looks at identifier nodes, never at numeric literals.
        issues: list[Issue] = []
        for node in tree.find_all("identifier", postorder=True):
            text = tree.render(node)
            if _DIGITS.fullmatch(text) and text not in ("0", "1"):
                issues.append(self._issue(
                    unit,
                    tree.line_of(node),
                    f"Magic number '{text}' found. Consider using a named constant.",
                    STY_MAGIC_NUMBER_001,
                ))
        return issues
