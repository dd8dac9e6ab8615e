"""Vulnerability analyzer: detects common security anti-patterns in Java.

Single-file, text-level checks in the same shape as the other analyzers:
visit nodes of one kind, test their rendered text, emit an issue.
"""

from __future__ import annotations

import re
from typing import Optional

from tree_sitter import Node

from code_quality.core.parser import ParsedTree, SourceUnit
from code_quality.model import AnalyzerType, Severity
from code_quality.model.issue import Issue
from code_quality.rules import (
    VUL_COMMAND_INJECTION_001,
    VUL_HARDCODED_SECRET_001,
    VUL_INSECURE_RANDOM_001,
    VUL_PATH_TRAVERSAL_001,
    VUL_SQL_INJECTION_001,
    VUL_UNSAFE_DESERIALIZATION_001,
    VUL_WEAK_CRYPTO_001,
    VUL_XSS_001,
)

# ── SQL ─────────────────────────────────────────────────────────────

_SQL_KEYWORDS = re.compile(
    r"\b(select|insert|update|delete|drop|alter|create|union|where|exec)\b",
    re.IGNORECASE,
)

_LITERAL_TYPES = frozenset({
    "string_literal",
    "character_literal",
    "decimal_integer_literal",
    "hex_integer_literal",
    "octal_integer_literal",
    "binary_integer_literal",
    "decimal_floating_point_literal",
    "hex_floating_point_literal",
    "true",
    "false",
    "null_literal",
})

# ── request-controlled input ────────────────────────────────────────

_REQUEST_SOURCES = ("getParameter(", "getHeader(", "getQueryString(")
_PATH_SOURCES = _REQUEST_SOURCES + ("getPathInfo(", "getRequestURI(")

_OUTPUT_METHODS = frozenset({"print", "println", "write", "append"})
_FILE_TYPES = frozenset({
    "File", "FileInputStream", "FileOutputStream", "FileReader", "FileWriter",
})

# ── secrets ─────────────────────────────────────────────────────────

# Common secret variable names (case-insensitive, camelCase or snake_case)
_SECRET_VAR_PATTERNS = re.compile(
    r"(password|passwd|pwd|secret|api_?key|auth_?token|access_?token|"
    r"private_?key|encryption_?key|credential)",
    re.IGNORECASE,
)

# Placeholder values to ignore
_PLACEHOLDER_PATTERNS = [
    re.compile(r"^(your[_-]?|my[_-]?|example[_-]?|test[_-]?|dummy[_-]?|fake[_-]?)", re.I),
    re.compile(r"(xxx+|placeholder|changeme|fixme|todo)", re.I),
    re.compile(r"^\$\{.*\}$"),  # ${VAR} templates
    re.compile(r"^\{.*\}$"),    # {var} templates
]

# ── crypto ──────────────────────────────────────────────────────────

_WEAK_DIGESTS = frozenset({"MD2", "MD4", "MD5", "SHA1", "SHA-1"})
_WEAK_CIPHER = re.compile(r"(^|/)(DES|DESEDE|RC2|RC4)(/|$)|/ECB(/|$)", re.IGNORECASE)


def _is_secret_var_name(name: str) -> bool:
    return bool(_SECRET_VAR_PATTERNS.search(name))


def _looks_like_real_secret(value: str) -> bool:
    """Any non-trivial, non-placeholder value counts for a secret-named variable."""
    if len(value) < 4:
        return False
    for pattern in _PLACEHOLDER_PATTERNS:
        if pattern.search(value):
            return False
    return True


def _string_value(tree: ParsedTree, node: Optional[Node]) -> Optional[str]:
    """Content of a string literal node without its quotes, else ``None``."""
    if node is None or node.type != "string_literal":
        return None
    text = tree.render(node)
    quote = '"""' if text.startswith('"""') else '"'
    return text[len(quote):-len(quote)]


def _arguments(tree: ParsedTree, call: Node) -> list[Node]:
    args = tree.field_of(call, "arguments")
    return list(args.named_children) if args is not None else []


def _concat_operands(tree: ParsedTree, node: Node) -> list[Node]:
    """Flatten a ``+`` chain into its leaf operands."""
    if node.type == "binary_expression" and tree.render(tree.field_of(node, "operator")) == "+":
        return (
            _concat_operands(tree, tree.field_of(node, "left"))
            + _concat_operands(tree, tree.field_of(node, "right"))
        )
    if node.type == "parenthesized_expression" and node.named_children:
        return _concat_operands(tree, node.named_children[0])
    return [node]


def _is_concat(tree: ParsedTree, node: Optional[Node]) -> bool:
    return (
        node is not None
        and node.type == "binary_expression"
        and tree.render(tree.field_of(node, "operator")) == "+"
    )


def _created_type(tree: ParsedTree, node: Node) -> str:
    """Simple name of the type in a ``new T(...)`` expression."""
    text = tree.render(tree.field_of(node, "type"))
    return text.split("<", 1)[0].rsplit(".", 1)[-1]


class VulnerabilityAnalyzer:
    """Finds security-sensitive patterns.

    Rules:
      VUL_SQL_INJECTION_001: SQL text concatenated with non-literal values
      VUL_COMMAND_INJECTION_001: ``Runtime.exec`` / ``ProcessBuilder`` with dynamic arguments
      VUL_XSS_001: request input written straight to a response
      VUL_PATH_TRAVERSAL_001: file paths built from request input
      VUL_HARDCODED_SECRET_001: secret-named variable holding a string literal
      VUL_WEAK_CRYPTO_001: MD5/SHA-1 digests, DES/RC4 ciphers or ECB mode
      VUL_INSECURE_RANDOM_001: ``java.util.Random`` instances
      VUL_UNSAFE_DESERIALIZATION_001: ``ObjectInputStream`` construction
    """

    id: str = "vulnerability"
    version: str = "1.0.0"
    type: AnalyzerType = AnalyzerType.VULNERABILITY

    def analyze(self, unit: SourceUnit) -> list[Issue]:
        tree = unit.tree
        if tree is None:
            return []

        issues: list[Issue] = []
        issues.extend(self._detect_sql_injection(unit, tree))
        issues.extend(self._detect_command_injection(unit, tree))
        issues.extend(self._detect_xss(unit, tree))
        issues.extend(self._detect_path_traversal(unit, tree))
        issues.extend(self._detect_hardcoded_secrets(unit, tree))
        issues.extend(self._detect_weak_crypto(unit, tree))
        issues.extend(self._detect_insecure_random(unit, tree))
        issues.extend(self._detect_unsafe_deserialization(unit, tree))
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

    def _detect_sql_injection(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for expr in tree.find_all("binary_expression"):
            # Only the outermost node of a concatenation chain is reported.
            if not _is_concat(tree, expr) or _is_concat(tree, expr.parent):
                continue
            operands = _concat_operands(tree, expr)
            has_sql = any(
                _SQL_KEYWORDS.search(_string_value(tree, op) or "") for op in operands
            )
            has_dynamic = any(op.type not in _LITERAL_TYPES for op in operands)
            if has_sql and has_dynamic:
                issues.append(self._issue(
                    unit,
                    tree.line_of(expr),
                    "Possible SQL injection: query text built by string concatenation. "
                    "Use a PreparedStatement with bound parameters.",
                    Severity.CRITICAL,
                    VUL_SQL_INJECTION_001,
                ))
        return issues

    def _detect_command_injection(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for node in tree.find_all("method_invocation", "object_creation_expression"):
            if node.type == "method_invocation":
                if tree.name_of(node) != "exec":
                    continue
                if "getRuntime()" not in tree.render(tree.field_of(node, "object")):
                    continue
                target = "Runtime.exec()"
            else:
                if _created_type(tree, node) != "ProcessBuilder":
                    continue
                target = "ProcessBuilder"
            args = _arguments(tree, node)
            if all(arg.type == "string_literal" for arg in args):
                continue
            issues.append(self._issue(
                unit,
                tree.line_of(node),
                f"Possible command injection: {target} called with dynamic arguments. "
                "Validate or whitelist command input.",
                Severity.HIGH,
                VUL_COMMAND_INJECTION_001,
            ))
        return issues

    def _detect_xss(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for call in tree.find_all("method_invocation"):
            name = tree.name_of(call)
            if name not in _OUTPUT_METHODS:
                continue
            args = tree.render(tree.field_of(call, "arguments"))
            if any(source in args for source in _REQUEST_SOURCES):
                issues.append(self._issue(
                    unit,
                    tree.line_of(call),
                    f"Possible cross-site scripting: request input passed to {name}() "
                    "without encoding.",
                    Severity.HIGH,
                    VUL_XSS_001,
                ))
        return issues

    def _detect_path_traversal(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for node in tree.find_all("method_invocation", "object_creation_expression"):
            if node.type == "object_creation_expression":
                if _created_type(tree, node) not in _FILE_TYPES:
                    continue
            else:
                receiver = tree.render(tree.field_of(node, "object"))
                call = (receiver, tree.name_of(node))
                if call not in (("Paths", "get"), ("Path", "of")):
                    continue
            args = tree.render(tree.field_of(node, "arguments"))
            if any(source in args for source in _PATH_SOURCES):
                issues.append(self._issue(
                    unit,
                    tree.line_of(node),
                    "Possible path traversal: file path built from request input. "
                    "Normalize and restrict paths to an allowed directory.",
                    Severity.HIGH,
                    VUL_PATH_TRAVERSAL_001,
                ))
        return issues

    def _detect_hardcoded_secrets(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for declarator in tree.find_all("variable_declarator"):
            name = tree.name_of(declarator)
            if not _is_secret_var_name(name):
                continue
            value = _string_value(tree, tree.field_of(declarator, "value"))
            if value is None or not _looks_like_real_secret(value):
                continue
            # The literal itself is never echoed back.
            issues.append(self._issue(
                unit,
                tree.line_of(declarator),
                f"Hardcoded secret in '{name}'. "
                "Load credentials from configuration or the environment.",
                Severity.CRITICAL,
                VUL_HARDCODED_SECRET_001,
            ))
        return issues

    def _detect_weak_crypto(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for call in tree.find_all("method_invocation"):
            if tree.name_of(call) != "getInstance":
                continue
            receiver = tree.render(tree.field_of(call, "object")).rsplit(".", 1)[-1]
            args = _arguments(tree, call)
            algorithm = _string_value(tree, args[0]) if args else None
            if algorithm is None:
                continue
            weak = (
                (receiver == "MessageDigest" and algorithm.upper() in _WEAK_DIGESTS)
                or (receiver == "Cipher" and _WEAK_CIPHER.search(algorithm) is not None)
            )
            if weak:
                issues.append(self._issue(
                    unit,
                    tree.line_of(call),
                    f"Weak cryptographic algorithm '{algorithm}' used with {receiver}. "
                    "Prefer SHA-256 or AES/GCM.",
                    Severity.MEDIUM,
                    VUL_WEAK_CRYPTO_001,
                ))
        return issues

    def _detect_insecure_random(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for node in tree.find_all("object_creation_expression"):
            if _created_type(tree, node) == "Random":
                issues.append(self._issue(
                    unit,
                    tree.line_of(node),
                    "java.util.Random is predictable. "
                    "Use SecureRandom for security-sensitive values.",
                    Severity.LOW,
                    VUL_INSECURE_RANDOM_001,
                ))
        return issues

    def _detect_unsafe_deserialization(self, unit: SourceUnit, tree: ParsedTree) -> list[Issue]:
        issues: list[Issue] = []
        for node in tree.find_all("object_creation_expression"):
            if _created_type(tree, node) == "ObjectInputStream":
                issues.append(self._issue(
                    unit,
                    tree.line_of(node),
                    "Unsafe deserialization: ObjectInputStream can instantiate "
                    "arbitrary classes. Validate input or use a safe format.",
                    Severity.HIGH,
                    VUL_UNSAFE_DESERIALIZATION_001,
                ))
        return issues
