"""
Vulnerability Analyzer Tests
============================
Unit tests for the VulnerabilityAnalyzer.

Covers:
  - VUL_SQL_INJECTION_001: query text concatenated with variables
  - VUL_COMMAND_INJECTION_001: Runtime.exec / ProcessBuilder with dynamic input
  - VUL_XSS_001: request input written to the response
  - VUL_PATH_TRAVERSAL_001: file paths from request input
  - VUL_HARDCODED_SECRET_001: secrets in string literals
  - VUL_WEAK_CRYPTO_001: MD5/SHA-1, DES/RC4, ECB
  - VUL_INSECURE_RANDOM_001: java.util.Random
  - VUL_UNSAFE_DESERIALIZATION_001: ObjectInputStream
"""

import textwrap
from pathlib import Path

import pytest

from code_quality.analyzers.vulnerability import VulnerabilityAnalyzer
from code_quality.core.parser import JavaSourceParser
from code_quality.model import AnalyzerType, Severity


@pytest.fixture
def analyzer():
    return VulnerabilityAnalyzer()


def write_java(root: Path, name: str, content: str) -> Path:
    """Write a Java file with dedented content."""
    p = root / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


def analyze(analyzer, root: Path, content: str, name: str = "Sample.java"):
    unit = JavaSourceParser().load(write_java(root, name, content))
    return analyzer.analyze(unit)


def in_method(body: str) -> str:
    """Wrap statements in a class with one method."""
    indented = textwrap.indent(textwrap.dedent(body).strip("\n"), " " * 8)
    return (
        "class Sample {\n"
        "    void handle(Object request, Object response, String input) throws Exception {\n"
        f"{indented}\n"
        "    }\n"
        "}\n"
    )


def rules(issues):
    return [i.rule_id for i in issues]


# ============================================================================
# VUL_SQL_INJECTION_001
# ============================================================================

class TestSqlInjection:
    """Tests for VUL_SQL_INJECTION_001."""

    def test_concatenated_query_reported(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            String q = "SELECT * FROM users WHERE id = " + input;
        """))
        assert rules(issues) == ["VUL_SQL_INJECTION_001"]
        assert issues[0].severity == Severity.CRITICAL
        assert issues[0].type == AnalyzerType.VULNERABILITY
        assert issues[0].line_number == 3

    def test_long_chain_reported_once(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            String q = "DELETE FROM t WHERE a = '" + input + "' AND b = " + input;
        """))
        assert rules(issues) == ["VUL_SQL_INJECTION_001"]

    def test_literal_only_query_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            String q = "SELECT 1 " + "FROM dual";
        """))
        assert issues == []

    def test_non_sql_concatenation_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            String greeting = "Hello " + input;
        """))
        assert issues == []


# ============================================================================
# VUL_COMMAND_INJECTION_001
# ============================================================================

class TestCommandInjection:
    """Tests for VUL_COMMAND_INJECTION_001."""

    def test_runtime_exec_with_variable(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            Runtime.getRuntime().exec(input);
        """))
        assert rules(issues) == ["VUL_COMMAND_INJECTION_001"]
        assert issues[0].severity == Severity.HIGH

    def test_runtime_exec_with_literal_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            Runtime.getRuntime().exec("ls");
        """))
        assert issues == []

    def test_process_builder_with_variable(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            ProcessBuilder pb = new ProcessBuilder("sh", "-c", input);
        """))
        assert rules(issues) == ["VUL_COMMAND_INJECTION_001"]
        assert "ProcessBuilder" in issues[0].message


# ============================================================================
# VUL_XSS_001 / VUL_PATH_TRAVERSAL_001
# ============================================================================

class TestRequestInput:
    """Tests for request-driven output and file access."""

    def test_parameter_echoed_to_response(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            out.println(req.getParameter("name"));
        """))
        assert rules(issues) == ["VUL_XSS_001"]
        assert "println()" in issues[0].message

    def test_constant_output_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            out.println("static text");
        """))
        assert issues == []

    def test_file_from_parameter(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            java.io.File f = new File(req.getParameter("file"));
        """))
        assert rules(issues) == ["VUL_PATH_TRAVERSAL_001"]

    def test_paths_get_from_header(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            Object p = Paths.get("/data", req.getHeader("X-Name"));
        """))
        assert rules(issues) == ["VUL_PATH_TRAVERSAL_001"]

    def test_fixed_file_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            java.io.File f = new File("/etc/app.conf");
        """))
        assert issues == []


# ============================================================================
# VUL_HARDCODED_SECRET_001
# ============================================================================

class TestHardcodedSecret:
    """Tests for VUL_HARDCODED_SECRET_001."""

    def test_secret_field_reported_and_redacted(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, """\
            class Sample {
                private static final String DB_PASSWORD = "hunter2!x";
                private String apiKey = "sk_live_abcdef123456";
            }
        """)
        assert rules(issues) == ["VUL_HARDCODED_SECRET_001"] * 2
        assert [i.line_number for i in issues] == [2, 3]
        assert all(i.severity == Severity.CRITICAL for i in issues)
        assert "DB_PASSWORD" in issues[0].message
        assert "hunter2" not in issues[0].message
        assert "sk_live" not in issues[1].message

    @pytest.mark.parametrize("value", ['"changeme"', '"your-password"', '"${DB_PASS}"', '""'])
    def test_placeholders_clean(self, analyzer, tmp_path, value):
        issues = analyze(analyzer, tmp_path, in_method(f"""
            String password = {value};
        """))
        assert issues == []

    def test_non_literal_value_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            String password = System.getenv("DB_PASSWORD");
        """))
        assert issues == []

    def test_unrelated_name_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            String username = "administrator";
        """))
        assert issues == []


# ============================================================================
# VUL_WEAK_CRYPTO_001
# ============================================================================

class TestWeakCrypto:
    """Tests for VUL_WEAK_CRYPTO_001."""

    @pytest.mark.parametrize("call", [
        'MessageDigest.getInstance("MD5")',
        'MessageDigest.getInstance("SHA-1")',
        'Cipher.getInstance("DES/CBC/PKCS5Padding")',
        'Cipher.getInstance("AES/ECB/PKCS5Padding")',
        'Cipher.getInstance("RC4")',
    ])
    def test_weak_algorithms_reported(self, analyzer, tmp_path, call):
        issues = analyze(analyzer, tmp_path, in_method(f"""
            Object c = {call};
        """))
        assert rules(issues) == ["VUL_WEAK_CRYPTO_001"]
        assert issues[0].severity == Severity.MEDIUM

    @pytest.mark.parametrize("call", [
        'MessageDigest.getInstance("SHA-256")',
        'Cipher.getInstance("AES/GCM/NoPadding")',
        'Calendar.getInstance()',
    ])
    def test_strong_algorithms_clean(self, analyzer, tmp_path, call):
        issues = analyze(analyzer, tmp_path, in_method(f"""
            Object c = {call};
        """))
        assert issues == []


# ============================================================================
# VUL_INSECURE_RANDOM_001 / VUL_UNSAFE_DESERIALIZATION_001
# ============================================================================

class TestObjectCreation:
    """Tests for constructor-based rules."""

    def test_random_reported(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            java.util.Random r = new java.util.Random();
        """))
        assert rules(issues) == ["VUL_INSECURE_RANDOM_001"]
        assert issues[0].severity == Severity.LOW

    def test_secure_random_clean(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            Object r = new SecureRandom();
        """))
        assert issues == []

    def test_object_input_stream_reported(self, analyzer, tmp_path):
        issues = analyze(analyzer, tmp_path, in_method("""
            Object in = new ObjectInputStream(stream);
        """))
        assert rules(issues) == ["VUL_UNSAFE_DESERIALIZATION_001"]
        assert issues[0].severity == Severity.HIGH


def test_issues_grouped_by_rule_order(analyzer, tmp_path):
    """Issues follow rule order, then document order within a rule."""
    issues = analyze(analyzer, tmp_path, in_method("""
        Object r = new Random();
        String q = "SELECT * FROM t WHERE x = " + input;
        Object in = new ObjectInputStream(stream);
    """))
    assert rules(issues) == [
        "VUL_SQL_INJECTION_001",
        "VUL_INSECURE_RANDOM_001",
        "VUL_UNSAFE_DESERIALIZATION_001",
    ]
