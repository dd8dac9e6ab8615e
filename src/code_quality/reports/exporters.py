"""Multi-format exporters for analysis results.

Supports:

*  **JSON**: machine-readable, schema-aligned (``analysis_result_v1``).
*  **Text**: the summary followed by the recommendations.
*  **Markdown**: human-readable, suitable for PR comments.
*  **HTML**: self-contained HTML document with embedded CSS.

All exporters accept an :class:`AnalysisResult` and produce a string.
"""

from __future__ import annotations

import html as html_mod

from code_quality.model import SEVERITY_ORDER
from code_quality.model.analysis_result import AnalysisResult
from code_quality.model.issue import Issue
from code_quality.utils.json_norm import stable_json_dumps

EXPORT_FORMATS = ("text", "json", "markdown", "html")


def _worst_first(result: AnalysisResult) -> list[Issue]:
    # sorted() is stable: equal severities keep file-then-rule order.
    return sorted(result.issues, key=lambda i: -i.severity.rank)


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(result: AnalysisResult, *, indent: int = 2) -> str:
    """Export an ``AnalysisResult`` as indented JSON."""
    return stable_json_dumps(result.to_dict(), indent=indent)


# ════════════════════════════════════════════════════════════════════
# Text exporter
# ════════════════════════════════════════════════════════════════════


def export_text(result: AnalysisResult) -> str:
    """Summary and recommendations, separated by a blank line."""
    return result.summary() + "\n" + result.recommendations()


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def export_markdown(result: AnalysisResult, *, top_n: int = 20) -> str:
    """Export an ``AnalysisResult`` as a concise Markdown summary."""
    lines: list[str] = []

    lines.append("# Code Analysis Results")
    lines.append("")
    lines.append(f"**Files analyzed:** {result.files_analyzed}  ")
    lines.append(f"**Issues:** {len(result.issues)}")
    lines.append("")

    if result.issues:
        lines.append("## By Type")
        lines.append("")
        lines.append("| Type | Count |")
        lines.append("|------|------:|")
        for analyzer_type, c in result.count_by_type().items():
            lines.append(f"| {analyzer_type.display_name} | {c} |")
        lines.append("")

        lines.append("## By Severity")
        lines.append("")
        lines.append("| Severity | Count |")
        lines.append("|----------|------:|")
        for sev, c in result.count_by_severity().items():
            if c:
                lines.append(f"| {sev.display_name} | {c} |")
        lines.append("")

    top = _worst_first(result)[:top_n]
    if top:
        lines.append(f"## Top {len(top)} Issues")
        lines.append("")
        for i, issue in enumerate(top, 1):
            loc = f"{issue.file_name}:{issue.line_number}"
            lines.append(
                f"{i}. **[{issue.severity.display_name.upper()}]** `{loc}` "
                f"({issue.type.display_name}) {issue.message}"
            )
        lines.append("")

    lines.append("---")
    lines.append(f"*Exported by code-quality {result.tool_version}*")
    lines.append("")
    return "\n".join(lines)


# ════════════════════════════════════════════════════════════════════
# HTML exporter
# ════════════════════════════════════════════════════════════════════

_SEVERITY_COLOR = {
    "critical": "#dc3545",
    "high": "#fd7e14",
    "medium": "#ffc107",
    "low": "#17a2b8",
    "info": "#6c757d",
}

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Code Analysis Report</title>
<style>
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 2rem; color: #212529; }}
  h1 {{ color: #343a40; }}
  .summary {{ background: #f8f9fa; padding: 1rem; border-radius: 6px; margin-bottom: 1.5rem; }}
  .badge {{ display: inline-block; padding: 2px 8px; border-radius: 4px; color: #fff; font-size: 0.85em; font-weight: 600; }}
  table {{ border-collapse: collapse; width: 100%; margin-bottom: 1.5rem; }}
  th, td {{ text-align: left; padding: 6px 12px; border-bottom: 1px solid #dee2e6; }}
  th {{ background: #e9ecef; }}
  .issue {{ margin-bottom: 0.75rem; }}
  footer {{ margin-top: 2rem; color: #6c757d; font-size: 0.85em; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def export_html(result: AnalysisResult, *, top_n: int = 30) -> str:
    """Export an ``AnalysisResult`` as a self-contained HTML document."""
    parts: list[str] = []

    parts.append("<h1>Code Analysis Report</h1>")
    parts.append('<div class="summary">')
    parts.append(f"<p><strong>Files analyzed:</strong> {result.files_analyzed}</p>")
    parts.append(f"<p><strong>Issues:</strong> {len(result.issues)}</p>")
    parts.append("</div>")

    if result.issues:
        parts.append("<h2>Severity Breakdown</h2>")
        parts.append("<table><tr><th>Severity</th><th>Count</th></tr>")
        for sev in SEVERITY_ORDER:
            c = result.count_by_severity()[sev]
            if c:
                color = _SEVERITY_COLOR.get(sev.value, "#6c757d")
                parts.append(
                    f'<tr><td><span class="badge" style="background:{color}">'
                    f"{sev.display_name}</span></td><td>{c}</td></tr>"
                )
        parts.append("</table>")

    top = _worst_first(result)[:top_n]
    if top:
        parts.append(f"<h2>Top {len(top)} Issues</h2>")
        for issue in top:
            loc = f"{issue.file_name}:{issue.line_number}"
            color = _SEVERITY_COLOR.get(issue.severity.value, "#6c757d")
            msg = html_mod.escape(issue.message)
            parts.append(
                f'<div class="issue">'
                f'<span class="badge" style="background:{color}">'
                f"{issue.severity.display_name}</span> "
                f"<code>{html_mod.escape(loc)}</code> &mdash; {msg}"
                f"</div>"
            )

    parts.append(
        f"<footer>Exported by code-quality {html_mod.escape(result.tool_version)}</footer>"
    )

    return _HTML_TEMPLATE.format(body="\n".join(parts))


# ════════════════════════════════════════════════════════════════════
# Dispatcher
# ════════════════════════════════════════════════════════════════════


def export_result(
    result: AnalysisResult,
    fmt: str = "text",
    *,
    top_n: int = 20,
) -> str:
    """Export an ``AnalysisResult`` in the specified format.

    Parameters
    ----------
    result:
        The analysis result to export.
    fmt:
        One of ``"text"``, ``"json"``, ``"markdown"``, ``"html"``.
    top_n:
        Number of top issues for markdown/html.

    Raises
    ------
    ValueError
        If *fmt* is not recognised.
    """
    if fmt == "text":
        return export_text(result)
    if fmt == "json":
        return export_json(result)
    if fmt in ("markdown", "md"):
        return export_markdown(result, top_n=top_n)
    if fmt == "html":
        return export_html(result, top_n=top_n)
    raise ValueError(f"Unknown export format: {fmt!r} (use text|json|markdown|html)")
