"""Output rendering."""

from __future__ import annotations

import json
from typing import Any

import click

from avalonia_lint import __version__
from avalonia_lint.rules.base import Finding
from avalonia_lint.runner import RunResult


def render_report(result: RunResult, *, color: bool = False) -> str:
    """Render a markdown report; identical results render identically."""
    lines: list[str] = [f"# {_title(result)}", ""]

    banner = "Result: PASSED" if result.passed else "Result: FAILED"
    if color:
        banner = click.style(banner, fg="green" if result.passed else "red", bold=True)
    lines.append(f"**{banner}**")
    lines.append("")
    lines.append(_context_line(result))
    lines.append("")

    if result.issues:
        lines.append("## Issues")
        lines.append("")
        for index, finding in enumerate(result.issues, start=1):
            lines.append(f"{index}. [{finding.severity}] {finding.message} ({finding.rule_id})")
            lines.extend(_detail_lines(finding))
        lines.append("")

    if result.recommendations:
        lines.append("## Recommendations")
        lines.append("")
        for index, finding in enumerate(result.recommendations, start=1):
            lines.append(f"{index}. {finding.message} ({finding.rule_id})")
            lines.extend(_detail_lines(finding))
        lines.append("")

    band = score_band(result.score)
    lines.append("## Score")
    lines.append("")
    lines.append(f"Score: {result.score}/100 ({band})")
    return "\n".join(lines) + "\n"


def render_json(result: RunResult) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(result), sort_keys=True)


def build_json_payload(result: RunResult) -> dict[str, Any]:
    """Build a stable, machine-readable payload for a run."""
    return {
        "passed": result.passed,
        "score": result.score,
        "band": score_band(result.score),
        "issues": [_serialize_finding(item) for item in result.issues],
        "recommendations": [_serialize_finding(item) for item in result.recommendations],
        "meta": {
            "tool": result.tool,
            "document_kind": result.document_kind,
            "validation_level": result.config.validation_level,
            "analysis_kind": result.config.analysis_kind,
            "version": __version__,
        },
    }


def render_error_report(tool_name: str, category: str, message: str) -> str:
    """Render the failure report returned when a tool cannot run at all."""
    return "\n".join(
        [
            f"# {tool_name} Error",
            "",
            "**Result: FAILED**",
            "",
            "## Issues",
            "",
            f"1. [error] {category}: {message}",
            "",
            "## Score",
            "",
            f"Score: 0/100 ({score_band(0)})",
            "",
        ]
    )


def score_band(score: int) -> str:
    if score >= 90:
        return "excellent"
    if score >= 70:
        return "good"
    if score >= 50:
        return "moderate"
    return "poor"


def _serialize_finding(finding: Finding) -> dict[str, Any]:
    return {
        "rule_id": finding.rule_id,
        "severity": str(finding.severity),
        "message": finding.message,
        "suggestion": finding.suggestion,
        "evidence": finding.evidence,
    }


def _title(result: RunResult) -> str:
    if result.tool == "validate":
        return "AvaloniaUI XAML Validation Report"
    kind = (result.document_kind or "unknown").upper()
    return f"AvaloniaUI Performance Analysis Report ({kind})"


def _context_line(result: RunResult) -> str:
    if result.tool == "validate":
        return f"Validation level: {result.config.validation_level}"
    return f"Analysis type: {result.config.analysis_kind} (detected: {result.document_kind or 'unknown'})"


def _detail_lines(finding: Finding) -> list[str]:
    details: list[str] = []
    if finding.suggestion:
        details.append(f"   - Suggestion: {finding.suggestion}")
    if finding.evidence:
        details.append(f"   - Evidence: {finding.evidence}")
    return details
