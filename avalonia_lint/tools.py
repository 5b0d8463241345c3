"""Request/response entry points shared by the CLI and the MCP server.

Every function in this module that returns ``str`` returns a report, never
raises: invalid options and unexpected failures become error reports. The
``*_result`` variants return the underlying ``RunResult`` for callers that
need machine-readable data, and do raise ``ConfigurationError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from avalonia_lint.config import AppConfig, ConfigurationError
from avalonia_lint.conversion import convert_wpf_xaml
from avalonia_lint.output import render_error_report, render_report
from avalonia_lint.rules import build_rules
from avalonia_lint.runner import RunResult, analyze_code, validate_document

logger = logging.getLogger(__name__)

VALIDATE_TOOL = "XAML Validation"
ANALYZE_TOOL = "Performance Analysis"
CONVERT_TOOL = "WPF Conversion"


def validate(
    document_text: str,
    validation_level: str | None = None,
    *,
    app_config: AppConfig | None = None,
) -> str:
    """Validate AvaloniaUI XAML and return a markdown report."""
    return safe_execute(
        VALIDATE_TOOL,
        lambda: render_report(
            validate_result(document_text, validation_level, app_config=app_config)
        ),
    )


def analyze(
    code_text: str,
    analysis_kind: str | None = None,
    *,
    app_config: AppConfig | None = None,
) -> str:
    """Analyze XAML or C# for performance issues and return a markdown report."""
    return safe_execute(
        ANALYZE_TOOL,
        lambda: render_report(analyze_result(code_text, analysis_kind, app_config=app_config)),
    )


def convert_wpf(wpf_xaml: str, *, app_config: AppConfig | None = None) -> str:
    """Convert WPF XAML to AvaloniaUI XAML and validate the result."""
    return safe_execute(CONVERT_TOOL, lambda: _convert_report(wpf_xaml, app_config))


def validate_result(
    document_text: str,
    validation_level: str | None = None,
    *,
    app_config: AppConfig | None = None,
) -> RunResult:
    resolved = app_config or AppConfig()
    config = resolved.run_config(validation_level=validation_level)
    rules = build_rules(
        "validation",
        enabled_rule_ids=resolved.rule_enable,
        disabled_rule_ids=resolved.rule_disable,
    )
    return validate_document(document_text, config, rules=rules)


def analyze_result(
    code_text: str,
    analysis_kind: str | None = None,
    *,
    app_config: AppConfig | None = None,
) -> RunResult:
    resolved = app_config or AppConfig()
    config = resolved.run_config(analysis_kind=analysis_kind)
    return analyze_code(
        code_text,
        config,
        xaml_rules=build_rules(
            "performance",
            enabled_rule_ids=resolved.rule_enable,
            disabled_rule_ids=resolved.rule_disable,
        ),
        csharp_rules=build_rules(
            "csharp",
            enabled_rule_ids=resolved.rule_enable,
            disabled_rule_ids=resolved.rule_disable,
        ),
    )


def safe_execute(tool_name: str, operation: Callable[[], str]) -> str:
    """Run a report-producing operation, converting failures into error reports."""
    try:
        return operation()
    except ConfigurationError as exc:
        return render_error_report(tool_name, "Invalid Input", str(exc))
    except Exception as exc:
        logger.exception("%s failed", tool_name)
        return render_error_report(
            tool_name, "Unexpected Error", f"An unexpected error occurred: {exc}"
        )


def _convert_report(wpf_xaml: str, app_config: AppConfig | None) -> str:
    if not wpf_xaml or not wpf_xaml.strip():
        raise ConfigurationError("WPF XAML content cannot be empty")

    conversion = convert_wpf_xaml(wpf_xaml)
    validation = validate_result(conversion.converted, "normal", app_config=app_config)

    lines = ["# WPF to AvaloniaUI XAML Conversion", "", "## Conversion Notes", ""]
    if conversion.notes:
        lines.extend(f"- {note}" for note in conversion.notes)
    else:
        lines.append("- No mechanical replacements were needed.")
    lines.append("")

    if conversion.manual_attention:
        lines.extend(["## Items Requiring Manual Attention", ""])
        lines.extend(f"- {item}" for item in conversion.manual_attention)
        lines.append("")

    lines.extend(["## Converted XAML", "", "```xml", conversion.converted.strip("\n"), "```", ""])
    lines.extend(["## Validation Result", ""])
    lines.append(_demote_headings(render_report(validation), levels=2))
    return "\n".join(lines)


def _demote_headings(markdown: str, *, levels: int) -> str:
    prefix = "#" * levels
    demoted = [prefix + line if line.startswith("#") else line for line in markdown.splitlines()]
    return "\n".join(demoted) + "\n"
