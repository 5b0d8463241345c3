"""Tests for the report-producing tool entry points."""

from __future__ import annotations

import logging

import pytest

from avalonia_lint.config import AppConfig, ConfigurationError, Thresholds
from avalonia_lint.document import AVALONIA_NAMESPACE, WPF_PRESENTATION_NAMESPACE, XAML_NAMESPACE
from avalonia_lint.tools import (
    analyze,
    analyze_result,
    convert_wpf,
    safe_execute,
    validate,
    validate_result,
)

VALID_WINDOW = (
    f'<Window xmlns="{AVALONIA_NAMESPACE}" xmlns:x="{XAML_NAMESPACE}" Title="Main">'
    '<TextBlock Text="Hello" />'
    "</Window>"
)


def test_validate_returns_markdown_report() -> None:
    report = validate(VALID_WINDOW)
    assert report.startswith("# AvaloniaUI XAML Validation Report")
    assert "**Result: PASSED**" in report
    assert "Score: 100/100 (excellent)" in report


def test_validate_invalid_level_is_an_error_report() -> None:
    report = validate(VALID_WINDOW, "extreme")
    assert report.startswith("# XAML Validation Error")
    assert "[error] Invalid Input: validation_level must be one of" in report


def test_validate_empty_input_reports_parse_failure() -> None:
    report = validate("")
    assert "**Result: FAILED**" in report
    assert "Invalid XAML syntax - cannot analyze further. (parse)" in report
    assert "Score: 0/100 (poor)" in report


def test_validate_uses_config_level_when_not_given() -> None:
    text = f'<Window xmlns="{AVALONIA_NAMESPACE}"><InkCanvas /></Window>'
    assert validate_result(text).passed is True
    strict = AppConfig(validation_level="strict")
    assert validate_result(text, app_config=strict).passed is False
    assert validate_result(text, "normal", app_config=strict).passed is True


def test_validate_applies_rule_filters() -> None:
    config = AppConfig(rule_disable=["default_namespace", "xaml_namespace"])
    result = validate_result(VALID_WINDOW, app_config=config)
    assert "default_namespace" not in {finding.rule_id for finding in result.findings}

    with pytest.raises(ConfigurationError, match="Unknown rule ids: nope"):
        validate_result(VALID_WINDOW, app_config=AppConfig(rule_disable=["nope"]))


def test_analyze_reports_detected_kind() -> None:
    report = analyze("public class Vm { public string Name { get; set; } }")
    assert report.startswith("# AvaloniaUI Performance Analysis Report (CSHARP)")
    assert "Analysis type: auto (detected: csharp)" in report
    assert "Score: 90/100 (excellent)" in report


def test_analyze_invalid_kind_is_an_error_report() -> None:
    report = analyze("class A {}", "python")
    assert report.startswith("# Performance Analysis Error")
    assert "Invalid Input: analysis_kind must be one of" in report


def test_analyze_result_respects_thresholds() -> None:
    text = f'<Window xmlns="{AVALONIA_NAMESPACE}"><Canvas /></Window>'
    assert analyze_result(text).passed is True
    result = analyze_result(text, "xaml", app_config=AppConfig(thresholds=Thresholds(max_canvas=0)))
    assert [finding.rule_id for finding in result.issues] == ["canvas_usage"]


def test_convert_wpf_report_sections() -> None:
    wpf = (
        f'<Window xmlns="{WPF_PRESENTATION_NAMESPACE}" xmlns:x="{XAML_NAMESPACE}">'
        '<Button Visibility="Collapsed" /></Window>'
    )
    report = convert_wpf(wpf)
    assert report.startswith("# WPF to AvaloniaUI XAML Conversion")
    assert "## Conversion Notes" in report
    assert "## Items Requiring Manual Attention" not in report
    assert "```xml" in report
    assert f'xmlns="{AVALONIA_NAMESPACE}"' in report
    assert "## Validation Result" in report
    assert "### AvaloniaUI XAML Validation Report" in report
    assert "**Result: PASSED**" in report


def test_convert_wpf_empty_input_is_an_error_report() -> None:
    report = convert_wpf("   ")
    assert report.startswith("# WPF Conversion Error")
    assert "Invalid Input: WPF XAML content cannot be empty" in report


def test_safe_execute_converts_unexpected_errors(caplog: pytest.LogCaptureFixture) -> None:
    def explode() -> str:
        raise RuntimeError("disk on fire")

    with caplog.at_level(logging.ERROR, logger="avalonia_lint.tools"):
        report = safe_execute("XAML Validation", explode)
    assert "[error] Unexpected Error: An unexpected error occurred: disk on fire" in report
    assert "XAML Validation failed" in caplog.text
