"""CLI tests for validate, analyze, convert and the config helpers."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from avalonia_lint import __version__
from avalonia_lint.cli import app
from avalonia_lint.document import AVALONIA_NAMESPACE, WPF_PRESENTATION_NAMESPACE, XAML_NAMESPACE

runner = CliRunner()

VALID_WINDOW = (
    f'<Window xmlns="{AVALONIA_NAMESPACE}" xmlns:x="{XAML_NAMESPACE}">'
    '<TextBlock Text="Hello" />'
    "</Window>"
)
DUPLICATE_KEYS = (
    f'<Window xmlns="{AVALONIA_NAMESPACE}" xmlns:x="{XAML_NAMESPACE}"><Window.Resources>'
    '<SolidColorBrush x:Key="Accent" Color="Red" />'
    '<SolidColorBrush x:Key="Accent" Color="Blue" />'
    "</Window.Resources></Window>"
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_root_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("validate", "analyze", "convert", "rules", "config-init", "serve"):
        assert command in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_validate_file_passes(tmp_path: Path) -> None:
    xaml = _write(tmp_path / "MainWindow.axaml", VALID_WINDOW)
    result = runner.invoke(app, ["validate", "--file", str(xaml), "--project", str(tmp_path)])
    assert result.exit_code == 0
    assert "Result: PASSED" in result.stdout
    assert "Score: 100/100 (excellent)" in result.stdout


def test_validate_failure_sets_exit_code(tmp_path: Path) -> None:
    xaml = _write(tmp_path / "MainWindow.axaml", DUPLICATE_KEYS)
    failing = runner.invoke(app, ["validate", "--file", str(xaml), "--project", str(tmp_path)])
    assert failing.exit_code == 1
    assert "Duplicate resource key 'Accent'." in failing.stdout

    tolerated = runner.invoke(
        app, ["validate", "--file", str(xaml), "--project", str(tmp_path), "--no-fail"]
    )
    assert tolerated.exit_code == 0


def test_validate_stdin_json(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["validate", "--stdin", "--format", "json", "--level", "strict", "--project", str(tmp_path)],
        input=VALID_WINDOW,
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert set(payload) == {"passed", "score", "band", "issues", "recommendations", "meta"}
    assert payload["meta"]["validation_level"] == "strict"
    assert payload["passed"] is True


def test_validate_rejects_bad_level(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["validate", "--stdin", "--level", "extreme", "--project", str(tmp_path)], input="<A/>"
    )
    assert result.exit_code == 2


def test_validate_requires_an_input_source(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate", "--project", str(tmp_path)])
    assert result.exit_code == 2


def test_validate_uses_project_config(tmp_path: Path) -> None:
    _write(tmp_path / ".avalonia-lint.toml", 'format = "json"\nvalidation_level = "warnings"\n')
    result = runner.invoke(
        app, ["validate", "--stdin", "--project", str(tmp_path)], input=VALID_WINDOW
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["meta"]["validation_level"] == "warnings"
    assert "file_extension" in {item["rule_id"] for item in payload["recommendations"]}


def test_analyze_infers_kind_from_suffix(tmp_path: Path) -> None:
    source = _write(
        tmp_path / "MainViewModel.cs",
        "public class MainViewModel : ReactiveObject { }",
    )
    result = runner.invoke(
        app,
        ["analyze", "--file", str(source), "--format", "json", "--project", str(tmp_path)],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["meta"]["analysis_kind"] == "csharp"
    assert payload["meta"]["document_kind"] == "csharp"


def test_analyze_undetectable_input_fails(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["analyze", "--stdin", "--project", str(tmp_path)], input="just some words"
    )
    assert result.exit_code == 1
    assert "Unable to determine code type." in result.stdout


def test_convert_from_stdin(tmp_path: Path) -> None:
    wpf = f'<Window xmlns="{WPF_PRESENTATION_NAMESPACE}" xmlns:x="{XAML_NAMESPACE}" />'
    result = runner.invoke(app, ["convert", "--stdin", "--project", str(tmp_path)], input=wpf)
    assert result.exit_code == 0
    assert "# WPF to AvaloniaUI XAML Conversion" in result.stdout
    assert AVALONIA_NAMESPACE in result.stdout


def test_rules_json_marks_disabled_rules(tmp_path: Path) -> None:
    _write(tmp_path / ".avalonia-lint.toml", '[rules]\ndisable = ["file_extension"]\n')
    result = runner.invoke(app, ["rules", "--format", "json", "--project", str(tmp_path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    enabled = {item["rule_id"]: item["enabled"] for item in payload["rules"]}
    assert enabled["file_extension"] is False
    assert enabled["duplicate_identifiers"] is True
    assert len(enabled) == 24


def test_rules_rejects_unknown_rule_ids(tmp_path: Path) -> None:
    _write(tmp_path / ".avalonia-lint.toml", '[rules]\nenable = ["not_a_rule"]\n')
    result = runner.invoke(app, ["rules", "--project", str(tmp_path)])
    assert result.exit_code == 2


def test_config_json(tmp_path: Path) -> None:
    result = runner.invoke(app, ["config", "--format", "json", "--project", str(tmp_path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["source"] is None
    assert payload["validation_level"] == "normal"
    assert "file_extension" in payload["active_rule_ids"]


def test_config_init_refuses_to_overwrite(tmp_path: Path) -> None:
    out = tmp_path / ".avalonia-lint.toml"
    first = runner.invoke(app, ["config-init", "--out", str(out)])
    assert first.exit_code == 0
    assert out.exists()

    second = runner.invoke(app, ["config-init", "--out", str(out)])
    assert second.exit_code == 2

    forced = runner.invoke(app, ["config-init", "--out", str(out), "--force"])
    assert forced.exit_code == 0


def test_validate_rejects_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "Latin1.axaml"
    path.write_bytes(b"<Window Title='\xe9t\xe9' />")
    result = runner.invoke(app, ["validate", "--file", str(path), "--project", str(tmp_path)])
    assert result.exit_code == 2
    assert "Traceback" not in result.output
