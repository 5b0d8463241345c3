"""Tests for configuration loading and option validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from avalonia_lint.config import (
    AppConfig,
    ConfigurationError,
    Thresholds,
    build_run_config,
    default_config_template,
    load_app_config,
)


def test_defaults_without_config_files(tmp_path: Path) -> None:
    config = load_app_config(tmp_path)
    assert config == AppConfig()
    assert config.source is None
    assert config.run_config() == build_run_config()


def test_project_config_file_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / ".avalonia-lint.toml").write_text(
        'validation_level = "strict"\n[thresholds]\nmax_canvas = 5\n', encoding="utf-8"
    )
    (tmp_path / "avalonia-lint.toml").write_text('validation_level = "warnings"\n', encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.validation_level == "strict"
    assert config.thresholds.max_canvas == 5
    assert config.thresholds.max_resources == Thresholds().max_resources
    assert config.source == str(tmp_path.resolve() / ".avalonia-lint.toml")


def test_pyproject_tool_section(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n'
        "[tool.avalonia_lint]\n"
        'format = "json"\n'
        "[tool.avalonia_lint.rules]\n"
        'disable = ["file_extension", "name_directives"]\n',
        encoding="utf-8",
    )
    config = load_app_config(tmp_path)
    assert config.format == "json"
    assert config.rule_disable == ["file_extension", "name_directives"]
    assert config.rule_enable is None


def test_pyproject_without_tool_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    assert load_app_config(tmp_path) == AppConfig()


def test_explicit_config_path(tmp_path: Path) -> None:
    custom = tmp_path / "lint" / "custom.toml"
    custom.parent.mkdir()
    custom.write_text('analysis_kind = "csharp"\n', encoding="utf-8")
    config = load_app_config(tmp_path, config_path=Path("lint/custom.toml"))
    assert config.analysis_kind == "csharp"


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="does not exist"):
        load_app_config(tmp_path, config_path=tmp_path / "missing.toml")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('validation_level = "extreme"\n', "validation_level must be one of"),
        ('format = "xml"\n', "format must be one of"),
        ("[thresholds]\nmax_depth = 3\n", "Unknown thresholds: max_depth"),
        ("[thresholds]\nmax_canvas = -1\n", "thresholds.max_canvas must be >= 0"),
        ('[thresholds]\nmax_canvas = "many"\n', "thresholds.max_canvas must be an integer"),
        ('[rules]\ndisable = "file_extension"\n', "rules.disable must be a list of strings"),
        ("rules = 3\n", "rules must be a table/object"),
        ("validation_level = \n", "Invalid TOML"),
    ],
)
def test_invalid_config_values(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".avalonia-lint.toml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError, match=message):
        load_app_config(tmp_path)


def test_default_template_loads(tmp_path: Path) -> None:
    (tmp_path / ".avalonia-lint.toml").write_text(default_config_template(), encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.rule_disable == ["file_extension"]
    assert config.thresholds == Thresholds()


def test_build_run_config_normalizes_and_rejects() -> None:
    assert build_run_config(validation_level=" STRICT ").validation_level == "strict"
    with pytest.raises(ConfigurationError, match="analysis_kind must be one of"):
        build_run_config(analysis_kind="python")


def test_explicit_run_options_override_app_config() -> None:
    app_config = AppConfig(validation_level="strict", analysis_kind="xaml")
    assert app_config.run_config().validation_level == "strict"
    resolved = app_config.run_config(validation_level="normal", analysis_kind="csharp")
    assert resolved.validation_level == "normal"
    assert resolved.analysis_kind == "csharp"


def test_to_dict_round_trips_thresholds() -> None:
    payload = AppConfig(rule_enable=["default_namespace"]).to_dict()
    assert payload["rules"] == {"enable": ["default_namespace"], "disable": []}
    assert payload["thresholds"]["max_layout_depth"] == 3
