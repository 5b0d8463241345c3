"""Configuration loading for avalonia-lint."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

CONFIG_FILENAMES = (".avalonia-lint.toml", "avalonia-lint.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("avalonia_lint", "avalonia-lint")

VALIDATION_LEVELS = ("normal", "warnings", "strict")
ANALYSIS_KINDS = ("auto", "xaml", "csharp")
OUTPUT_FORMATS = ("markdown", "json")


class ConfigurationError(ValueError):
    """Caller-supplied options or config file values are invalid."""


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Tuning limits consulted by the counting rules."""

    max_layout_depth: int = 3
    max_canvas: int = 2
    max_resources: int = 50
    max_inline_styles: int = 10
    max_binding_path_dots: int = 2
    max_selector_spaces: int = 3
    max_binding_preview: int = 50

    def to_dict(self) -> dict[str, int]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Options for a single validation or analysis run."""

    validation_level: str = "normal"
    analysis_kind: str = "auto"
    thresholds: Thresholds = field(default_factory=Thresholds)

    @property
    def is_strict(self) -> bool:
        return self.validation_level == "strict"

    @property
    def includes_tips(self) -> bool:
        return self.validation_level in {"warnings", "strict"}


def build_run_config(
    *,
    validation_level: str | None = None,
    analysis_kind: str | None = None,
    thresholds: Thresholds | None = None,
) -> RunConfig:
    """Build a run config, rejecting unknown option values."""
    return RunConfig(
        validation_level=_as_choice(
            "normal" if validation_level is None else validation_level,
            VALIDATION_LEVELS,
            "validation_level",
        ),
        analysis_kind=_as_choice(
            "auto" if analysis_kind is None else analysis_kind,
            ANALYSIS_KINDS,
            "analysis_kind",
        ),
        thresholds=thresholds or Thresholds(),
    )


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "markdown"
    validation_level: str = "normal"
    analysis_kind: str = "auto"
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    thresholds: Thresholds = field(default_factory=Thresholds)
    source: str | None = None

    def run_config(
        self,
        *,
        validation_level: str | None = None,
        analysis_kind: str | None = None,
    ) -> RunConfig:
        """Resolve a run config, explicit arguments taking precedence."""
        return build_run_config(
            validation_level=validation_level or self.validation_level,
            analysis_kind=analysis_kind or self.analysis_kind,
            thresholds=self.thresholds,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "validation_level": self.validation_level,
            "analysis_kind": self.analysis_kind,
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "thresholds": self.thresholds.to_dict(),
            "source": self.source,
        }


def load_app_config(project: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or project-local files with precedence."""
    project = project.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (project / config_path)
        if not resolved.exists():
            raise ConfigurationError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = project / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = project / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "markdown"',
            'validation_level = "normal"',
            'analysis_kind = "auto"',
            "",
            "[rules]",
            "# enable = [",
            '#   "default_namespace",',
            '#   "xaml_namespace",',
            '#   "duplicate_identifiers",',
            "# ]",
            'disable = ["file_extension"]',
            "",
            "[thresholds]",
            "max_layout_depth = 3",
            "max_canvas = 2",
            "max_resources = 50",
            "max_inline_styles = 10",
            "max_binding_path_dots = 2",
            "max_selector_spaces = 3",
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    thresholds_mapping = _as_table(mapping.get("thresholds"), "thresholds")

    return AppConfig(
        format=_as_choice(mapping.get("format", "markdown"), OUTPUT_FORMATS, "format"),
        validation_level=_as_choice(
            mapping.get("validation_level", "normal"),
            VALIDATION_LEVELS,
            "validation_level",
        ),
        analysis_kind=_as_choice(
            mapping.get("analysis_kind", "auto"),
            ANALYSIS_KINDS,
            "analysis_kind",
        ),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable"), "rules.enable"),
        rule_disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
        thresholds=_parse_thresholds(thresholds_mapping),
        source=source,
    )


def _parse_thresholds(value: dict[str, Any]) -> Thresholds:
    known = {item.name for item in fields(Thresholds)}
    unknown = sorted(key for key in value if key not in known)
    if unknown:
        raise ConfigurationError(f"Unknown thresholds: {', '.join(unknown)}")

    overrides: dict[str, int] = {}
    for key, raw in value.items():
        parsed = _as_int(raw, f"thresholds.{key}")
        if parsed < 0:
            raise ConfigurationError(f"thresholds.{key} must be >= 0")
        overrides[key] = parsed
    return replace(Thresholds(), **overrides)


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)


def _as_choice(raw: Any, allowed: tuple[str, ...], field_name: str) -> str:
    value = str(raw).strip().lower()
    if value not in allowed:
        choices = ", ".join(allowed)
        raise ConfigurationError(f"{field_name} must be one of: {choices} (got '{raw}')")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigurationError(f"{field_name} must be an integer")
    return raw
