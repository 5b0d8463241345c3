"""CLI entrypoint for avalonia-lint."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from avalonia_lint import __version__
from avalonia_lint.config import (
    OUTPUT_FORMATS,
    AppConfig,
    ConfigurationError,
    default_config_template,
    load_app_config,
)
from avalonia_lint.output import render_json, render_report
from avalonia_lint.rules import RULE_SETS, build_rules, list_rule_info
from avalonia_lint.runner import RunResult
from avalonia_lint.tools import analyze_result, convert_wpf, validate_result

LOG_LEVELS = ("debug", "info", "warning", "error")

app = typer.Typer(
    name="avalonia-lint",
    no_args_is_help=True,
    help="Validate and analyze AvaloniaUI XAML and C# sources.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version


@app.command("validate")
def validate_command(
    file: Annotated[Path | None, typer.Option("--file", help="Path to a XAML file.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read XAML from stdin.")] = False,
    level: Annotated[
        str | None, typer.Option("--level", help="normal|warnings|strict.", show_default="normal")
    ] = None,
    format: Annotated[
        str | None, typer.Option(help="Output format: markdown|json.", show_default="markdown")
    ] = None,
    fail: Annotated[
        bool, typer.Option("--fail/--no-fail", help="Exit nonzero when validation fails.")
    ] = True,
    project: Annotated[Path, typer.Option(help="Project path for config lookup.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Validate AvaloniaUI XAML for syntax errors and common issues."""
    app_config = _load_config_or_raise(project, config_file)
    output_format = _resolve_format(format, app_config)
    text = _read_input(file=file, stdin=stdin)
    try:
        result = validate_result(text, level, app_config=app_config)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _emit(result, output_format=output_format, fail=fail)


@app.command("analyze")
def analyze_command(
    file: Annotated[Path | None, typer.Option("--file", help="Path to a XAML or C# file.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read source from stdin.")] = False,
    kind: Annotated[
        str | None, typer.Option("--kind", help="auto|xaml|csharp.", show_default="auto")
    ] = None,
    format: Annotated[
        str | None, typer.Option(help="Output format: markdown|json.", show_default="markdown")
    ] = None,
    fail: Annotated[
        bool, typer.Option("--fail/--no-fail", help="Exit nonzero when analysis fails.")
    ] = True,
    project: Annotated[Path, typer.Option(help="Project path for config lookup.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Analyze XAML or C# code for performance issues."""
    app_config = _load_config_or_raise(project, config_file)
    output_format = _resolve_format(format, app_config)
    if kind is None and file is not None and app_config.analysis_kind == "auto":
        kind = _kind_from_suffix(file)
    text = _read_input(file=file, stdin=stdin)
    try:
        result = analyze_result(text, kind, app_config=app_config)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _emit(result, output_format=output_format, fail=fail)


@app.command("convert")
def convert_command(
    file: Annotated[Path | None, typer.Option("--file", help="Path to a WPF XAML file.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read WPF XAML from stdin.")] = False,
    project: Annotated[Path, typer.Option(help="Project path for config lookup.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Convert WPF XAML to AvaloniaUI XAML and validate the result."""
    app_config = _load_config_or_raise(project, config_file)
    text = _read_input(file=file, stdin=stdin)
    typer.echo(convert_wpf(text, app_config=app_config), nl=False)


@app.command("rules")
def rules_command(
    project: Annotated[Path, typer.Option(help="Project path for config lookup.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List available rules and whether the configuration enables them."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(project, config_file)
    active_ids = _active_rule_ids(app_config)
    rule_info = list_rule_info()

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "name": item.name,
                    "description": item.description,
                    "category": item.category,
                    "rule_sets": list(item.rule_sets),
                    "enabled": item.rule_id in active_ids,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        sets = ",".join(item.rule_sets)
        lines.append(f"- {item.rule_id} [{status}] ({sets}) - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    project: Annotated[Path, typer.Option(help="Project path for config lookup.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(project, config_file)
    payload = app_config.to_dict()
    payload["active_rule_ids"] = sorted(_active_rule_ids(app_config))

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- validation_level: {payload['validation_level']}",
        f"- analysis_kind: {payload['analysis_kind']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- thresholds: {payload['thresholds']}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".avalonia-lint.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("serve")
def serve_command(
    project: Annotated[Path, typer.Option(help="Project path for config lookup.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
    log_level: Annotated[str, typer.Option(help="debug|info|warning|error.")] = "info",
) -> None:
    """Run the MCP server over stdio."""
    resolved_level = log_level.lower()
    if resolved_level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"log level must be one of: {', '.join(LOG_LEVELS)}", param_hint="--log-level"
        )
    app_config = _load_config_or_raise(project, config_file)

    logging.basicConfig(
        level=resolved_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from avalonia_lint.server import run_stdio

    run_stdio(app_config)


def main() -> None:
    """Console script entrypoint."""
    app()


def _emit(result: RunResult, *, output_format: str, fail: bool) -> None:
    if output_format == "json":
        typer.echo(render_json(result))
    else:
        typer.echo(render_report(result, color=True), nl=False)
    if fail and not result.passed:
        raise typer.Exit(code=1)


def _read_input(*, file: Path | None, stdin: bool) -> str:
    if file is not None and stdin:
        raise typer.BadParameter("Use either --file or --stdin, not both.")
    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise typer.BadParameter(f"Cannot read {file}: {exc}", param_hint="--file") from exc
    if stdin:
        return sys.stdin.read()
    raise typer.BadParameter("Provide --file or --stdin.")


def _kind_from_suffix(path: Path) -> str | None:
    suffix = path.suffix.lower()
    if suffix in {".axaml", ".xaml"}:
        return "xaml"
    if suffix == ".cs":
        return "csharp"
    return None


def _resolve_format(value: str | None, app_config: AppConfig) -> str:
    output_format = (value or app_config.format).lower()
    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"format must be one of: {', '.join(OUTPUT_FORMATS)}", param_hint="--format"
        )
    return output_format


def _load_config_or_raise(project: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(project, config_path=config_file)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _active_rule_ids(app_config: AppConfig) -> set[str]:
    active: set[str] = set()
    try:
        for rule_set in RULE_SETS:
            rules = build_rules(
                rule_set,
                enabled_rule_ids=app_config.rule_enable,
                disabled_rule_ids=app_config.rule_disable,
            )
            active.update(rule.rule_id for rule in rules)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc
    return active
