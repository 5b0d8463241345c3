"""MCP server exposing the validation and analysis tools over stdio."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from avalonia_lint import __version__, tools
from avalonia_lint.config import AppConfig
from avalonia_lint.rules import list_rule_info

logger = logging.getLogger(__name__)

SERVER_NAME = "avalonia-lint"


def create_server(app_config: AppConfig | None = None) -> FastMCP:
    """Build a FastMCP server whose tools share one resolved configuration."""
    resolved = app_config or AppConfig()
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Validates AvaloniaUI XAML, analyzes XAML and C# for performance issues "
            "and converts WPF XAML. Every tool returns a markdown report."
        ),
    )

    @mcp.tool()
    def validate_xaml(xaml_content: str, validation_level: str = "normal") -> str:
        """
        Validate AvaloniaUI XAML for syntax errors and common issues.

        Args:
            xaml_content: The XAML content to validate
            validation_level: 'normal', 'warnings' to include tips, or 'strict'
                to fail on any warning

        Returns:
            Markdown report with verdict, issues, recommendations and score
        """
        return tools.validate(xaml_content, validation_level, app_config=resolved)

    @mcp.tool()
    def analyze_performance(code_content: str, analysis_type: str = "auto") -> str:
        """
        Analyze AvaloniaUI XAML or C# code for performance issues.

        Args:
            code_content: The XAML or C# code to analyze
            analysis_type: 'xaml', 'csharp', or 'auto' to detect automatically

        Returns:
            Markdown performance report with a 0-100 score
        """
        return tools.analyze(code_content, analysis_type, app_config=resolved)

    @mcp.tool()
    def convert_wpf_xaml(wpf_xaml: str) -> str:
        """
        Convert WPF XAML to AvaloniaUI XAML and validate the result.

        Args:
            wpf_xaml: WPF XAML content to convert
        """
        return tools.convert_wpf(wpf_xaml, app_config=resolved)

    @mcp.tool()
    def list_rules() -> dict:
        """List every lint rule with its category and the rule sets using it."""
        return {
            "version": __version__,
            "rules": [
                {
                    "rule_id": info.rule_id,
                    "description": info.description,
                    "category": info.category,
                    "rule_sets": list(info.rule_sets),
                }
                for info in list_rule_info()
            ],
        }

    return mcp


def run_stdio(app_config: AppConfig | None = None) -> None:
    """Serve over stdio until the client disconnects."""
    # Suppress verbose MCP logging
    logging.getLogger("mcp").setLevel(logging.ERROR)
    logger.info("Starting %s %s over stdio", SERVER_NAME, __version__)
    create_server(app_config).run(transport="stdio")
