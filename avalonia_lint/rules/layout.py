"""Layout performance rules."""

from __future__ import annotations

from xml.etree.ElementTree import Element

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XamlDocument, local_name
from avalonia_lint.rules.base import Finding, Severity

LAYOUT_CONTAINERS = {"Grid", "StackPanel", "DockPanel", "Canvas", "WrapPanel"}


class LayoutNestingRule:
    """Flags layout containers nested deeper than the configured limit."""

    rule_id = "layout_nesting"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        depth = _layout_depth(document.root)
        limit = config.thresholds.max_layout_depth
        if depth <= limit:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=f"Deep layout nesting detected ({depth} levels).",
                suggestion="Flatten the layout hierarchy, for example with a single Grid.",
                evidence=f"{depth} nested layout containers, limit {limit}",
            )
        ]


class GridDefinitionsRule:
    """Flags grids positioning children without row or column definitions."""

    rule_id = "grid_definitions"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        findings: list[Finding] = []
        for grid in document.elements_named("Grid"):
            if _has_definitions(grid):
                continue
            if not any(_uses_grid_placement(child) for child in grid):
                continue
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="Grid uses Grid.Row/Grid.Column without RowDefinitions/ColumnDefinitions.",
                    suggestion="Define explicit RowDefinitions and ColumnDefinitions.",
                    evidence=_describe(grid),
                )
            )
        return findings


class CanvasUsageRule:
    """Flags heavy use of Canvas, which bypasses layout."""

    rule_id = "canvas_usage"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        count = len(document.elements_named("Canvas"))
        limit = config.thresholds.max_canvas
        if count <= limit:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=f"Multiple Canvas controls detected ({count}).",
                suggestion="Prefer Grid or other layout panels; Canvas bypasses layout optimization.",
                evidence=f"{count} Canvas elements, limit {limit}",
            )
        ]


def _layout_depth(root: Element) -> int:
    # Explicit stack; documents may nest deeper than the recursion limit.
    deepest = 0
    stack = [(root, 0)]
    while stack:
        element, depth = stack.pop()
        if local_name(element.tag) in LAYOUT_CONTAINERS:
            depth += 1
        deepest = max(deepest, depth)
        stack.extend((child, depth) for child in element)
    return deepest


def _has_definitions(grid: Element) -> bool:
    if grid.get("RowDefinitions") is not None or grid.get("ColumnDefinitions") is not None:
        return True
    return any(local_name(child.tag).endswith("Definitions") for child in grid)


def _uses_grid_placement(element: Element) -> bool:
    return any(local_name(key).startswith("Grid.") for key in element.attrib)


def _describe(element: Element) -> str:
    name = element.get("Name")
    if name:
        return f"<{local_name(element.tag)} Name='{name}'>"
    return f"<{local_name(element.tag)}>"
