"""Styling performance rules."""

from __future__ import annotations

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XamlDocument, local_name
from avalonia_lint.rules.base import Finding, Severity

INLINE_STYLE_ATTRIBUTES = {"Background", "Foreground", "FontSize", "FontWeight"}


class SelectorComplexityRule:
    """Flags style selectors with long descendant chains or child combinators."""

    rule_id = "selector_complexity"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        limit = config.thresholds.max_selector_spaces
        complex_selectors: list[str] = []
        for style in document.elements_named("Style"):
            selector = style.get("Selector") or ""
            if selector.count(" ") > limit or ">" in selector:
                complex_selectors.append(selector)
        if not complex_selectors:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=f"Complex style selectors detected ({len(complex_selectors)}).",
                suggestion="Simplify selectors or use style classes.",
                evidence="; ".join(complex_selectors[:3]),
            )
        ]


class InlineStylesRule:
    """Flags widespread inline styling instead of reusable styles."""

    rule_id = "inline_styles"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        count = sum(
            1
            for element in document.iter_elements()
            if any(local_name(key) in INLINE_STYLE_ATTRIBUTES for key in element.attrib)
        )
        limit = config.thresholds.max_inline_styles
        if count <= limit:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=f"Many inline style properties ({count} elements).",
                suggestion="Define reusable styles or theme resources instead of inline properties.",
                evidence=f"{count} elements with inline styling, limit {limit}",
            )
        ]
