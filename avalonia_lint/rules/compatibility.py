"""WPF-to-AvaloniaUI compatibility rules."""

from __future__ import annotations

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XamlDocument, local_name
from avalonia_lint.rules.base import Finding, Severity

# Element local names with no AvaloniaUI counterpart.
WPF_ONLY_ELEMENTS = (
    "FlowDocument",
    "FlowDocumentReader",
    "FlowDocumentScrollViewer",
    "DocumentViewer",
    "InkCanvas",
    "Frame",
    "Page",
    "RichTextBox",
    "Style.Triggers",
    "ControlTemplate.Triggers",
    "DataTemplate.Triggers",
    "DataTrigger",
    "MultiTrigger",
    "EventTrigger",
)


class UnsupportedElementsRule:
    """Flags WPF-only elements that AvaloniaUI does not provide."""

    rule_id = "unsupported_elements"
    category = "compatibility"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        counts: dict[str, int] = {}
        for element in document.iter_elements():
            name = local_name(element.tag)
            if name in WPF_ONLY_ELEMENTS:
                counts[name] = counts.get(name, 0) + 1

        findings: list[Finding] = []
        for name in WPF_ONLY_ELEMENTS:
            count = counts.get(name)
            if not count:
                continue
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message=f"{name} is not available in AvaloniaUI.",
                    suggestion=_suggestion_for(name),
                    evidence=f"{count} occurrence(s) of <{name}>",
                )
            )
        return findings


class AncestorBindingsRule:
    """Flags bindings that walk the tree with RelativeSource FindAncestor."""

    rule_id = "ancestor_bindings"
    category = "compatibility"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        findings: list[Finding] = []
        for element in document.iter_elements():
            for key, value in element.attrib.items():
                if "{Binding" not in value or "FindAncestor" not in value:
                    continue
                findings.append(
                    Finding(
                        rule_id=self.rule_id,
                        severity=Severity.WARNING,
                        message="FindAncestor RelativeSource binding may not behave as in WPF.",
                        suggestion=(
                            "Use the $parent[ControlType] binding syntax instead of "
                            "RelativeSource FindAncestor."
                        ),
                        evidence=f"{local_name(element.tag)}.{local_name(key)}",
                    )
                )
        return findings


def _suggestion_for(name: str) -> str:
    if name.endswith("Triggers") or name.endswith("Trigger"):
        return "Use style selectors with pseudo-classes (for example :pointerover) instead."
    if name.startswith("FlowDocument") or name in {"DocumentViewer", "RichTextBox"}:
        return "Use SelectableTextBlock or a third-party rich text control."
    if name in {"Frame", "Page"}:
        return "Use a ContentControl or TransitioningContentControl with view models."
    return "Consider an AvaloniaUI alternative or a custom control."
