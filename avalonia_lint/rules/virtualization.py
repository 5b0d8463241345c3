"""Items-control virtualization rule."""

from __future__ import annotations

from xml.etree.ElementTree import Element

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XamlDocument, local_name
from avalonia_lint.rules.base import Finding, Severity

LIST_CONTROLS = ("ListBox", "ListView", "DataGrid", "TreeView")


class VirtualizationRule:
    """Suggests virtualization for list-like controls that may hold many rows."""

    rule_id = "virtualization"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        findings: list[Finding] = []
        for element in document.iter_elements():
            name = local_name(element.tag)
            if name not in LIST_CONTROLS or _has_virtualization_hint(element):
                continue
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message=f"Consider enabling virtualization for {name} with large data sets.",
                    suggestion="Use a VirtualizingStackPanel as the ItemsPanel.",
                )
            )
        return findings


def _has_virtualization_hint(control: Element) -> bool:
    for key, value in control.attrib.items():
        if "Virtualiz" in local_name(key) or "VirtualizingStackPanel" in value:
            return True
    return any(
        local_name(descendant.tag) == "VirtualizingStackPanel" for descendant in control.iter()
    )
