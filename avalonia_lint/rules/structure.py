"""Confirmatory document-structure rules."""

from __future__ import annotations

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XAML_NAMESPACE, XamlDocument, get_attribute
from avalonia_lint.rules.base import Finding, Severity


class RootStructureRule:
    """Confirms recognised root elements and their recommended properties."""

    rule_id = "root_structure"
    category = "structure"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        root = document.root
        root_name = document.root_name
        if root_name == "UserControl":
            return [self._info("Root element is UserControl.")]
        if root_name != "Window":
            return []

        findings = [self._info("Root element is Window.")]
        if root.get("Title") is not None:
            findings.append(self._info("Window has Title property."))
        if root.get("Width") is not None and root.get("Height") is not None:
            findings.append(self._info("Window has Width and Height properties."))
        return findings

    def _info(self, message: str) -> Finding:
        return Finding(rule_id=self.rule_id, severity=Severity.INFO, message=message)


class DataContextRule:
    """Counts DataContext assignments and x:DataType declarations."""

    rule_id = "data_context"
    category = "structure"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        count = sum(
            1
            for element in document.iter_elements()
            if element.get("DataContext") is not None
            or get_attribute(element, "DataType", XAML_NAMESPACE) is not None
        )
        if count == 0:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.INFO,
                message=f"Found {count} DataContext/DataType usage(s).",
            )
        ]


class FileExtensionRule:
    """Reminds that AvaloniaUI XAML files use the .axaml extension."""

    rule_id = "file_extension"
    category = "structure"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        if not config.includes_tips:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.INFO,
                message="AvaloniaUI XAML files should use the .axaml extension instead of .xaml.",
            )
        ]
