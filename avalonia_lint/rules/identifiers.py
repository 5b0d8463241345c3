"""Resource key and element name rules."""

from __future__ import annotations

from xml.etree.ElementTree import Element

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XAML_NAMESPACE, XamlDocument, get_attribute, local_name
from avalonia_lint.rules.base import Finding, Severity
from avalonia_lint.rules.resources import resource_entries, resource_sections


class DuplicateIdentifiersRule:
    """Finds resource keys and element names that are declared more than once."""

    rule_id = "duplicate_identifiers"
    category = "correctness"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        findings: list[Finding] = []

        key_counts: dict[str, int] = {}
        for section in resource_sections(document):
            for entry in resource_entries(section):
                key = get_attribute(entry, "Key", XAML_NAMESPACE)
                if key is not None:
                    key_counts[key] = key_counts.get(key, 0) + 1

        for key, count in key_counts.items():
            if count < 2:
                continue
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.ERROR,
                    message=f"Duplicate resource key '{key}'.",
                    suggestion="Give every resource in the document a unique x:Key.",
                    evidence=f"x:Key='{key}' declared {count} times",
                )
            )

        for name, count in _collect_names(document.root).items():
            if count < 2:
                continue
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.ERROR,
                    message=f"Element name '{name}' is declared more than once.",
                    suggestion="Element names must be unique within a name scope.",
                    evidence=f"Name='{name}' declared {count} times",
                )
            )
        return findings


class NameDirectivesRule:
    """Counts x:Name directives, which AvaloniaUI supports."""

    rule_id = "name_directives"
    category = "structure"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        count = sum(
            1
            for element in document.iter_elements()
            if get_attribute(element, "Name", XAML_NAMESPACE) is not None
        )
        if count == 0:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.INFO,
                message=f"Found {count} x:Name attribute(s) (compatible with AvaloniaUI).",
            )
        ]


def _collect_names(root: Element) -> dict[str, int]:
    counts: dict[str, int] = {}
    stack = [root]
    while stack:
        element = stack.pop()
        # Templates open their own name scope.
        if element is not root and local_name(element.tag).endswith("Template"):
            continue
        name = get_attribute(element, "Name", XAML_NAMESPACE) or element.get("Name")
        if name:
            counts[name] = counts.get(name, 0) + 1
        stack.extend(reversed(element))
    return counts
