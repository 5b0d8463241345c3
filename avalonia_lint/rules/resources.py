"""Resource section rules."""

from __future__ import annotations

from xml.etree.ElementTree import Element

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XAML_NAMESPACE, XamlDocument, get_attribute, local_name
from avalonia_lint.rules.base import Finding, Severity


class ResourceSectionsRule:
    """Counts declared resource sections."""

    rule_id = "resource_sections"
    category = "structure"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        sections = resource_sections(document)
        if not sections:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.INFO,
                message=f"Found {len(sections)} resource section(s).",
            )
        ]


class ResourceVolumeRule:
    """Flags documents that carry too many inline resources."""

    rule_id = "resource_volume"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        total = sum(len(resource_entries(section)) for section in resource_sections(document))
        limit = config.thresholds.max_resources
        if total <= limit:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=f"Large number of resources ({total}) in a single file.",
                suggestion="Split resources into separate ResourceDictionary files.",
                evidence=f"{total} resource entries, limit {limit}",
            )
        ]


def resource_sections(document: XamlDocument) -> list[Element]:
    return [
        element
        for element in document.iter_elements()
        if local_name(element.tag).endswith("Resources")
    ]


def resource_entries(section: Element) -> list[Element]:
    """Entries of a resource section, looking through unkeyed ResourceDictionary wrappers.

    Property elements such as ``ResourceDictionary.MergedDictionaries`` are not
    entries and are skipped along with their content.
    """
    entries: list[Element] = []
    stack = list(reversed(section))
    while stack:
        element = stack.pop()
        name = local_name(element.tag)
        if "." in name:
            continue
        if name == "ResourceDictionary" and get_attribute(element, "Key", XAML_NAMESPACE) is None:
            stack.extend(reversed(element))
            continue
        entries.append(element)
    return entries
