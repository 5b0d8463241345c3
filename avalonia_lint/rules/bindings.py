"""Data binding performance rules."""

from __future__ import annotations

from collections.abc import Iterator

from avalonia_lint.config import RunConfig
from avalonia_lint.document import XamlDocument, has_local_attribute, local_name
from avalonia_lint.rules.base import Finding, Severity

BINDING_MARKER = "{Binding"


class CompiledBindingsRule:
    """Checks that bindings can be compiled through a root x:DataType."""

    rule_id = "compiled_bindings"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        has_data_type = has_local_attribute(document.root, "DataType")
        if has_data_type:
            return [
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="Using compiled bindings; good for performance.",
                )
            ]

        binding_count = sum(1 for _ in _binding_attributes(document))
        if binding_count == 0:
            return []
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message="Missing x:DataType; bindings fall back to reflection.",
                suggestion='Add x:DataType="vm:MyViewModel" to the root to enable compiled bindings.',
                evidence=f"{binding_count} binding(s) without a root x:DataType",
            )
        ]


class BindingPathsRule:
    """Flags long binding paths and reflection-based StringFormat bindings."""

    rule_id = "binding_paths"
    category = "performance"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        thresholds = config.thresholds
        findings: list[Finding] = []
        string_format_count = 0

        for element_name, value in _binding_attributes(document):
            path = binding_path(value)
            if path.count(".") > thresholds.max_binding_path_dots:
                findings.append(
                    Finding(
                        rule_id=self.rule_id,
                        severity=Severity.WARNING,
                        message=f"Complex binding path detected: {path}",
                        suggestion="Flatten the view model path or use a converter.",
                        evidence=f"{element_name}: {_clip(value, thresholds.max_binding_preview)}",
                    )
                )
            if "StringFormat" in value:
                string_format_count += 1

        if string_format_count and not has_local_attribute(document.root, "DataType"):
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message=(
                        f"{string_format_count} StringFormat binding(s) would perform better "
                        "as compiled bindings."
                    ),
                )
            )
        return findings


def binding_path(value: str) -> str:
    """Extract the source path of a ``{Binding ...}`` markup extension."""
    start = value.find(BINDING_MARKER)
    if start < 0:
        return ""
    arguments = _binding_arguments(value[start + len(BINDING_MARKER) :])
    for argument in arguments:
        key, separator, rest = argument.partition("=")
        if separator and key.strip() == "Path":
            return rest.strip()
    if arguments and "=" not in arguments[0]:
        return arguments[0]
    return ""


def _binding_arguments(body: str) -> list[str]:
    # Commas inside nested markup extensions belong to those extensions.
    arguments: list[str] = []
    current: list[str] = []
    depth = 0
    for char in body:
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                break
            depth -= 1
        elif char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    arguments.append("".join(current).strip())
    return [argument for argument in arguments if argument]


def _binding_attributes(document: XamlDocument) -> Iterator[tuple[str, str]]:
    for element in document.iter_elements():
        for value in element.attrib.values():
            if BINDING_MARKER in value:
                yield local_name(element.tag), value


def _clip(value: str, max_len: int) -> str:
    stripped = value.strip()
    if len(stripped) <= max_len:
        return stripped
    return stripped[:max_len] + "..."
