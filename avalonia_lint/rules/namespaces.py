"""Root namespace declaration rules."""

from __future__ import annotations

from avalonia_lint.config import RunConfig
from avalonia_lint.document import (
    AVALONIA_NAMESPACE,
    WPF_PRESENTATION_NAMESPACE,
    XAML_NAMESPACE,
    XamlDocument,
)
from avalonia_lint.rules.base import Finding, Severity


class DefaultNamespaceRule:
    """Checks that the root declares the AvaloniaUI default namespace."""

    rule_id = "default_namespace"
    category = "compatibility"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        declared = document.default_namespace
        if declared == AVALONIA_NAMESPACE:
            return [
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="AvaloniaUI namespace is correctly declared.",
                )
            ]

        if declared == WPF_PRESENTATION_NAMESPACE:
            message = "Root uses the WPF presentation namespace instead of AvaloniaUI."
            suggestion = (
                f"Replace '{WPF_PRESENTATION_NAMESPACE}' with '{AVALONIA_NAMESPACE}' "
                "or run the WPF conversion."
            )
        else:
            message = f"Missing or incorrect default AvaloniaUI namespace '{AVALONIA_NAMESPACE}'."
            suggestion = f'Declare xmlns="{AVALONIA_NAMESPACE}" on the root element.'
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=message,
                suggestion=suggestion,
                evidence=f"default namespace: {declared or '<none>'}",
            )
        ]


class XamlNamespaceRule:
    """Checks the ``x`` prefix binding for XAML language directives."""

    rule_id = "xaml_namespace"
    category = "compatibility"

    def evaluate(self, document: XamlDocument, config: RunConfig) -> list[Finding]:
        declared = document.namespace_for("x")
        if declared == XAML_NAMESPACE:
            return [
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="XAML namespace is correctly declared.",
                )
            ]
        if declared is None:
            return [
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="No 'x' namespace declared on the root element.",
                    suggestion=(
                        f'Declare xmlns:x="{XAML_NAMESPACE}" before using '
                        "x:Name, x:Key or x:DataType."
                    ),
                )
            ]
        return [
            Finding(
                rule_id=self.rule_id,
                severity=Severity.WARNING,
                message=f"Incorrect XAML namespace; expected '{XAML_NAMESPACE}'.",
                suggestion=f'Declare xmlns:x="{XAML_NAMESPACE}" on the root element.',
                evidence=f"xmlns:x={declared}",
            )
        ]
