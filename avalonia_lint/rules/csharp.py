"""Text-pattern rules for C# view models and code-behind."""

from __future__ import annotations

import re

from avalonia_lint.config import RunConfig
from avalonia_lint.document import SourceText
from avalonia_lint.rules.base import Finding, Severity

PROPERTY_CHANGED_RAISE_RE = re.compile(r"PropertyChanged\?\.Invoke|OnPropertyChanged|RaisePropertyChanged")
ASYNC_VOID_RE = re.compile(r"\basync\s+void\s+(?P<name>\w+)\s*\((?P<params>[^)]*)\)")
LINQ_IN_LOOP_RE = re.compile(
    r"\b(?:for|foreach|while)\s*\([^{]*\{[^}]*\.(?:Where|Select|First|Single)\w*\s*\("
)
EVENT_SUBSCRIBE_RE = re.compile(r"\b\w*(?:Changed|Event|Click|Tick)\w*\s*\+=")
EVENT_UNSUBSCRIBE_RE = re.compile(r"-=")


class PropertyNotificationRule:
    """Checks view models for property change notification."""

    rule_id = "property_notification"
    category = "performance"

    def evaluate(self, document: SourceText, config: RunConfig) -> list[Finding]:
        text = document.text
        has_notify = "INotifyPropertyChanged" in text
        has_reactive = "ReactiveObject" in text or "RaiseAndSetIfChanged" in text
        has_observable = "ObservableObject" in text or "[ObservableProperty]" in text
        findings: list[Finding] = []

        if not (has_notify or has_reactive or has_observable):
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="No property change notification detected in view model.",
                    suggestion=(
                        "Implement INotifyPropertyChanged or inherit from ReactiveObject "
                        "so bindings observe updates."
                    ),
                )
            )

        if "PropertyChanged" in text and not has_reactive and not PROPERTY_CHANGED_RAISE_RE.search(text):
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="PropertyChanged event declared but never raised.",
                    suggestion="Invoke PropertyChanged whenever a bound property changes.",
                )
            )
        return findings


class AsyncPatternsRule:
    """Flags async void methods and missing ConfigureAwait in library code."""

    rule_id = "async_patterns"
    category = "performance"

    def evaluate(self, document: SourceText, config: RunConfig) -> list[Finding]:
        text = document.text
        findings: list[Finding] = []

        offenders = [
            match.group("name")
            for match in ASYNC_VOID_RE.finditer(text)
            if "EventArgs" not in match.group("params")
        ]
        if offenders:
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="async void methods detected outside event handlers.",
                    suggestion="Return Task from async methods that are not event handlers.",
                    evidence=", ".join(offenders),
                )
            )

        is_ui_code = "UI" in text or "Dispatcher" in text
        if "await" in text and "ConfigureAwait(false)" not in text and not is_ui_code:
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="Consider ConfigureAwait(false) for non-UI async operations.",
                )
            )
        return findings


class CollectionUsageRule:
    """Checks collection types and LINQ usage inside loops."""

    rule_id = "collection_usage"
    category = "performance"

    def evaluate(self, document: SourceText, config: RunConfig) -> list[Finding]:
        text = document.text
        findings: list[Finding] = []

        if "List<" in text and "Add(" in text and "foreach" in text:
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="Consider ObservableCollection for data-bound collections.",
                )
            )

        if LINQ_IN_LOOP_RE.search(text):
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="LINQ operations inside loops detected.",
                    suggestion="Move LINQ queries out of loops or materialize them once.",
                )
            )
        return findings


class EventLifecycleRule:
    """Flags event subscriptions and timers that are never released."""

    rule_id = "event_lifecycle"
    category = "reliability"

    def evaluate(self, document: SourceText, config: RunConfig) -> list[Finding]:
        text = document.text
        findings: list[Finding] = []

        if EVENT_SUBSCRIBE_RE.search(text) and not EVENT_UNSUBSCRIBE_RE.search(text):
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="Event subscriptions without unsubscription detected.",
                    suggestion="Unsubscribe handlers (-=) when the owner is detached to avoid leaks.",
                )
            )

        if "Timer" in text and "Dispose" not in text:
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="Timer usage without a disposal pattern.",
                    suggestion="Stop and dispose timers when they are no longer needed.",
                )
            )
        return findings


class AvaloniaPropertiesRule:
    """Checks for WPF dependency properties in AvaloniaUI controls."""

    rule_id = "avalonia_properties"
    category = "compatibility"

    def evaluate(self, document: SourceText, config: RunConfig) -> list[Finding]:
        text = document.text
        findings: list[Finding] = []

        if "DependencyProperty" in text:
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.WARNING,
                    message="WPF DependencyProperty usage detected.",
                    suggestion="Use AvaloniaProperty.Register (StyledProperty) instead.",
                )
            )

        if "AvaloniaProperty" in text or "StyledProperty" in text:
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    severity=Severity.INFO,
                    message="Good use of AvaloniaProperty for custom controls.",
                )
            )
        return findings
