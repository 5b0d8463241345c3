"""Tests for C# source rules."""

from __future__ import annotations

from avalonia_lint.config import RunConfig
from avalonia_lint.document import SourceText
from avalonia_lint.rules import Severity, default_rules
from avalonia_lint.rules.csharp import (
    AsyncPatternsRule,
    AvaloniaPropertiesRule,
    CollectionUsageRule,
    EventLifecycleRule,
    PropertyNotificationRule,
)


def _source(text: str) -> SourceText:
    return SourceText(text=text)


def test_property_notification_missing() -> None:
    source = _source("public class MainViewModel { public string Name { get; set; } }")
    findings = PropertyNotificationRule().evaluate(source, RunConfig())
    assert [finding.message for finding in findings] == [
        "No property change notification detected in view model."
    ]


def test_property_notification_declared_but_never_raised() -> None:
    source = _source(
        "public class MainViewModel : INotifyPropertyChanged\n"
        "{\n"
        "    public event PropertyChangedEventHandler? PropertyChanged;\n"
        "}\n"
    )
    findings = PropertyNotificationRule().evaluate(source, RunConfig())
    assert [finding.message for finding in findings] == [
        "PropertyChanged event declared but never raised."
    ]


def test_property_notification_satisfied() -> None:
    raised = _source(
        "class Vm : INotifyPropertyChanged {\n"
        "    public event PropertyChangedEventHandler? PropertyChanged;\n"
        "    void Set() => PropertyChanged?.Invoke(this, new(nameof(Name)));\n"
        "}\n"
    )
    reactive = _source(
        "class Vm : ReactiveObject { "
        "string Name { set => this.RaiseAndSetIfChanged(ref _name, value); } }"
    )
    assert PropertyNotificationRule().evaluate(raised, RunConfig()) == []
    assert PropertyNotificationRule().evaluate(reactive, RunConfig()) == []


def test_async_void_outside_event_handlers() -> None:
    source = _source(
        "class Page {\n"
        "    async void LoadData() { await Dispatcher.UIThread.InvokeAsync(Refresh); }\n"
        "    async void OnClick(object? sender, RoutedEventArgs e) { }\n"
        "}\n"
    )
    findings = AsyncPatternsRule().evaluate(source, RunConfig())
    assert len(findings) == 1
    assert findings[0].severity is Severity.WARNING
    assert findings[0].evidence == "LoadData"


def test_configure_await_hint_for_non_ui_code() -> None:
    library = _source("class Store { async Task Load() { await _client.GetAsync(url); } }")
    configured = _source(
        "class Store { async Task Load() { await _client.GetAsync(url).ConfigureAwait(false); } }"
    )
    ui = _source("class Page { async Task Load() { await Dispatcher.InvokeAsync(Refresh); } }")

    findings = AsyncPatternsRule().evaluate(library, RunConfig())
    assert [finding.severity for finding in findings] == [Severity.INFO]
    assert AsyncPatternsRule().evaluate(configured, RunConfig()) == []
    assert AsyncPatternsRule().evaluate(ui, RunConfig()) == []


def test_collection_usage_suggests_observable_collection() -> None:
    source = _source(
        "var items = new List<string>();\n"
        "foreach (var name in names) items.Add(name);\n"
    )
    findings = CollectionUsageRule().evaluate(source, RunConfig())
    assert [finding.severity for finding in findings] == [Severity.INFO]


def test_collection_usage_flags_linq_inside_loops() -> None:
    source = _source(
        "foreach (var order in orders)\n"
        "{\n"
        "    var customer = customers.FirstOrDefault(c => c.Id == order.CustomerId);\n"
        "}\n"
    )
    findings = CollectionUsageRule().evaluate(source, RunConfig())
    assert [finding.message for finding in findings] == ["LINQ operations inside loops detected."]


def test_collection_usage_ignores_linq_outside_loops() -> None:
    source = _source("var active = users.Where(u => u.IsActive).ToList();")
    assert CollectionUsageRule().evaluate(source, RunConfig()) == []


def test_event_lifecycle_flags_missing_unsubscription() -> None:
    source = _source("button.Click += OnClick;")
    findings = EventLifecycleRule().evaluate(source, RunConfig())
    assert [finding.message for finding in findings] == [
        "Event subscriptions without unsubscription detected."
    ]
    balanced = _source("button.Click += OnClick;\nbutton.Click -= OnClick;")
    assert EventLifecycleRule().evaluate(balanced, RunConfig()) == []


def test_event_lifecycle_flags_undisposed_timers() -> None:
    source = _source("var timer = new DispatcherTimer { Interval = TimeSpan.FromSeconds(1) };")
    findings = EventLifecycleRule().evaluate(source, RunConfig())
    assert [finding.message for finding in findings] == ["Timer usage without a disposal pattern."]
    disposed = _source("var timer = new Timer(Tick); timer.Dispose();")
    assert EventLifecycleRule().evaluate(disposed, RunConfig()) == []


def test_avalonia_properties() -> None:
    wpf = _source("public static readonly DependencyProperty TitleProperty = Register();")
    avalonia = _source(
        "public static readonly StyledProperty<string> TitleProperty = "
        "AvaloniaProperty.Register<MyControl, string>(nameof(Title));"
    )
    wpf_findings = AvaloniaPropertiesRule().evaluate(wpf, RunConfig())
    assert [finding.severity for finding in wpf_findings] == [Severity.WARNING]
    avalonia_findings = AvaloniaPropertiesRule().evaluate(avalonia, RunConfig())
    assert [finding.severity for finding in avalonia_findings] == [Severity.INFO]


def test_csharp_rule_set_order() -> None:
    rule_ids = [rule.rule_id for rule in default_rules("csharp")]
    assert rule_ids == [
        "property_notification",
        "async_patterns",
        "collection_usage",
        "event_lifecycle",
        "avalonia_properties",
    ]
