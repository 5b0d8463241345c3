"""WPF to AvaloniaUI XAML conversion."""

from __future__ import annotations

from dataclasses import dataclass, field

from avalonia_lint.document import AVALONIA_NAMESPACE, WPF_PRESENTATION_NAMESPACE

# (wpf text, avalonia text, note)
REPLACEMENTS = (
    (
        WPF_PRESENTATION_NAMESPACE,
        AVALONIA_NAMESPACE,
        "Replaced WPF presentation namespace with AvaloniaUI namespace.",
    ),
    (
        'Visibility="Collapsed"',
        'IsVisible="False"',
        'Replaced Visibility="Collapsed" with IsVisible="False".',
    ),
    (
        'Visibility="Hidden"',
        'IsVisible="False"',
        'Replaced Visibility="Hidden" with IsVisible="False" (layout space is not reserved).',
    ),
    (
        'Visibility="Visible"',
        'IsVisible="True"',
        'Replaced Visibility="Visible" with IsVisible="True".',
    ),
)

MANUAL_ATTENTION = (
    ("DependencyProperty", "DependencyProperty usage detected; convert to AvaloniaProperty."),
    ("RoutedCommand", "RoutedCommand usage detected; consider ReactiveCommand or ICommand."),
    ("Trigger", "Trigger usage detected; AvaloniaUI styles use selectors and pseudo-classes."),
    ("ControlTemplate", "ControlTemplate detected; verify it against AvaloniaUI templating."),
)


@dataclass(slots=True)
class ConversionResult:
    """Converted XAML with notes on what changed and what still needs review."""

    converted: str
    notes: list[str] = field(default_factory=list)
    manual_attention: list[str] = field(default_factory=list)


def convert_wpf_xaml(wpf_xaml: str) -> ConversionResult:
    """Rewrite WPF-specific XAML into its AvaloniaUI equivalent where mechanical."""
    converted = wpf_xaml
    notes: list[str] = []
    for source, target, note in REPLACEMENTS:
        if source in converted:
            converted = converted.replace(source, target)
            notes.append(note)

    manual = [message for token, message in MANUAL_ATTENTION if token in converted]
    return ConversionResult(converted=converted, notes=notes, manual_attention=manual)
