"""Rules package."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from avalonia_lint.config import ConfigurationError
from avalonia_lint.rules.base import Finding, Rule, Severity
from avalonia_lint.rules.bindings import BindingPathsRule, CompiledBindingsRule
from avalonia_lint.rules.compatibility import AncestorBindingsRule, UnsupportedElementsRule
from avalonia_lint.rules.csharp import (
    AsyncPatternsRule,
    AvaloniaPropertiesRule,
    CollectionUsageRule,
    EventLifecycleRule,
    PropertyNotificationRule,
)
from avalonia_lint.rules.identifiers import DuplicateIdentifiersRule, NameDirectivesRule
from avalonia_lint.rules.layout import CanvasUsageRule, GridDefinitionsRule, LayoutNestingRule
from avalonia_lint.rules.namespaces import DefaultNamespaceRule, XamlNamespaceRule
from avalonia_lint.rules.resources import ResourceSectionsRule, ResourceVolumeRule
from avalonia_lint.rules.structure import DataContextRule, FileExtensionRule, RootStructureRule
from avalonia_lint.rules.styling import InlineStylesRule, SelectorComplexityRule
from avalonia_lint.rules.virtualization import VirtualizationRule

__all__ = [
    "RULE_SETS",
    "Finding",
    "Rule",
    "RuleInfo",
    "Severity",
    "build_rules",
    "default_rules",
    "list_rule_info",
]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    category: str
    rule_sets: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[], Rule]
    name: str
    description: str
    category: str


def _spec(rule_cls: type[Rule]) -> _RuleSpec:
    return _RuleSpec(
        rule_id=rule_cls.rule_id,
        factory=rule_cls,
        name=rule_cls.__name__,
        description=(rule_cls.__doc__ or "").strip(),
        category=rule_cls.category,
    )


_SPECS: dict[str, _RuleSpec] = {
    spec.rule_id: spec
    for spec in (
        _spec(DefaultNamespaceRule),
        _spec(XamlNamespaceRule),
        _spec(UnsupportedElementsRule),
        _spec(AncestorBindingsRule),
        _spec(DuplicateIdentifiersRule),
        _spec(NameDirectivesRule),
        _spec(RootStructureRule),
        _spec(DataContextRule),
        _spec(ResourceSectionsRule),
        _spec(FileExtensionRule),
        _spec(CompiledBindingsRule),
        _spec(BindingPathsRule),
        _spec(LayoutNestingRule),
        _spec(GridDefinitionsRule),
        _spec(CanvasUsageRule),
        _spec(ResourceVolumeRule),
        _spec(VirtualizationRule),
        _spec(SelectorComplexityRule),
        _spec(InlineStylesRule),
        _spec(PropertyNotificationRule),
        _spec(AsyncPatternsRule),
        _spec(CollectionUsageRule),
        _spec(EventLifecycleRule),
        _spec(AvaloniaPropertiesRule),
    )
}

_RULE_SET_ORDER: dict[str, tuple[str, ...]] = {
    "validation": (
        "default_namespace",
        "xaml_namespace",
        "unsupported_elements",
        "ancestor_bindings",
        "duplicate_identifiers",
        "name_directives",
        "root_structure",
        "data_context",
        "resource_sections",
        "file_extension",
    ),
    "performance": (
        "compiled_bindings",
        "binding_paths",
        "ancestor_bindings",
        "layout_nesting",
        "grid_definitions",
        "canvas_usage",
        "resource_volume",
        "duplicate_identifiers",
        "virtualization",
        "selector_complexity",
        "inline_styles",
    ),
    "csharp": (
        "property_notification",
        "async_patterns",
        "collection_usage",
        "event_lifecycle",
        "avalonia_properties",
    ),
}

RULE_SETS = tuple(_RULE_SET_ORDER)


def _instantiate(rule_ids: tuple[str, ...]) -> tuple[Rule, ...]:
    return tuple(_SPECS[rule_id].factory() for rule_id in rule_ids)


# Rules are stateless, so one instance per set is shared by every run.
_DEFAULT_RULES: Mapping[str, tuple[Rule, ...]] = MappingProxyType(
    {name: _instantiate(order) for name, order in _RULE_SET_ORDER.items()}
)


def default_rules(rule_set: str) -> tuple[Rule, ...]:
    """Return the registered rules of a rule set in evaluation order."""
    _ensure_rule_set(rule_set)
    return _DEFAULT_RULES[rule_set]


def build_rules(
    rule_set: str,
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
) -> tuple[Rule, ...]:
    """Build a rule set applying enable/disable filters."""
    order = _ensure_rule_set(rule_set)
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])
    unknown = [rule_id for rule_id in requested_ids if rule_id not in _SPECS]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ConfigurationError(f"Unknown rule ids: {joined}")

    if enabled_rule_ids is None and not disabled_rule_ids:
        return _DEFAULT_RULES[rule_set]

    disabled_set = set(disabled_rule_ids or [])
    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else None
    selected = tuple(
        rule_id
        for rule_id in order
        if rule_id not in disabled_set and (enabled_set is None or rule_id in enabled_set)
    )
    return _instantiate(selected)


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known rules."""
    info: list[RuleInfo] = []
    for rule_id, spec in _SPECS.items():
        info.append(
            RuleInfo(
                rule_id=rule_id,
                name=spec.name,
                description=spec.description,
                category=spec.category,
                rule_sets=tuple(
                    name for name, order in _RULE_SET_ORDER.items() if rule_id in order
                ),
            )
        )
    return info


def _ensure_rule_set(rule_set: str) -> tuple[str, ...]:
    order = _RULE_SET_ORDER.get(rule_set)
    if order is None:
        choices = ", ".join(RULE_SETS)
        raise ConfigurationError(f"Unknown rule set '{rule_set}'. Expected one of: {choices}")
    return order
