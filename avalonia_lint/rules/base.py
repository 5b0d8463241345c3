"""Base rule protocol and finding model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from avalonia_lint.config import RunConfig
    from avalonia_lint.document import SourceText, XamlDocument


class Severity(StrEnum):
    """Diagnostic severity of a finding."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single diagnostic emitted by a rule."""

    rule_id: str
    severity: Severity
    message: str
    suggestion: str | None = None
    evidence: str | None = None

    @property
    def is_issue(self) -> bool:
        return self.severity is not Severity.INFO


class Rule(Protocol):
    """Protocol for stateless document rules."""

    rule_id: str
    category: str

    def evaluate(
        self, document: XamlDocument | SourceText, config: RunConfig
    ) -> list[Finding]:
        """Evaluate a parsed document and return findings."""
