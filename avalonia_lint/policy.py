"""Pass/fail and score policy.

The default policy is a flat linear penalty: every warning or error costs the
same number of points regardless of which rule produced it. It is deliberately
predictable rather than precise, and it saturates quickly (ten issues reach
zero on any document size). Callers wanting a different curve pass their own
``ScoringPolicy`` to the runner.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from avalonia_lint.config import RunConfig
from avalonia_lint.rules.base import Finding, Severity

DEFAULT_PENALTY = 10
MAX_SCORE = 100


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of applying a policy to a run's findings."""

    passed: bool
    score: int


class ScoringPolicy(Protocol):
    """Maps findings and run options to a verdict."""

    def decide(self, findings: Sequence[Finding], config: RunConfig) -> Verdict:
        """Return pass/fail and a 0..100 score."""


@dataclass(frozen=True, slots=True)
class LinearPenaltyPolicy:
    """Subtracts a fixed penalty per warning or error from 100."""

    penalty: int = DEFAULT_PENALTY

    def decide(self, findings: Sequence[Finding], config: RunConfig) -> Verdict:
        if self.penalty < 0:
            raise ValueError(f"penalty must be non-negative, got {self.penalty}")
        return Verdict(
            passed=is_passing(findings, config),
            score=_clamp(MAX_SCORE - self.penalty * count_issues(findings)),
        )


DEFAULT_POLICY = LinearPenaltyPolicy()


def decide(findings: Sequence[Finding], config: RunConfig) -> Verdict:
    """Apply the default linear policy."""
    return DEFAULT_POLICY.decide(findings, config)


def is_passing(findings: Sequence[Finding], config: RunConfig) -> bool:
    """Errors always fail a run; warnings fail it only at the strict level."""
    for finding in findings:
        if finding.severity is Severity.ERROR:
            return False
        if finding.severity is Severity.WARNING and config.is_strict:
            return False
    return True


def count_issues(findings: Sequence[Finding]) -> int:
    return sum(1 for finding in findings if finding.is_issue)


def _clamp(value: int, lower: int = 0, upper: int = MAX_SCORE) -> int:
    return max(lower, min(upper, value))
