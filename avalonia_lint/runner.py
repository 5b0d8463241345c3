"""Rule set orchestration."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from avalonia_lint.config import RunConfig
from avalonia_lint.document import (
    DocumentKind,
    ParseError,
    SourceText,
    XamlDocument,
    detect_kind,
    parse_source,
    parse_xaml,
)
from avalonia_lint.policy import DEFAULT_POLICY, ScoringPolicy
from avalonia_lint.rules import default_rules
from avalonia_lint.rules.base import Finding, Rule, Severity

logger = logging.getLogger(__name__)

ToolName = Literal["validate", "analyze"]

PARSE_RULE_ID = "parse"
DETECT_RULE_ID = "detect_kind"


@dataclass(frozen=True, slots=True)
class RunResult:
    """All findings of one run plus the derived verdict."""

    tool: ToolName
    document_kind: DocumentKind | None
    config: RunConfig
    findings: tuple[Finding, ...]
    passed: bool
    score: int

    @property
    def issues(self) -> tuple[Finding, ...]:
        return tuple(finding for finding in self.findings if finding.is_issue)

    @property
    def recommendations(self) -> tuple[Finding, ...]:
        return tuple(finding for finding in self.findings if not finding.is_issue)


def validate_document(
    text: str,
    config: RunConfig,
    *,
    rules: Sequence[Rule] | None = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> RunResult:
    """Validate XAML text with the validation rule set."""
    active_rules = rules if rules is not None else default_rules("validation")
    return run(text, config, tool="validate", document_kind="xaml", rules=active_rules, policy=policy)


def analyze_code(
    text: str,
    config: RunConfig,
    *,
    xaml_rules: Sequence[Rule] | None = None,
    csharp_rules: Sequence[Rule] | None = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> RunResult:
    """Analyze XAML or C# text for performance issues."""
    if not text or not text.strip():
        return _fatal(
            config,
            tool="analyze",
            document_kind=None,
            finding=_parse_failure("code", ParseError(message="Code content cannot be empty")),
        )

    if config.analysis_kind == "auto":
        document_kind = detect_kind(text)
    else:
        document_kind = "xaml" if config.analysis_kind == "xaml" else "csharp"

    if document_kind is None:
        return _fatal(
            config,
            tool="analyze",
            document_kind=None,
            finding=Finding(
                rule_id=DETECT_RULE_ID,
                severity=Severity.ERROR,
                message="Unable to determine code type.",
                suggestion="Specify 'xaml' or 'csharp' explicitly.",
            ),
        )

    if document_kind == "xaml":
        rules = xaml_rules if xaml_rules is not None else default_rules("performance")
    else:
        rules = csharp_rules if csharp_rules is not None else default_rules("csharp")
    return run(text, config, tool="analyze", document_kind=document_kind, rules=rules, policy=policy)


def run(
    text: str,
    config: RunConfig,
    *,
    tool: ToolName,
    document_kind: DocumentKind,
    rules: Sequence[Rule],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> RunResult:
    """Parse text and evaluate every rule against the resulting document."""
    document = parse_xaml(text) if document_kind == "xaml" else parse_source(text)
    if isinstance(document, ParseError):
        logger.debug("Parse failed for %s input: %s", document_kind, document.message)
        return _fatal(
            config,
            tool=tool,
            document_kind=document_kind,
            finding=_parse_failure(document_kind, document),
        )

    findings = tuple(evaluate_rules(rules, document, config))
    verdict = policy.decide(findings, config)
    return RunResult(
        tool=tool,
        document_kind=document_kind,
        config=config,
        findings=findings,
        passed=verdict.passed,
        score=verdict.score,
    )


def evaluate_rules(
    rules: Sequence[Rule],
    document: XamlDocument | SourceText,
    config: RunConfig,
) -> list[Finding]:
    """Run rules in order; a failing rule becomes an error finding."""
    findings: list[Finding] = []
    for rule in rules:
        rule_id = getattr(rule, "rule_id", rule.__class__.__name__)
        try:
            findings.extend(rule.evaluate(document, config))
        except Exception as exc:
            logger.exception("Rule %s failed", rule_id)
            findings.append(
                Finding(
                    rule_id=rule_id,
                    severity=Severity.ERROR,
                    message=f"Rule '{rule_id}' failed: {exc.__class__.__name__}: {exc}",
                    suggestion="Report this input; other rules were still evaluated.",
                )
            )
    return findings


def _parse_failure(document_kind: str, error: ParseError) -> Finding:
    label = "XAML" if document_kind == "xaml" else "code"
    return Finding(
        rule_id=PARSE_RULE_ID,
        severity=Severity.ERROR,
        message=f"Invalid {label} syntax - cannot analyze further.",
        evidence=error.message,
    )


def _fatal(
    config: RunConfig,
    *,
    tool: ToolName,
    document_kind: DocumentKind | None,
    finding: Finding,
) -> RunResult:
    return RunResult(
        tool=tool,
        document_kind=document_kind,
        config=config,
        findings=(finding,),
        passed=False,
        score=0,
    )
