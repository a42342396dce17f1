"""Shared pieces for structural (convention) checkers."""

from collections.abc import Callable
from dataclasses import dataclass, field

from code_quality.domain.entities.quality import Issue, ProjectInfo, Severity
from code_quality.domain.ports.config import AnalysisConfig
from code_quality.infrastructure.analyzer.file_collector import FileCollector
from code_quality.infrastructure.rules.rule_catalog import RuleSet


@dataclass(frozen=True)
class Expectation:
    """Directory or file a convention expects, by relative path."""

    path: str
    description: str
    optional: bool = False
    alt_names: tuple[str, ...] = ()

    def candidates(self) -> tuple[str, ...]:
        return (self.path, *self.alt_names)


@dataclass
class StructuralContext:
    """Inputs a structural checker may use."""

    collector: FileCollector
    project_info: ProjectInfo
    rules: RuleSet
    config: AnalysisConfig = field(default_factory=AnalysisConfig)
    variant: str | None = None


StructuralChecker = Callable[[StructuralContext], list[Issue]]


def check_expected(
    collector: FileCollector,
    expectations: tuple[Expectation, ...],
    *,
    category: str,
    rule: str,
    severity: Severity = "warning",
    base: str = "",
) -> list[Issue]:
    """One issue per required expectation with no existing candidate path."""
    prefix = f"{base.rstrip('/')}/" if base else ""
    issues: list[Issue] = []
    for exp in expectations:
        if exp.optional:
            continue
        if any(collector.exists(prefix + candidate) for candidate in exp.candidates()):
            continue
        names = " or ".join(prefix + c for c in exp.candidates())
        issues.append(
            Issue(
                severity=severity,
                category=category,
                rule=rule,
                message=f"Missing {names}: {exp.description}",
                file=prefix + exp.path,
            )
        )
    return issues


def missing_issue(
    path: str,
    description: str,
    *,
    severity: Severity,
    category: str,
    rule: str,
) -> Issue:
    return Issue(severity=severity, category=category, rule=rule, message=f"Missing {path}: {description}", file=path)
