"""Angular conventions: core/shared/features layout, no direct DOM access."""

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import (
    Expectation,
    StructuralContext,
    check_expected,
    missing_issue,
)
from code_quality.infrastructure.rules.patterns import ANGULAR_DOM_ACCESS

FOLDERS: tuple[Expectation, ...] = (
    Expectation("src/app/core", "singleton services and guards"),
    Expectation("src/app/shared", "shared components, pipes, directives"),
    Expectation("src/app/features", "feature modules", alt_names=("src/app/modules",)),
    Expectation("src/assets", "static assets"),
    Expectation("src/environments", "environment configuration"),
    Expectation("src/styles", "global styles", optional=True),
)

# (path, description, rule)
SUB_FOLDERS: tuple[tuple[str, str, str], ...] = (
    ("src/app/core/services", "core services", "angular-core-structure"),
    ("src/app/shared/components", "shared components", "angular-shared-structure"),
)


def _features_dir(ctx: StructuralContext) -> str | None:
    for candidate in ("src/app/features", "src/app/modules"):
        if ctx.collector.is_dir(candidate):
            return candidate
    return None


def check_angular(ctx: StructuralContext) -> list[Issue]:
    collector = ctx.collector
    issues = check_expected(
        collector,
        FOLDERS,
        category="angular-organization",
        rule="angular-folder-structure",
    )
    for path, description, rule in SUB_FOLDERS:
        parent = path.rsplit("/", 1)[0]
        if collector.is_dir(parent) and not collector.is_dir(path):
            issues.append(
                missing_issue(path, description, severity="info", category="angular-organization", rule=rule)
            )

    features = _features_dir(ctx)
    if features:
        for name in collector.list_dirs(features):
            path = f"{features}/{name}/components"
            if not collector.is_dir(path):
                issues.append(
                    missing_issue(
                        path,
                        f"components of feature '{name}'",
                        severity="info",
                        category="angular-organization",
                        rule="angular-feature-structure",
                    )
                )

    for path in collector.glob("src/**/*.component.ts"):
        for lineno, line in enumerate(collector.read_text(path).splitlines(), 1):
            if ANGULAR_DOM_ACCESS.search(line):
                issues.append(
                    Issue(
                        severity="error",
                        category="angular-patterns",
                        rule="angular-no-dom",
                        message="Direct DOM access; use Renderer2 or ViewChild",
                        file=path,
                        line=lineno,
                    )
                )
    return issues
