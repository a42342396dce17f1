"""React / React Native conventions: folder layout and component anatomy."""

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import (
    Expectation,
    StructuralContext,
    check_expected,
    missing_issue,
)

FOLDERS: tuple[Expectation, ...] = (
    Expectation("src/components", "reusable UI components"),
    Expectation("src/hooks", "custom hooks"),
    Expectation("src/services", "API and side-effect services"),
    Expectation("src/utils", "pure helpers"),
    Expectation("src/types", "shared type definitions"),
    Expectation("src/assets", "static assets"),
    Expectation("src/pages", "route-level screens", optional=True),
    Expectation("src/features", "feature modules", optional=True),
    Expectation("src/styles", "global styles", optional=True),
    Expectation("src/context", "context providers", optional=True),
    Expectation("src/store", "state management", optional=True),
)

COMPONENT_SIBLINGS: tuple[tuple[str, str], ...] = (
    ("types.ts", "props and local types"),
    ("styles.ts", "component styles"),
    ("const.ts", "component constants"),
)

HOOK_SUFFIXES: tuple[str, ...] = ("State", "Logic", "Effects")
MAX_FILES_WITHOUT_HOOKS = 3
SOURCE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx")

CATEGORY = "react-structure"


def _has_index(ctx: StructuralContext, directory: str) -> bool:
    return ctx.collector.exists(f"{directory}/index.tsx") or ctx.collector.exists(f"{directory}/index.jsx")


def _check_component(ctx: StructuralContext, name: str) -> list[Issue]:
    directory = f"src/components/{name}"
    collector = ctx.collector
    issues: list[Issue] = []

    if not _has_index(ctx, directory):
        issues.append(
            missing_issue(
                f"{directory}/index.tsx",
                "component entry point",
                severity="error",
                category=CATEGORY,
                rule="react-component-structure",
            )
        )
    for filename, description in COMPONENT_SIBLINGS:
        if not collector.exists(f"{directory}/{filename}"):
            issues.append(
                missing_issue(
                    f"{directory}/{filename}",
                    description,
                    severity="warning",
                    category=CATEGORY,
                    rule="react-component-structure",
                )
            )

    if collector.is_dir(f"{directory}/hooks"):
        for suffix in HOOK_SUFFIXES:
            hook = f"{directory}/hooks/use{name}{suffix}.ts"
            if not collector.exists(hook):
                issues.append(
                    missing_issue(
                        hook,
                        f"{suffix.lower()} hook",
                        severity="info",
                        category=CATEGORY,
                        rule="react-hooks-structure",
                    )
                )
    else:
        sources = collector.files_with_extensions(SOURCE_SUFFIXES, under=directory)
        if len(sources) > MAX_FILES_WITHOUT_HOOKS:
            issues.append(
                Issue(
                    severity="warning",
                    category=CATEGORY,
                    rule="react-component-structure",
                    message=f"{directory} has {len(sources)} files; move logic into a hooks/ folder",
                    file=directory,
                )
            )

    for sub in collector.list_dirs(f"{directory}/components"):
        sub_dir = f"{directory}/components/{sub}"
        if not _has_index(ctx, sub_dir):
            issues.append(
                missing_issue(
                    f"{sub_dir}/index.tsx",
                    "sub-component entry point",
                    severity="warning",
                    category=CATEGORY,
                    rule="react-subcomponent-structure",
                )
            )
    return issues


def check_react(ctx: StructuralContext) -> list[Issue]:
    issues = check_expected(
        ctx.collector,
        FOLDERS,
        category="react-organization",
        rule="react-folder-structure",
    )
    for name in ctx.collector.list_dirs("src/components"):
        issues.extend(_check_component(ctx, name))
    return issues
