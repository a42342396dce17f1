"""Firebase Cloud Functions conventions (functions/src layout, per-file limits)."""

from pathlib import PurePosixPath

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import (
    Expectation,
    StructuralContext,
    check_expected,
    missing_issue,
)
from code_quality.infrastructure.rules.patterns import CAMEL_CASE_FILE, FIREBASE_EXPORT

SRC = "functions/src"

FOLDERS: tuple[Expectation, ...] = (
    Expectation(f"{SRC}/constants", "shared constants"),
    Expectation(f"{SRC}/function", "shared utilities"),
    Expectation(f"{SRC}/functions", "function groups"),
)

# (path, description, severity, rule)
SUPPORT_FILES: tuple[tuple[str, str, str, str], ...] = (
    (f"{SRC}/constants/index.ts", "constants barrel", "warning", "firebase-constants-structure"),
    (f"{SRC}/constants/security.ts", "security constants", "info", "firebase-constants-structure"),
    (f"{SRC}/function/index.ts", "utilities barrel", "warning", "firebase-utils-structure"),
    (f"{SRC}/function/securityUtils.ts", "security helpers", "info", "firebase-utils-structure"),
)

SOURCE_SUFFIXES = (".ts", ".js")


def _check_function_groups(ctx: StructuralContext) -> list[Issue]:
    collector = ctx.collector
    base = f"{SRC}/functions"
    if not collector.is_dir(base):
        return []
    issues: list[Issue] = []
    groups = collector.list_dirs(base)
    if not groups:
        issues.append(
            Issue(
                severity="warning",
                category="firebase-structure",
                rule="firebase-function-organization",
                message=f"{base} has no function groups; organize functions by domain",
                file=base,
            )
        )
    for group in groups:
        group_dir = f"{base}/{group}"
        files = [f for f in collector.list_files(group_dir) if f.endswith(SOURCE_SUFFIXES)]
        if not files:
            issues.append(
                Issue(
                    severity="warning",
                    category="firebase-structure",
                    rule="firebase-function-organization",
                    message=f"Function group {group_dir} is empty",
                    file=group_dir,
                )
            )
        for name in files:
            if name == "index.ts" or name == "index.js" or CAMEL_CASE_FILE.match(name):
                continue
            issues.append(
                Issue(
                    severity="info",
                    category="firebase-naming",
                    rule="firebase-naming-convention",
                    message=f"File name '{name}' should be camelCase",
                    file=f"{group_dir}/{name}",
                )
            )
    if not collector.exists(f"{base}/index.ts"):
        issues.append(
            missing_issue(
                f"{base}/index.ts",
                "functions barrel exporting every group",
                severity="warning",
                category="firebase-structure",
                rule="firebase-exports",
            )
        )
    return issues


def _export_spans(lines: list[str]) -> list[tuple[str, int, int]]:
    """(name, start, length) per export; a function runs until the next export."""
    starts = [(m.group(1), idx) for idx, line in enumerate(lines) if (m := FIREBASE_EXPORT.match(line))]
    spans = []
    for pos, (name, start) in enumerate(starts):
        end = starts[pos + 1][1] if pos + 1 < len(starts) else len(lines)
        spans.append((name, start + 1, end - start))
    return spans


def _check_file(ctx: StructuralContext, path: str) -> list[Issue]:
    rules = ctx.rules
    content = ctx.collector.read_text(path)
    lines = content.splitlines()
    issues: list[Issue] = []
    if len(lines) > rules.max_file_lines:
        issues.append(
            Issue(
                severity="error",
                category="firebase-structure",
                rule="firebase-max-lines",
                message=f"File has {len(lines)} lines (max {rules.max_file_lines})",
                file=path,
            )
        )
    spans = _export_spans(lines)
    for name, start, length in spans:
        if length > rules.max_function_lines:
            issues.append(
                Issue(
                    severity="error",
                    category="firebase-structure",
                    rule="firebase-function-max-lines",
                    message=f"Function '{name}' has {length} lines (max {rules.max_function_lines})",
                    file=path,
                    line=start,
                )
            )
    if len(spans) > rules.max_functions_per_file:
        issues.append(
            Issue(
                severity="error",
                category="firebase-structure",
                rule="firebase-max-functions",
                message=f"File exports {len(spans)} functions (max {rules.max_functions_per_file})",
                file=path,
            )
        )
    if "console.log" in content:
        issues.append(
            Issue(
                severity="error",
                category="code-quality",
                rule="firebase-logger",
                message="Use the firebase-functions logger instead of console.log",
                file=path,
            )
        )
    return issues


def check_firebase(ctx: StructuralContext) -> list[Issue]:
    collector = ctx.collector
    if not collector.is_dir(SRC):
        return [
            missing_issue(
                SRC,
                "Cloud Functions source root",
                severity="error",
                category="firebase-functions-organization",
                rule="firebase-functions-folder-structure",
            )
        ]

    issues = check_expected(
        collector,
        FOLDERS,
        category="firebase-functions-organization",
        rule="firebase-functions-folder-structure",
        severity="error",
    )
    for path, description, severity, rule in SUPPORT_FILES:
        folder = str(PurePosixPath(path).parent)
        if collector.is_dir(folder) and not collector.exists(path):
            issues.append(
                missing_issue(path, description, severity=severity, category="firebase-structure", rule=rule)
            )
    issues.extend(_check_function_groups(ctx))
    if not collector.exists(f"{SRC}/index.ts"):
        issues.append(
            missing_issue(
                f"{SRC}/index.ts",
                "Cloud Functions entry point",
                severity="error",
                category="firebase-structure",
                rule="firebase-entry-point",
            )
        )
    for path in collector.files_with_extensions(SOURCE_SUFFIXES, under=SRC):
        issues.extend(_check_file(ctx, path))
    return issues
