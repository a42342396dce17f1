"""Node.js server conventions (plain Node, Next.js, NestJS)."""

import re

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import Expectation, StructuralContext, check_expected
from code_quality.infrastructure.detector.project_detector import manifest_dependencies
from code_quality.infrastructure.rules.patterns import DB_OPERATIONS, JS_EXTENSIONS

FOLDERS_BY_VARIANT: dict[str, tuple[Expectation, ...]] = {
    "nextjs": (
        Expectation("app", "App Router routes", optional=True),
        Expectation("pages", "Pages Router routes", optional=True),
        Expectation("components", "shared UI components"),
        Expectation("lib", "server and client helpers"),
        Expectation("public", "static files"),
        Expectation("styles", "global styles", optional=True),
    ),
    "nestjs": (
        Expectation("src/modules", "feature modules"),
        Expectation("src/dto", "request/response DTOs"),
        Expectation("src/config", "configuration"),
        Expectation("src/common", "guards, pipes, interceptors", optional=True),
        Expectation("src/entities", "persistence entities", optional=True),
    ),
    "nodejs": (
        Expectation("src/routes", "HTTP route definitions"),
        Expectation("src/controllers", "request handlers"),
        Expectation("src/services", "business logic"),
        Expectation("src/models", "data models"),
        Expectation("src/middleware", "request middleware"),
        Expectation("src/utils", "helpers"),
        Expectation("src/config", "configuration"),
        Expectation("src/validators", "input validation", optional=True),
        Expectation("src/database", "database setup", optional=True),
    ),
}

ROUTE_DIRS: tuple[str, ...] = ("src/routes", "routes")
# Heavy libraries that often linger in package.json after their last import
PROBED_DEPENDENCIES: tuple[str, ...] = ("lodash", "moment", "axios")


def _check_route_concerns(ctx: StructuralContext) -> list[Issue]:
    """Routes should delegate persistence to services; at most one issue."""
    route_files: list[str] = []
    for directory in ROUTE_DIRS:
        route_files.extend(ctx.collector.files_with_extensions(JS_EXTENSIONS, under=directory))
    for path in route_files[: ctx.config.route_probe_limit]:
        if DB_OPERATIONS.search(ctx.collector.read_text(path)):
            return [
                Issue(
                    severity="error",
                    category="separation-of-concerns",
                    rule="node-separation-of-concerns",
                    message="Route file performs database operations; move them into a service",
                    file=path,
                )
            ]
    return []


def _check_unused_dependencies(ctx: StructuralContext) -> list[Issue]:
    deps = manifest_dependencies(ctx.collector.read_json("package.json"))
    probed = [d for d in PROBED_DEPENDENCIES if d in deps]
    if not probed:
        return []
    sample = ctx.collector.files_with_extensions(JS_EXTENSIONS)[: ctx.config.dependency_probe_limit]
    contents = [ctx.collector.read_text(f) for f in sample]
    issues: list[Issue] = []
    for dep in probed:
        used = re.compile(rf"""['"]{re.escape(dep)}(?:/[^'"]*)?['"]""")
        if any(used.search(c) for c in contents):
            continue
        issues.append(
            Issue(
                severity="info",
                category="dependencies",
                rule="unused-dependency",
                message=f"Dependency '{dep}' is declared but not imported in sampled files",
                file="package.json",
            )
        )
    return issues


def check_node(ctx: StructuralContext) -> list[Issue]:
    variant = ctx.variant if ctx.variant in FOLDERS_BY_VARIANT else "nodejs"
    issues = check_expected(
        ctx.collector,
        FOLDERS_BY_VARIANT[variant],
        category="node-organization",
        rule="node-folder-structure",
    )
    if variant != "nextjs":
        issues.extend(_check_route_concerns(ctx))
    issues.extend(_check_unused_dependencies(ctx))
    return issues
