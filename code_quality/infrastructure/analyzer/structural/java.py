"""Spring Boot conventions: layered or feature-based package layout."""

from pathlib import PurePosixPath

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import Expectation, StructuralContext, check_expected

JAVA_ROOT = "src/main/java"

LAYERS: tuple[Expectation, ...] = (
    Expectation("controller", "REST controllers"),
    Expectation("service", "business logic"),
    Expectation("repository", "data access"),
    Expectation("model", "domain model", alt_names=("entity", "domain")),
    Expectation("dto", "transfer objects"),
    Expectation("config", "Spring configuration"),
    Expectation("exception", "exception handlers", optional=True),
    Expectation("util", "helpers", optional=True),
    Expectation("mapper", "DTO mappers", optional=True),
)


def find_base_package(ctx: StructuralContext) -> str | None:
    """Directory of the *Application class, else the first two-level package."""
    apps = ctx.collector.glob(f"**/{JAVA_ROOT}/**/*Application.java")
    if apps:
        return str(PurePosixPath(apps[0]).parent)
    for top in ctx.collector.list_dirs(JAVA_ROOT):
        for second in ctx.collector.list_dirs(f"{JAVA_ROOT}/{top}"):
            return f"{JAVA_ROOT}/{top}/{second}"
    return None


def _is_feature_based(ctx: StructuralContext, base: str) -> bool:
    for name in ctx.collector.list_dirs(base):
        files = ctx.collector.list_files(f"{base}/{name}")
        has_controller = any(f.endswith("Controller.java") for f in files)
        has_service = any(f.endswith("Service.java") for f in files)
        if has_controller and has_service:
            return True
    return False


def check_java(ctx: StructuralContext) -> list[Issue]:
    base = find_base_package(ctx)
    if base is None:
        return [
            Issue(
                severity="error",
                category="java-organization",
                rule="spring-boot-structure",
                message=f"No Java packages found under {JAVA_ROOT}",
                file=JAVA_ROOT,
            )
        ]
    collector = ctx.collector
    has_layer = any(
        collector.is_dir(f"{base}/{candidate}") for exp in LAYERS for candidate in exp.candidates()
    )
    if has_layer:
        return check_expected(
            collector,
            LAYERS,
            category="java-organization",
            rule="spring-boot-structure",
            base=base,
        )
    if _is_feature_based(ctx, base):
        return []
    return [
        Issue(
            severity="error",
            category="java-organization",
            rule="spring-boot-structure",
            message=f"{base} follows neither a layered nor a feature-based package layout",
            file=base,
        )
    ]
