""".NET conventions: Clean Architecture solutions or single-project MVC."""

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import Expectation, StructuralContext, check_expected

# layer name, alternates, expected sub-folders
CLEAN_LAYERS: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("Domain", (), ("Entities", "Interfaces")),
    ("Application", (), ("Services", "DTOs", "Interfaces")),
    ("Infrastructure", (), ("Data", "Repositories")),
    ("Presentation", ("WebAPI", "API", "Web"), ("Controllers",)),
)

MVC_FOLDERS: tuple[Expectation, ...] = (
    Expectation("Controllers", "API controllers"),
    Expectation("Models", "data models", alt_names=("Entities",)),
    Expectation("Services", "business logic"),
    Expectation("Data", "database context", optional=True),
    Expectation("DTOs", "transfer objects", optional=True),
    Expectation("Middleware", "request middleware", optional=True),
)


def _find_layer_dir(ctx: StructuralContext, layer: str, alternates: tuple[str, ...]) -> str | None:
    """Layer directory either named exactly or suffixed (MyApp.Domain)."""
    names = (layer, *alternates)
    dirs = ctx.collector.list_dirs("") + [f"src/{d}" for d in ctx.collector.list_dirs("src")]
    for candidate in dirs:
        leaf = candidate.rsplit("/", 1)[-1]
        if any(leaf == name or leaf.endswith(f".{name}") for name in names):
            return candidate
    return None


def _check_clean_architecture(ctx: StructuralContext) -> list[Issue]:
    issues: list[Issue] = []
    for layer, alternates, folders in CLEAN_LAYERS:
        directory = _find_layer_dir(ctx, layer, alternates)
        if directory is None:
            issues.append(
                Issue(
                    severity="info",
                    category="dotnet-organization",
                    rule="clean-architecture-structure",
                    message=f"Missing {layer} layer project",
                    file=layer,
                )
            )
            continue
        issues.extend(
            check_expected(
                ctx.collector,
                tuple(Expectation(f, f"{layer} {f.lower()}") for f in folders),
                category="dotnet-organization",
                rule="clean-architecture-structure",
                severity="info",
                base=directory,
            )
        )
    return issues


def check_dotnet(ctx: StructuralContext) -> list[Issue]:
    if ctx.collector.glob("*.sln"):
        return _check_clean_architecture(ctx)
    return check_expected(
        ctx.collector,
        MVC_FOLDERS,
        category="dotnet-organization",
        rule="dotnet-folder-structure",
    )
