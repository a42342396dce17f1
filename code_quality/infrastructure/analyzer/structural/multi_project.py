"""Cross sub-project checks."""

from collections import defaultdict

from code_quality.domain.entities.quality import Issue, ProjectInfo


def check_duplicate_dependencies(info: ProjectInfo) -> list[Issue]:
    """Dependencies declared by more than one sub-project, in name order."""
    owners: dict[str, list[str]] = defaultdict(list)
    for sub in info.sub_projects or []:
        for dep in sub.dependencies:
            owners[dep].append(sub.path)
    return [
        Issue(
            severity="info",
            category="multi-project",
            rule="duplicate-dependency",
            message=f"'{dep}' is declared in {', '.join(paths)}; consider hoisting it to the workspace root",
        )
        for dep, paths in sorted(owners.items())
        if len(paths) > 1
    ]
