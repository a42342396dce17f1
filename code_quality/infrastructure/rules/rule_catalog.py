"""Per-framework threshold table.

Lookup is total: unknown types fall back to DEFAULT_RULES, unknown variants
to the family base. No I/O, no mutable state.
"""

from dataclasses import dataclass, replace

from code_quality.domain.entities.project_types import ProjectType


@dataclass(frozen=True)
class RuleSet:
    """Thresholds applied by the lexical and per-file structural checks."""

    max_file_lines: int = 500
    max_function_lines: int = 50
    max_line_length: int = 120
    max_parameters: int = 5
    max_methods_per_class: int = 30
    max_complexity: int = 15
    max_functions_per_file: int = 10


DEFAULT_RULES = RuleSet()

BASE_RULES: dict[str, RuleSet] = {
    "react": RuleSet(
        max_file_lines=300,
        max_function_lines=30,
        max_parameters=4,
        max_methods_per_class=20,
        max_complexity=10,
    ),
    "firebase-functions": RuleSet(
        max_file_lines=300,
        max_parameters=4,
        max_methods_per_class=20,
        max_complexity=10,
        max_functions_per_file=5,
    ),
    "nodejs": RuleSet(),
    "java": RuleSet(max_file_lines=1000, max_line_length=100, max_parameters=6),
    "dotnet": RuleSet(),
    "angular": RuleSet(
        max_file_lines=350,
        max_function_lines=40,
        max_parameters=4,
        max_methods_per_class=20,
        max_complexity=12,
    ),
}

# (family, variant) -> fields overriding the family base
VARIANT_OVERRIDES: dict[tuple[str, str], dict[str, int]] = {
    ("react", "react-native"): {"max_file_lines": 250},
    ("nodejs", "nextjs"): {"max_file_lines": 250},
    ("nodejs", "nestjs"): {"max_file_lines": 350},
}

# Project tag -> (family, default variant)
TYPE_FAMILY: dict[str, tuple[str, str | None]] = {
    ProjectType.REACT.value: ("react", None),
    ProjectType.REACT_NATIVE.value: ("react", "react-native"),
    ProjectType.NEXTJS.value: ("nodejs", "nextjs"),
    ProjectType.NEXTJS_APP_ROUTER.value: ("nodejs", "nextjs"),
    ProjectType.NESTJS.value: ("nodejs", "nestjs"),
    ProjectType.NESTJS_MICROSERVICES.value: ("nodejs", "nestjs"),
    ProjectType.NODEJS.value: ("nodejs", None),
    ProjectType.REMIX.value: ("nodejs", None),
    ProjectType.VUE.value: ("react", None),
    ProjectType.SVELTE.value: ("react", None),
    ProjectType.ASTRO.value: ("react", None),
    ProjectType.ANGULAR.value: ("angular", None),
    ProjectType.JAVA.value: ("java", None),
    ProjectType.DOTNET.value: ("dotnet", None),
    ProjectType.FIREBASE_FUNCTIONS.value: ("firebase-functions", None),
}


def get_rule_set(project_type: str | None, variant: str | None = None) -> RuleSet:
    """Thresholds for a project tag (or family name) and optional variant."""
    if not project_type:
        return DEFAULT_RULES
    key = str(getattr(project_type, "value", project_type)).lower()
    family, default_variant = TYPE_FAMILY.get(key, (key, None))
    base = BASE_RULES.get(family)
    if base is None:
        return DEFAULT_RULES
    overrides = VARIANT_OVERRIDES.get((family, variant or default_variant or ""))
    return replace(base, **overrides) if overrides else base
