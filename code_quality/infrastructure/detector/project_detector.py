"""Project Detector - classifies a tree into framework tags.

Every primary signal (manifest dependencies, marker files) is evaluated;
tags accumulate instead of short-circuiting. Unreadable manifests count as
absent signals.
"""

import logging

from code_quality.domain.entities.project_types import MAIN_FRAMEWORK_PRIORITY, ProjectType
from code_quality.domain.entities.quality import ProjectInfo, SubProject
from code_quality.infrastructure.analyzer.file_collector import FileCollector

logger = logging.getLogger(__name__)

NESTED_PROJECT_GLOBS: tuple[str, ...] = (
    "client",
    "server",
    "frontend",
    "backend",
    "api",
    "web",
    "mobile",
    "apps/*",
    "packages/*",
)

NODE_SERVER_DEPS = ("express", "fastify", "koa", "hapi")
NODE_TOOLING_DEPS = ("@types/node", "typescript", "tsx")


def manifest_dependencies(manifest: dict | None) -> dict[str, str]:
    """dependencies + devDependencies of a package.json (empty if malformed)."""
    if not manifest:
        return {}
    deps: dict[str, str] = {}
    for section in ("dependencies", "devDependencies"):
        value = manifest.get(section)
        if isinstance(value, dict):
            deps.update({str(k): str(v) for k, v in value.items()})
    return deps


def runtime_dependencies(manifest: dict | None) -> list[str]:
    """Sorted names under "dependencies" only."""
    value = manifest.get("dependencies") if manifest else None
    return sorted(str(k) for k in value) if isinstance(value, dict) else []


def tags_from_manifest(manifest: dict | None) -> list[ProjectType]:
    """Framework tags implied by a package.json, in detection order."""
    deps = manifest_dependencies(manifest)
    if not deps:
        return []
    scripts = manifest.get("scripts") if manifest else None
    scripts = scripts if isinstance(scripts, dict) else {}

    tags: list[ProjectType] = []
    if "react" in deps and "react-native" not in deps:
        tags.append(ProjectType.REACT)
    if "next" in deps:
        tags.append(ProjectType.NEXTJS)
        if "next dev" in str(scripts.get("dev", "")) or "next build" in str(scripts.get("build", "")):
            tags.append(ProjectType.NEXTJS_APP_ROUTER)
    if "@nestjs/core" in deps or "@nestjs/common" in deps:
        tags.append(ProjectType.NESTJS)
        if "@nestjs/microservices" in deps:
            tags.append(ProjectType.NESTJS_MICROSERVICES)
    if any(d in deps for d in NODE_SERVER_DEPS):
        tags.append(ProjectType.NODEJS)
    if not tags and any(d in deps for d in NODE_TOOLING_DEPS):
        tags.append(ProjectType.NODEJS)
    if "vue" in deps or "nuxt" in deps:
        tags.append(ProjectType.VUE)
    if "svelte" in deps or "@sveltejs/kit" in deps:
        tags.append(ProjectType.SVELTE)
    if "@remix-run/react" in deps or "@remix-run/node" in deps:
        tags.append(ProjectType.REMIX)
    if "astro" in deps:
        tags.append(ProjectType.ASTRO)
    return tags


def pick_main_framework(types: list[str]) -> str | None:
    """Highest-priority detected tag, else the first detected one."""
    for candidate in MAIN_FRAMEWORK_PRIORITY:
        if candidate.value in types:
            return candidate.value
    return types[0] if types else None


class ProjectDetector:
    """Detects project types for a root directory."""

    def __init__(self, ignore_dirs: tuple[str, ...] = ()) -> None:
        self._ignore_dirs = ignore_dirs

    def detect(self, root: str, deep: bool = True) -> ProjectInfo:
        collector = FileCollector(root, self._ignore_dirs)
        types: list[str] = []
        sub_projects: list[SubProject] = []

        def add(tag: ProjectType) -> None:
            if tag.value not in types:
                types.append(tag.value)

        def add_sub_project(sub: SubProject) -> None:
            if all(s.path != sub.path for s in sub_projects):
                sub_projects.append(sub)

        for tag in tags_from_manifest(collector.read_json("package.json")):
            add(tag)

        if collector.exists("app.json") or collector.exists("metro.config.js"):
            add(ProjectType.REACT_NATIVE)
        if collector.exists("pom.xml") or collector.exists("build.gradle"):
            add(ProjectType.JAVA)
        if collector.glob("**/*.csproj"):
            add(ProjectType.DOTNET)
        if collector.exists("angular.json"):
            add(ProjectType.ANGULAR)

        functions_manifest = collector.read_json("functions/package.json")
        functions_deps = runtime_dependencies(functions_manifest)
        if "firebase-functions" in functions_deps:
            add(ProjectType.FIREBASE_FUNCTIONS)
            add_sub_project(
                SubProject(
                    path="functions",
                    type=ProjectType.FIREBASE_FUNCTIONS.value,
                    dependencies=functions_deps,
                )
            )

        if collector.is_dir("amplify"):
            add(ProjectType.AWS_AMPLIFY)

        if deep:
            for sub in self._scan_nested(collector):
                add_sub_project(sub)

        info = ProjectInfo(
            types=types,
            is_multi_project=len(types) > 1 or bool(sub_projects),
            sub_projects=sub_projects or None,
            main_framework=pick_main_framework(types),
        )
        logger.debug("Detected %s in %s", info.types, root)
        return info

    def _scan_nested(self, collector: FileCollector) -> list[SubProject]:
        found: list[SubProject] = []
        for pattern in NESTED_PROJECT_GLOBS:
            if pattern.endswith("/*"):
                parent = pattern[:-2]
                candidates = [f"{parent}/{name}" for name in collector.list_dirs(parent)]
            else:
                candidates = [pattern] if collector.is_dir(pattern) else []
            for rel in candidates:
                manifest = collector.read_json(f"{rel}/package.json")
                tags = tags_from_manifest(manifest)
                if not tags:
                    continue
                found.append(
                    SubProject(
                        path=rel,
                        type=tags[0].value,
                        dependencies=runtime_dependencies(manifest),
                    )
                )
        return found
