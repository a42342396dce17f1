"""Quality Analyzer - runs detection, structural and lexical checks, scores the result.

Structural checks run before lexical ones. Per-file lexical work goes
through a thread pool with an order-preserving map, so the issue list is
deterministic for a given tree. Sampling bounds come from AnalysisConfig.
"""

import asyncio
import logging
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from code_quality.domain.entities.quality import (
    AnalysisOptions,
    Issue,
    ProjectInfo,
    QualityReport,
    QualityStats,
)
from code_quality.domain.ports.config import AnalysisConfig
from code_quality.domain.ports.deep_analysis import DeepAnalysisPort, NoOpDeepAnalyzer
from code_quality.domain.services.scoring import calculate_score, generate_recommendations
from code_quality.infrastructure.analyzer.file_collector import FileCollector
from code_quality.infrastructure.analyzer.lexical import (
    LexicalChecker,
    check_unused_exports,
    is_constants_module,
    keyword_complexity,
    strip_comments_and_strings,
)
from code_quality.infrastructure.analyzer.structural import (
    STRUCTURAL_CHECKERS,
    StructuralContext,
    check_duplicate_dependencies,
)
from code_quality.infrastructure.detector.project_detector import ProjectDetector
from code_quality.infrastructure.rules.rule_catalog import get_rule_set

logger = logging.getLogger(__name__)

DUPLICATE_LINE_MIN_LENGTH = 40


def resolve_project_path(project_path: str) -> Path:
    """Validated absolute directory path.

    Raises:
        ValueError: If path is empty, missing, not a directory or unreadable.
    """
    if not project_path or not project_path.strip():
        raise ValueError("Project path cannot be empty")
    path = Path(project_path).expanduser().resolve()
    if not path.exists():
        raise ValueError(f"Project path does not exist: {project_path}")
    if not path.is_dir():
        raise ValueError(f"Project path is not a directory: {project_path}")
    if not os.access(path, os.R_OK):
        raise ValueError(f"No read permission for: {project_path}")
    return path


def count_duplicate_lines(contents: list[str]) -> int:
    """Distinct long lines that appear in two or more files."""
    seen: Counter[str] = Counter()
    for content in contents:
        lines = {line.strip() for line in content.splitlines()}
        seen.update(line for line in lines if len(line) >= DUPLICATE_LINE_MIN_LENGTH)
    return sum(1 for count in seen.values() if count > 1)


class QualityAnalyzer:
    """Produces a QualityReport for a project directory."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        detector: ProjectDetector | None = None,
        oracle: DeepAnalysisPort | None = None,
    ) -> None:
        self._config = config or AnalysisConfig()
        self._detector = detector or ProjectDetector(self._config.ignore_dirs)
        self._oracle = oracle or NoOpDeepAnalyzer()

    def detect(self, project_path: str, deep: bool = True) -> ProjectInfo:
        path = resolve_project_path(project_path)
        return self._detector.detect(str(path), deep=deep)

    def project_info(self, path: Path, project_type: str | None = None) -> ProjectInfo:
        """Detected info, or a single-tag info when the caller forces a type."""
        if project_type:
            tag = project_type.strip().lower()
            return ProjectInfo(types=[tag], is_multi_project=False, main_framework=tag)
        return self._detector.detect(str(path), deep=True)

    def run_checks(
        self,
        project_path: str,
        project_type: str | None = None,
        options: AnalysisOptions | None = None,
    ) -> QualityReport:
        """Synchronous fast pass: structural + lexical checks, stats, score."""
        report, _ = self._run(project_path, project_type, options or AnalysisOptions())
        return report

    def _run(
        self,
        project_path: str,
        project_type: str | None,
        options: AnalysisOptions,
    ) -> tuple[QualityReport, ProjectInfo]:
        path = resolve_project_path(project_path)
        logger.info("Checking quality of %s", path)

        info = self.project_info(path, project_type)
        collector = FileCollector(path, self._config.ignore_dirs)

        issues = self._structural_issues(collector, info)
        issues.extend(check_duplicate_dependencies(info))

        sources = collector.files_with_extensions(self._config.source_extensions)
        sample_size = max(self._config.lexical_file_limit, self._config.stats_file_limit)
        contents = {f: collector.read_text(f) for f in sources[:sample_size]}
        lexical_sample = sources[: self._config.lexical_file_limit]
        issues.extend(self._lexical_issues(lexical_sample, contents, info, options))
        if options.check_unused_code:
            issues.extend(self._unused_export_issues(collector, sources, lexical_sample, contents))

        stats = self._stats(sources, contents, issues)
        report = QualityReport(
            project_path=str(path),
            project_types=info.types,
            score=calculate_score(issues),
            issues=issues,
            recommendations=generate_recommendations(issues, info),
            stats=stats,
            analysis_type="fast",
        )
        logger.info(
            "Quality check done: %s files, %s issues, score %s",
            stats.total_files,
            len(issues),
            report.score,
        )
        return report, info

    async def analyze(
        self,
        project_path: str,
        project_type: str | None = None,
        options: AnalysisOptions | None = None,
    ) -> QualityReport:
        """Fast pass in a worker thread, then the oracle pass when deep mode is on."""
        options = options or AnalysisOptions()
        report, info = await asyncio.to_thread(self._run, project_path, project_type, options)
        if not options.uses_oracle:
            return report
        return await self._deep_pass(report, info)

    async def _deep_pass(self, report: QualityReport, info: ProjectInfo) -> QualityReport:
        collector = FileCollector(report.project_path, self._config.ignore_dirs)
        sources = collector.files_with_extensions(self._config.source_extensions)
        issues = list(report.issues)
        insights: list[str] = []
        for rel in sources[: self._config.deep_file_limit]:
            result = await self._oracle.analyze(collector.read_text(rel), rel)
            issues.extend(result.issues)
            insights.extend(f"{rel}: {text}" for text in result.insights)

        return report.model_copy(
            update={
                "issues": issues,
                "score": calculate_score(issues),
                "recommendations": generate_recommendations(issues, info),
                "analysis_type": "deep",
                "ai_insights": insights,
            }
        )

    def _structural_issues(self, collector: FileCollector, info: ProjectInfo) -> list[Issue]:
        issues: list[Issue] = []
        seen: set[tuple[str, str | None]] = set()
        for tag in info.types:
            entry = STRUCTURAL_CHECKERS.get(tag)
            if entry is None:
                continue
            checker, variant = entry
            key = (checker.__name__, variant)
            if key in seen:
                continue
            seen.add(key)
            ctx = StructuralContext(
                collector=collector,
                project_info=info,
                rules=get_rule_set(tag, variant),
                config=self._config,
                variant=variant,
            )
            issues.extend(checker(ctx))
        return issues

    def _lexical_issues(
        self,
        files: list[str],
        contents: dict[str, str],
        info: ProjectInfo,
        options: AnalysisOptions,
    ) -> list[Issue]:
        checker = LexicalChecker(
            rules=get_rule_set(info.main_framework),
            options=options,
            script_range=self._config.comment_script_range,
            analysis_logic_globs=self._config.analysis_logic_globs,
        )

        def check_one(rel: str) -> list[Issue]:
            try:
                return checker.check(contents.get(rel, ""), rel)
            except Exception as e:  # noqa: BLE001
                logger.warning("Lexical check failed for %s: %s", rel, e, exc_info=True)
                return []

        issues: list[Issue] = []
        with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
            for file_issues in executor.map(check_one, files):
                issues.extend(file_issues)
        return issues

    def _unused_export_issues(
        self,
        collector: FileCollector,
        sources: list[str],
        sample: list[str],
        contents: dict[str, str],
    ) -> list[Issue]:
        constants = [f for f in sample if is_constants_module(f)]
        if not constants:
            return []
        everything = {f: contents[f] if f in contents else collector.read_text(f) for f in sources}
        issues: list[Issue] = []
        for rel in constants:
            others = [text for f, text in everything.items() if f != rel]
            issues.extend(check_unused_exports(rel, everything[rel], others))
        return issues

    def _stats(self, sources: list[str], contents: dict[str, str], issues: list[Issue]) -> QualityStats:
        sample = sources[: self._config.stats_file_limit]
        texts = [contents.get(f, "") for f in sample]
        total_lines = sum(len(t.splitlines()) for t in texts)
        complexities = [keyword_complexity(strip_comments_and_strings(t)) for t in texts]
        return QualityStats(
            total_files=len(sources),
            total_lines=total_lines,
            average_file_size=round(total_lines / len(sample)) if sample else 0,
            duplicate_code=count_duplicate_lines(texts),
            unused_code=sum(1 for i in issues if i.category == "unused-code"),
            complexity=round(sum(complexities) / len(complexities)) if complexities else 0,
        )
