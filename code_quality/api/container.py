"""Dependency Injection Container - centralized service management."""

from functools import cached_property
from pathlib import Path

from code_quality.application.tools.executor import QualityToolExecutor
from code_quality.domain.ports.config import AppConfig
from code_quality.domain.ports.deep_analysis import DeepAnalysisPort, NoOpDeepAnalyzer
from code_quality.domain.ports.llm import LLMPort
from code_quality.infrastructure.analyzer.quality_analyzer import QualityAnalyzer
from code_quality.infrastructure.config import load_config
from code_quality.infrastructure.detector.project_detector import ProjectDetector
from code_quality.infrastructure.persistence.snapshot_store import SnapshotStore


class Container:
    """Dependency Injection Container with lazy initialization.

    Every dependency is built on first access and cached, so tests can pass
    their own AppConfig (e.g. a tmp cache dir) and get a consistent graph.
    """

    def __init__(self, config: AppConfig | None = None):
        self._config_override = config

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def llm(self) -> LLMPort:
        """LLM adapter for the deep-analysis oracle."""
        from code_quality.infrastructure.llm.ollama import OllamaAdapter

        return OllamaAdapter(self.config.ollama, default_model=self.config.llm.model)

    @cached_property
    def deep_analyzer(self) -> DeepAnalysisPort:
        """LLM oracle when enabled in config, no-op otherwise."""
        if not self.config.llm.enabled:
            return NoOpDeepAnalyzer()
        from code_quality.application.analysis.deep_analyzer import LLMDeepAnalyzer

        return LLMDeepAnalyzer(self.llm, model=self.config.llm.model)

    @cached_property
    def detector(self) -> ProjectDetector:
        return ProjectDetector(self.config.analysis.ignore_dirs)

    @cached_property
    def analyzer(self) -> QualityAnalyzer:
        return QualityAnalyzer(
            config=self.config.analysis,
            detector=self.detector,
            oracle=self.deep_analyzer,
        )

    @cached_property
    def snapshot_store(self) -> SnapshotStore:
        return SnapshotStore(Path(self.config.persistence.cache_dir))

    @cached_property
    def tool_executor(self) -> QualityToolExecutor:
        return QualityToolExecutor(self.analyzer, self.snapshot_store)

    def reset(self) -> None:
        """Drop cached instances (config override is kept)."""
        for name in ("config", "llm", "deep_analyzer", "detector", "analyzer", "snapshot_store", "tool_executor"):
            self.__dict__.pop(name, None)


_container: Container | None = None


def get_container() -> Container:
    """Get or create the global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install a container (tests)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset the global container."""
    global _container
    if _container:
        _container.reset()
    _container = None
