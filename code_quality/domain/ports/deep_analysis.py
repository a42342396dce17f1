"""Deep-analysis port - optional per-file oracle consulted in deep mode."""

from typing import Protocol

from pydantic import BaseModel, Field

from code_quality.domain.entities.quality import Issue


class DeepAnalysisResult(BaseModel):
    """Extra issues and free-form insights for one file."""

    issues: list[Issue] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)


class DeepAnalysisPort(Protocol):
    """Capability (content, path) -> issues + insights. Must not raise."""

    async def analyze(self, content: str, path: str) -> DeepAnalysisResult:
        ...


class NoOpDeepAnalyzer:
    """Default oracle: contributes nothing."""

    async def analyze(self, content: str, path: str) -> DeepAnalysisResult:
        return DeepAnalysisResult()
