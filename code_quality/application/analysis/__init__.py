"""Analysis application layer - LLM deep analysis oracle."""

from code_quality.application.analysis.deep_analyzer import LLMDeepAnalyzer

__all__ = ["LLMDeepAnalyzer"]
