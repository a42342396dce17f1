"""LLM-backed deep analysis oracle.

Implements DeepAnalysisPort: one prompt per file, JSON answer parsed into
issues and insights. Failures of the model or of its output yield an empty
result; the fast report is never lost because of the oracle.
"""

import json
import logging
import re

from code_quality.application.analysis.deep_analysis_prompts import (
    FILE_REVIEW_PROMPT,
    MAX_FILE_CHARS,
    SYSTEM_PROMPT,
)
from code_quality.domain.entities.quality import Issue
from code_quality.domain.ports.deep_analysis import DeepAnalysisResult
from code_quality.domain.ports.llm import LLMMessage, LLMPort

logger = logging.getLogger(__name__)

SEVERITIES = ("error", "warning", "info")
MAX_ISSUES_PER_FILE = 10
MAX_INSIGHTS_PER_FILE = 3


def _list_field(data: dict, key: str) -> list:
    value = data.get(key)
    return value if isinstance(value, list) else []


def parse_review(response: str, path: str) -> DeepAnalysisResult:
    """Parse the model answer (bare JSON or a fenced block); malformed items are dropped."""
    if not response or not response.strip():
        return DeepAnalysisResult()
    match = re.search(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", response)
    raw = match.group(1) if match else response.strip()
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.debug("Deep analysis answer for %s is not JSON", path)
        return DeepAnalysisResult()
    if not isinstance(data, dict):
        return DeepAnalysisResult()

    issues: list[Issue] = []
    for item in _list_field(data, "issues"):
        if not isinstance(item, dict) or not item.get("message"):
            continue
        severity = str(item.get("severity", "info")).lower()
        category = str(item.get("category") or "code-smell")
        line = item.get("line")
        issues.append(
            Issue(
                severity=severity if severity in SEVERITIES else "info",
                category=category,
                rule=f"ai-{category}",
                message=str(item["message"]).strip(),
                file=path,
                line=line if isinstance(line, int) and line > 0 else None,
            )
        )
    insights = [str(i).strip() for i in _list_field(data, "insights") if str(i).strip()]
    return DeepAnalysisResult(
        issues=issues[:MAX_ISSUES_PER_FILE],
        insights=insights[:MAX_INSIGHTS_PER_FILE],
    )


class LLMDeepAnalyzer:
    """Deep-analysis oracle asking an LLM to review each file."""

    def __init__(self, llm: LLMPort, model: str | None = None, temperature: float = 0.2) -> None:
        self._llm = llm
        self._model = model
        self._temperature = temperature

    async def analyze(self, content: str, path: str) -> DeepAnalysisResult:
        if not content.strip():
            return DeepAnalysisResult()
        messages = [
            LLMMessage(role="system", content=SYSTEM_PROMPT),
            LLMMessage(
                role="user",
                content=FILE_REVIEW_PROMPT.format(path=path, content=content[:MAX_FILE_CHARS]),
            ),
        ]
        try:
            response = await self._llm.generate(messages, model=self._model, temperature=self._temperature)
        except Exception as e:  # noqa: BLE001
            logger.warning("Deep analysis of %s failed: %s", path, e)
            return DeepAnalysisResult()
        return parse_review(response.content or "", path)
