"""Ollama backend for the deep-analysis oracle (LLMPort)."""

import logging

import httpx
from ollama import AsyncClient, ResponseError

from code_quality.domain.ports.config import OllamaConfig
from code_quality.domain.ports.llm import LLMMessage, LLMResponse

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 5.0
UNREACHABLE = (httpx.HTTPError, ConnectionError, ResponseError)


def _client_timeout(seconds: int) -> httpx.Timeout:
    """Short connect, config-driven read/write."""
    return httpx.Timeout(float(seconds or 120), connect=CONNECT_TIMEOUT)


class OllamaAdapter:
    """Reviews go through /api/chat with JSON output requested."""

    def __init__(self, config: OllamaConfig, default_model: str = "qwen2.5-coder:7b") -> None:
        self._default_model = default_model
        self._options = {
            key: value
            for key, value in (("num_ctx", config.num_ctx), ("num_predict", config.num_predict))
            if value is not None
        }
        self._client = AsyncClient(host=config.host, timeout=_client_timeout(config.timeout))

    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
    ) -> LLMResponse:
        used_model = model or self._default_model
        reply = await self._client.chat(
            model=used_model,
            messages=[m.model_dump() for m in messages],
            format="json",
            options={**self._options, "temperature": temperature},
        )
        text = reply.message.content if reply.message else None
        return LLMResponse(content=text or "", model=reply.model or used_model)

    async def list_models(self) -> list[str]:
        """Installed model names; empty when the server cannot be reached."""
        try:
            listing = await self._client.list()
        except UNREACHABLE as e:
            logger.debug("Ollama unreachable while listing models: %s", e)
            return []
        return [name for entry in listing.models or [] if (name := getattr(entry, "model", None))]

    async def is_available(self) -> bool:
        try:
            await self._client.list()
        except UNREACHABLE as e:
            logger.debug("Ollama unavailable: %s", e)
            return False
        return True
