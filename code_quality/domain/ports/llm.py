"""Chat-completion port used by the LLM deep-analysis oracle."""

from typing import Literal, Protocol

from pydantic import BaseModel

Role = Literal["system", "user", "assistant"]


class LLMMessage(BaseModel):
    role: Role
    content: str


class LLMResponse(BaseModel):
    """Complete (non-streamed) model answer."""

    content: str
    model: str


class LLMPort(Protocol):
    """Chat model backend. Implementations may raise on transport errors."""

    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
    ) -> LLMResponse: ...

    async def is_available(self) -> bool:
        """True when the backend answers; never raises."""
        ...

    async def list_models(self) -> list[str]: ...
