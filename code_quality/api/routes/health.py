"""Liveness endpoint."""

from fastapi import APIRouter, Depends, Request

from code_quality.api.container import Container, get_container
from code_quality.api.dependencies import limiter

router = APIRouter(tags=["health"])


@router.get("/health")
@limiter.limit("100/minute")
async def health(request: Request, container: Container = Depends(get_container)) -> dict:
    """Service status. The LLM is probed only when deep analysis may use it."""
    enabled = container.config.llm.enabled
    return {
        "status": "ok",
        "service": "code-quality",
        "llm_enabled": enabled,
        "llm_available": await container.llm.is_available() if enabled else False,
    }
