"""FastAPI dependencies - rate limiter and container-backed providers."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from code_quality.api.container import get_container
from code_quality.application.tools.executor import QualityToolExecutor
from code_quality.domain.ports.config import AppConfig

limiter = Limiter(key_func=get_remote_address)


def get_config() -> AppConfig:
    """Configuration from the container."""
    return get_container().config


def get_tool_executor() -> QualityToolExecutor:
    """Tool executor from the container."""
    return get_container().tool_executor
