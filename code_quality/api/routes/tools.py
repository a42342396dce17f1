"""Tool surface API - list and call quality tools."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from code_quality.api.dependencies import get_tool_executor, limiter
from code_quality.application.tools.executor import QualityToolExecutor

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolCallRequest(BaseModel):
    """Named tool invocation."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolContent(BaseModel):
    type: str = "text"
    text: str


class ToolCallResponse(BaseModel):
    """Structured tool result; failures set isError instead of an HTTP error."""

    content: list[ToolContent]
    isError: bool = False


@router.get("")
async def list_tools(executor: QualityToolExecutor = Depends(get_tool_executor)) -> dict:
    """Tool definitions with JSON schemas."""
    return {"tools": executor.list_tools()}


@router.post("/call", response_model=ToolCallResponse)
@limiter.limit("60/minute")
async def call_tool(
    request: Request,
    body: ToolCallRequest,
    executor: QualityToolExecutor = Depends(get_tool_executor),
) -> ToolCallResponse:
    """Execute a tool by name."""
    result = await executor.execute(body.name, body.arguments)
    return ToolCallResponse.model_validate(result.to_payload())
