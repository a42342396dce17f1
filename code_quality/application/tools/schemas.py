"""Tool definitions (OpenAI/Ollama function format) and argument models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

_PROJECT_PATH = {"type": "string", "description": "Absolute path to the project root"}

QUALITY_TOOLS = [
    {
        "type": "function",
        "function": {
            "name": "analyze_project",
            "description": "Detect project types (React, Next.js, NestJS, Java, .NET, Angular, Firebase, ...) and sub-projects.",
            "parameters": {
                "type": "object",
                "required": ["projectPath"],
                "properties": {
                    "projectPath": _PROJECT_PATH,
                    "deep": {"type": "boolean", "description": "Scan nested folders for sub-projects", "default": True},
                },
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "check_quality",
            "description": "Run structural and lexical quality checks; returns a paginated report with score and issue summary.",
            "parameters": {
                "type": "object",
                "required": ["projectPath"],
                "properties": {
                    "projectPath": _PROJECT_PATH,
                    "projectType": {"type": "string", "description": "Force a project type instead of detecting it"},
                    "deepAnalysis": {"type": "boolean", "description": "Consult the deep-analysis oracle", "default": False},
                    "aiEnabled": {"type": "boolean", "description": "Enable AI-assisted analysis", "default": False},
                    "checkUnusedCode": {"type": "boolean", "description": "Flag unused variables and exports", "default": True},
                    "checkComplexity": {"type": "boolean", "description": "Flag complex functions", "default": False},
                    "checkSecurity": {"type": "boolean", "description": "Flag hardcoded secrets and hosts", "default": False},
                    "page": {"type": "integer", "description": "Page of issues (1-based)", "default": 1, "minimum": 1},
                    "pageSize": {
                        "type": "integer",
                        "description": "Issues per page",
                        "default": DEFAULT_PAGE_SIZE,
                        "minimum": 1,
                        "maximum": MAX_PAGE_SIZE,
                    },
                },
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_recommendations",
            "description": "Score, detected types, recommendations and the first five issues.",
            "parameters": {"type": "object", "required": ["projectPath"], "properties": {"projectPath": _PROJECT_PATH}},
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_smart_summary",
            "description": "Condensed digest: top problem categories, file hotspots, estimated fix time. Saves a snapshot.",
            "parameters": {"type": "object", "required": ["projectPath"], "properties": {"projectPath": _PROJECT_PATH}},
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_quick_wins",
            "description": "Remediation bundles ranked by score gain per minute of effort.",
            "parameters": {"type": "object", "required": ["projectPath"], "properties": {"projectPath": _PROJECT_PATH}},
        },
    },
    {
        "type": "function",
        "function": {
            "name": "get_trends",
            "description": "Compare with the last saved snapshot, then save the current report.",
            "parameters": {"type": "object", "required": ["projectPath"], "properties": {"projectPath": _PROJECT_PATH}},
        },
    },
]


class _ToolArgs(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    project_path: str = Field(min_length=1)


class ProjectPathArgs(_ToolArgs):
    """Arguments of tools taking only projectPath."""


class AnalyzeProjectArgs(_ToolArgs):
    deep: bool = True


class CheckQualityArgs(_ToolArgs):
    project_type: str | None = None
    deep_analysis: bool = False
    ai_enabled: bool = False
    check_unused_code: bool = True
    check_complexity: bool = False
    check_security: bool = False
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @field_validator("page")
    @classmethod
    def _page_at_least_one(cls, v: int) -> int:
        return max(1, v)

    @field_validator("page_size")
    @classmethod
    def _clamp_page_size(cls, v: int) -> int:
        return min(MAX_PAGE_SIZE, max(1, v))


TOOL_ARGS: dict[str, type[_ToolArgs]] = {
    "analyze_project": AnalyzeProjectArgs,
    "check_quality": CheckQualityArgs,
    "get_recommendations": ProjectPathArgs,
    "get_smart_summary": ProjectPathArgs,
    "get_quick_wins": ProjectPathArgs,
    "get_trends": ProjectPathArgs,
}
