"""Quality tool surface: schemas, executor, text formatters."""

from code_quality.application.tools.executor import QualityToolExecutor, ToolResult, paginate_report
from code_quality.application.tools.schemas import QUALITY_TOOLS

__all__ = ["QUALITY_TOOLS", "QualityToolExecutor", "ToolResult", "paginate_report"]
