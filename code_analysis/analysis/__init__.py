"""Code Analysis MCP Server. Read-only component and complexity queries over the code graph."""

from code_analysis.analysis.gateway import TOOL_CATALOG, ToolGateway
from code_analysis.analysis.query_service import QueryService

__all__ = [
    "TOOL_CATALOG",
    "ToolGateway",
    "QueryService",
]
