"""
Tool Gateway: MCP-facing adapter for the Query Service.

Advertises a static catalog of three parameter-free tools and answers
``tools/call`` with the Query Service result as one pretty-printed JSON
text item.

Handlers are installed straight into the low-level server's request
table rather than through the ``@server.call_tool()`` decorator: the
decorator turns every exception into an ``isError`` tool result, while
these tools must answer with typed JSON-RPC errors (method not found,
internal error).
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from code_analysis.analysis.query_service import QueryService
from code_analysis.shared.exceptions import DatabaseConnectionError
from code_analysis.shared.logging import generate_correlation_id

logger = logging.getLogger("code_analysis.gateway")

_EMPTY_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {},
    "required": [],
}

TOOL_CATALOG: list[types.Tool] = [
    types.Tool(
        name="get_code_summary",
        description="Get a summary of the codebase structure",
        inputSchema=_EMPTY_INPUT_SCHEMA,
    ),
    types.Tool(
        name="get_component_details",
        description="Get detailed information about components",
        inputSchema=_EMPTY_INPUT_SCHEMA,
    ),
    types.Tool(
        name="get_complexity_metrics",
        description="Get complexity metrics for methods",
        inputSchema=_EMPTY_INPUT_SCHEMA,
    ),
]

INTERNAL_ERROR_MESSAGE = "Failed to execute tool"


class ToolGateway:
    """Registers the tool catalog on an MCP server and routes calls to the Query Service."""

    def __init__(
        self,
        query_service: QueryService,
        name: str = "code-analysis-server",
        version: str = "0.1.0",
    ):
        self._query_service = query_service
        self.server = Server(name, version=version)
        self._operations: dict[str, Callable[[], Awaitable[Any]]] = {
            "get_code_summary": self._code_summary,
            "get_component_details": self._component_details,
            "get_complexity_metrics": self._complexity_metrics,
        }
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.server.request_handlers[types.ListToolsRequest] = self._handle_list_tools
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    # ─── Protocol handlers ──────────────────────────────────

    async def _handle_list_tools(self, req: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=self.list_tools()))

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        result = await self.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(result)

    # ─── Tool operations ────────────────────────────────────

    def list_tools(self) -> list[types.Tool]:
        """Return the static tool catalog."""
        return list(TOOL_CATALOG)

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> types.CallToolResult:
        """Run the named tool and wrap its JSON output in a single text item.

        Arguments are accepted and ignored; every tool is parameter-free.

        Raises:
            McpError: METHOD_NOT_FOUND for a name outside the catalog,
                INTERNAL_ERROR for any failure while querying or serializing.
        """
        operation = self._operations.get(name)
        if operation is None:
            raise McpError(
                types.ErrorData(code=types.METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
            )

        correlation_id = generate_correlation_id()
        logger.info("[%s] Calling tool %s", correlation_id, name)
        try:
            payload = await operation()
            text = json.dumps(payload, indent=2)
        except Exception:
            logger.exception("[%s] Tool execution error in %s", correlation_id, name)
            raise McpError(
                types.ErrorData(code=types.INTERNAL_ERROR, message=INTERNAL_ERROR_MESSAGE)
            ) from None

        logger.info("[%s] Tool %s completed", correlation_id, name)
        return types.CallToolResult(content=[types.TextContent(type="text", text=text)])

    async def _code_summary(self) -> dict[str, Any]:
        summary = await self._query_service.get_code_summary()
        return summary.to_payload()

    async def _component_details(self) -> list[dict[str, Any]]:
        details = await self._query_service.get_component_details()
        return [detail.to_payload() for detail in details]

    async def _complexity_metrics(self) -> list[dict[str, Any]]:
        metrics = await self._query_service.get_complexity_metrics()
        return [metric.to_payload() for metric in metrics]

    # ─── Lifecycle ──────────────────────────────────────────

    async def start(self) -> None:
        """Verify graph connectivity before accepting requests.

        Raises:
            DatabaseConnectionError: If the liveness query fails.
        """
        if not await self._query_service.verify_connection():
            raise DatabaseConnectionError("Failed to connect to Neo4j")

    async def run(self) -> None:
        """Serve MCP requests over stdio until the transport closes or the task is cancelled."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Code Analysis MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    async def shutdown(self, serving: asyncio.Task | None = None) -> None:
        """Release the graph connection, then the stdio transport.

        In-flight requests are not awaited; cancelling the serving task
        tears down the transport underneath them.
        """
        logger.info("Shutting down: closing graph connection, then transport")
        await self._query_service.close()
        if serving is not None and not serving.done():
            serving.cancel()
