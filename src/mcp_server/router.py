"""Tool Dispatcher for the MCP server.

Routes tool calls to the domain adapter that owns the tool.
Handles lookup, validation, execution, auditing and result wrapping.
"""

import time
from typing import Any, Optional

from shared.exceptions import McpError, UnknownTool, ValidationFailed
from shared.logging import get_logger
from shared.models import ToolCallRequest, ToolDefinition, ToolResponse, ToolResultStatus
from mcp_server.audit import AuditLogger
from mcp_server.registry import ToolRegistry
from domains.base import BaseAdapter

logger = get_logger(__name__)


class ToolDispatcher:
    """
    Single entry point for executing a named tool.

    Responsibilities:
    - Resolve the tool name against the registry
    - Validate arguments against the tool's schema
    - Route to the adapter registered for the tool's domain
    - Wrap results in the content envelope
    - Audit every call

    Unknown tools, invalid arguments and domain errors such as division by
    zero are raised as McpError subclasses.
    """

    def __init__(
        self,
        registry: Optional[ToolRegistry] = None,
        audit_logger: Optional[AuditLogger] = None
    ) -> None:
        self.registry = registry or ToolRegistry()
        self.audit_logger = audit_logger or AuditLogger(enabled=False)
        self._adapters: dict[str, BaseAdapter] = {}

    def register_adapter(self, adapter: BaseAdapter) -> None:
        """
        Register a domain adapter and the tools it defines.

        Args:
            adapter: Domain adapter
        """
        if adapter.domain in self._adapters:
            raise ValueError(f"Adapter for domain '{adapter.domain}' is already registered")

        self.registry.register_many(adapter.tools)
        self._adapters[adapter.domain] = adapter
        logger.info("Adapter registered", domain=adapter.domain)

    def list_tools(self) -> list[ToolDefinition]:
        """Return all tool definitions in registration order."""
        return self.registry.list_tools()

    async def call_tool(self, request: ToolCallRequest | dict[str, Any]) -> ToolResponse:
        """
        Execute a tool call.

        Args:
            request: Decoded ``{name, arguments}`` request

        Returns:
            Content envelope around the tool result

        Raises:
            UnknownTool: If no tool has the requested name
            ValidationFailed: If the arguments violate the tool's schema
            McpError: For domain-level hard failures
        """
        if isinstance(request, dict):
            request = ToolCallRequest(**request)

        start_time = time.time()
        tool_name = request.name
        arguments = request.arguments

        logger.debug("Executing tool", tool=tool_name)

        tool = self.registry.get(tool_name)
        if not tool:
            await self._audit(tool_name, arguments, ToolResultStatus.NOT_FOUND, start_time,
                              error=f"Unknown tool: {tool_name}")
            raise UnknownTool(tool_name)

        is_valid, error = self.registry.validate_input(tool_name, arguments)
        if not is_valid:
            await self._audit(tool_name, arguments, ToolResultStatus.VALIDATION_ERROR,
                              start_time, tool=tool, error=error)
            raise ValidationFailed(error)

        adapter = self._adapters[tool.domain]

        try:
            result = adapter.execute(tool_name, arguments)
        except McpError as e:
            await self._audit(tool_name, arguments, ToolResultStatus.ERROR, start_time,
                              tool=tool, error=e.message)
            raise
        except Exception as e:
            logger.error(
                "Tool execution failed",
                tool=tool_name,
                error=str(e),
                exc_info=True
            )
            await self._audit(tool_name, arguments, ToolResultStatus.ERROR, start_time,
                              tool=tool, error=str(e))
            raise

        await self._audit(tool_name, arguments, ToolResultStatus.SUCCESS, start_time, tool=tool)
        return ToolResponse.from_result(result)

    async def _audit(
        self,
        tool_name: str,
        arguments: dict[str, Any],
        status: ToolResultStatus,
        start_time: float,
        tool: Optional[ToolDefinition] = None,
        error: Optional[str] = None
    ) -> None:
        entry = self.audit_logger.create_entry(
            tool_name,
            arguments,
            status,
            tool=tool,
            error=error,
            execution_time_ms=(time.time() - start_time) * 1000,
        )
        await self.audit_logger.log(entry)
