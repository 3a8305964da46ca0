"""Tool Registry for the MCP server.

Holds the static tool definitions contributed by the domain adapters.
Tools are registered once at startup and looked up by name.
"""

from typing import Any, Optional

from shared.logging import get_logger
from shared.models import ToolDefinition
from shared.schema import validate_tool_arguments

logger = get_logger(__name__)


class ToolRegistry:
    """
    Registry of tool definitions.

    Responsibilities:
    - Register tools from domains
    - Lookup tools by name
    - Validate tool arguments against their schemas
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool definition to register

        Raises:
            ValueError: If tool name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool

        logger.info(
            "Tool registered",
            tool=tool.name,
            domain=tool.domain,
            execution_type=tool.execution_type.value
        )

    def register_many(self, tools: list[ToolDefinition]) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register(tool)

    def get(self, tool_name: str) -> Optional[ToolDefinition]:
        """Get a tool by name, or None if unknown."""
        return self._tools.get(tool_name)

    def list_tools(self, domain: Optional[str] = None) -> list[ToolDefinition]:
        """
        List registered tools in registration order.

        Args:
            domain: Filter by domain name
        """
        tools = list(self._tools.values())
        if domain:
            tools = [t for t in tools if t.domain == domain]
        return tools

    def list_domains(self) -> list[str]:
        """List all domains that contributed tools."""
        return sorted({t.domain for t in self._tools.values()})

    def validate_input(
        self,
        tool_name: str,
        arguments: dict[str, Any]
    ) -> tuple[bool, Optional[str]]:
        """
        Validate arguments against a tool's input schema.

        Returns:
            Tuple of (is_valid, error_message)
        """
        tool = self.get(tool_name)
        if not tool:
            return False, f"Unknown tool: {tool_name}"

        return validate_tool_arguments(tool, arguments)

    def __len__(self) -> int:
        return len(self._tools)
