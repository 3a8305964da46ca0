"""Base class for domain adapters.

An adapter contributes tool definitions and executes them. Adapters:
- Receive arguments that already passed schema validation
- Return a JSON-serializable result
- Raise McpError subclasses for dispatch-level failures
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

from shared.exceptions import UnknownTool
from shared.logging import get_logger
from shared.models import ToolDefinition

logger = get_logger(__name__)

Handler = Callable[[dict[str, Any]], Any]


class BaseAdapter(ABC):
    """
    Base class for domain adapters.

    Subclasses declare their tools in ``_define_tools`` and map each tool
    name to a handler in ``_handlers``.
    """

    domain: str = ""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._define_tools()
        self._routes = self._handlers()

    @abstractmethod
    def _define_tools(self) -> None:
        """Populate ``self._tools``."""

    @abstractmethod
    def _handlers(self) -> dict[str, Handler]:
        """Return the tool name to handler table."""

    @property
    def tools(self) -> list[ToolDefinition]:
        """Return all tool definitions for this domain."""
        return list(self._tools.values())

    def get_tool(self, name: str) -> ToolDefinition | None:
        """Get a tool definition by name."""
        return self._tools.get(name)

    def execute(self, action: str, arguments: dict[str, Any]) -> Any:
        """
        Execute a tool action.

        Args:
            action: Tool name
            arguments: Validated tool arguments

        Returns:
            Tool result payload
        """
        logger.debug("Domain action", domain=self.domain, action=action)

        handler = self._routes.get(action)
        if handler is None:
            raise UnknownTool(action)
        return handler(arguments)
