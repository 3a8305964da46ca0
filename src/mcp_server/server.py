"""Core server facade.

Composes the record store, tool dispatcher and resource resolver into the
four operations every transport forwards to.
"""

from typing import Any, Optional

from shared.config import Settings, get_settings
from shared.logging import get_logger
from shared.models import (
    ResourceDescriptor,
    ResourceReadRequest,
    ResourceResponse,
    ToolCallRequest,
    ToolDefinition,
    ToolResponse,
    utcnow,
)
from mcp_server.audit import AuditLogger
from mcp_server.registry import ToolRegistry
from mcp_server.resources import ResourceResolver
from mcp_server.router import ToolDispatcher
from mcp_server.store import RecordStore, create_store

logger = get_logger(__name__)


class McpServer:
    """Transport-independent entry points for tools and resources."""

    def __init__(
        self,
        store: RecordStore,
        dispatcher: ToolDispatcher,
        resolver: ResourceResolver,
        name: str = "mcp-server",
        version: str = "1.0.0"
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.resolver = resolver
        self.name = name
        self.version = version

    def list_tools(self) -> list[ToolDefinition]:
        return self.dispatcher.list_tools()

    async def call_tool(self, request: ToolCallRequest | dict[str, Any]) -> ToolResponse:
        return await self.dispatcher.call_tool(request)

    def list_resources(self) -> list[ResourceDescriptor]:
        return self.resolver.list_resources()

    def read_resource(self, request: ResourceReadRequest | dict[str, Any]) -> ResourceResponse:
        return self.resolver.read_resource(request)

    def get_health(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "version": self.version,
            "timestamp": utcnow(),
        }

    def get_info(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "capabilities": ["tools", "resources"],
        }

    async def shutdown(self) -> None:
        """Flush pending audit entries."""
        await self.dispatcher.audit_logger.flush()


def create_server(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    audit_logger: Optional[AuditLogger] = None
) -> McpServer:
    """
    Build a fully wired server.

    Args:
        settings: Application settings (defaults to the cached settings)
        store: Record store to serve; a new one is built when omitted
        audit_logger: Audit logger; built from settings when omitted
    """
    from domains import load_all_domains

    settings = settings or get_settings()
    server_settings = settings.server

    if store is None:
        store = create_store(seed=server_settings.seed_sample_data)

    if audit_logger is None:
        audit_logger = AuditLogger(
            log_path=server_settings.audit_log_path,
            enabled=server_settings.enable_audit
        )

    dispatcher = ToolDispatcher(registry=ToolRegistry(), audit_logger=audit_logger)
    load_all_domains(dispatcher, store)

    server = McpServer(
        store=store,
        dispatcher=dispatcher,
        resolver=ResourceResolver(store),
        name=server_settings.name,
        version=server_settings.version,
    )

    logger.info(
        "Server assembled",
        tools=[t.name for t in server.list_tools()],
        resources=[r.uri for r in server.list_resources()]
    )
    return server
