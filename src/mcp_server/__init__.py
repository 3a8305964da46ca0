"""MCP Server - record store, tool dispatch and resource resolution.

The record store owns all state. The dispatcher executes named tools and
the resolver serves URI-addressed views; both read and write only through
the store.
"""

from mcp_server.store import RecordStore, create_store
from mcp_server.registry import ToolRegistry
from mcp_server.router import ToolDispatcher
from mcp_server.resources import ResourceResolver
from mcp_server.audit import AuditLogger
from mcp_server.server import McpServer, create_server

__all__ = [
    "RecordStore",
    "create_store",
    "ToolRegistry",
    "ToolDispatcher",
    "ResourceResolver",
    "AuditLogger",
    "McpServer",
    "create_server",
]
