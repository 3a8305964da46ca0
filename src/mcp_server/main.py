"""MCP Server - FastAPI Application.

HTTP transport for the record tools server. Decodes requests, forwards them
to the core server and maps errors to status codes:
expected McpError failures become 400, anything else 500.
"""

import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import Settings, get_settings
from shared.exceptions import McpError
from shared.logging import get_logger, setup_logging
from shared.models import ResourceReadRequest, ToolCallRequest
from mcp_server.server import McpServer, create_server

logger = get_logger(__name__)


class ToolListResponse(BaseModel):
    """List of available tools."""
    tools: list[dict[str, Any]]


class ResourceListResponse(BaseModel):
    """List of available resources."""
    resources: list[dict[str, Any]]


def create_app(
    server: Optional[McpServer] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        server: Pre-built core server; built from settings at startup if omitted
        settings: Application settings
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.server is None:
            app.state.server = create_server(settings)

        logger.info(
            "Starting MCP Server",
            name=app.state.server.name,
            version=app.state.server.version
        )

        yield

        logger.info("Shutting down MCP Server")
        await app.state.server.shutdown()

    app = FastAPI(
        title="MCP Server",
        description="Tools and resources over an in-memory record store",
        version=settings.server.version,
        lifespan=lifespan
    )
    app.state.server = server

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(McpError)
    async def mcp_error_handler(request: Request, exc: McpError):
        logger.info("Request failed", path=request.url.path, code=exc.code, error=exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message, "code": exc.code}
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
        message = str(exc) if settings.environment == "development" else "Something went wrong"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": message}
        )

    def get_server(request: Request) -> McpServer:
        return request.app.state.server

    @app.get("/health", tags=["System"])
    async def health_check(request: Request):
        """Health check endpoint."""
        return get_server(request).get_health()

    @app.get("/mcp/info", tags=["System"])
    async def mcp_info(request: Request):
        """Server name, version and capabilities."""
        return get_server(request).get_info()

    @app.get("/tools/list", response_model=ToolListResponse, tags=["Tools"])
    async def list_tools(request: Request):
        """List all available tools."""
        tools = get_server(request).list_tools()
        return ToolListResponse(tools=[t.to_mcp() for t in tools])

    @app.post("/tools/call", tags=["Tools"])
    async def call_tool(body: ToolCallRequest, request: Request):
        """Execute a tool and return its content envelope."""
        response = await get_server(request).call_tool(body)
        return response.model_dump()

    @app.get("/resources/list", response_model=ResourceListResponse, tags=["Resources"])
    async def list_resources(request: Request):
        """List all available resources."""
        resources = get_server(request).list_resources()
        return ResourceListResponse(resources=[r.model_dump(by_alias=True) for r in resources])

    @app.post("/resources/read", tags=["Resources"])
    async def read_resource(body: ResourceReadRequest, request: Request):
        """Read a resource by URI."""
        response = get_server(request).read_resource(body)
        return response.model_dump(by_alias=True)

    return app


def main():
    """Run the MCP Server with the configured transport."""
    settings = get_settings()
    server_fields = {"server": settings.server.name, "transport": settings.server.transport}

    if settings.server.transport == "stdio":
        import asyncio

        from mcp_server.stdio import run_stdio

        setup_logging(
            settings.log_level, json_output=True, stream=sys.stderr, **server_fields
        )
        asyncio.run(run_stdio(create_server(settings)))
        return

    import uvicorn

    setup_logging(
        settings.log_level,
        json_output=settings.environment == "production",
        **server_fields
    )
    uvicorn.run(
        create_app(settings=settings),
        host=settings.server.host,
        port=settings.server.port,
    )


if __name__ == "__main__":
    main()
