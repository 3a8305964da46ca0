"""Core data models for the record tools server.

This module defines the shared data structures passed between the
transports, the dispatcher, the resolver and the record store.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def dump_json(payload: Any) -> str:
    """
    Pretty-print a payload as JSON, rendering datetimes as ISO-8601.

    Infinite and NaN floats have no JSON form and are written as null.
    """
    return json.dumps(
        to_jsonable_python(payload, inf_nan_mode="null"),
        indent=2,
        ensure_ascii=False,
        allow_nan=False,
    )


class RecordType(str, Enum):
    """Closed set of record collections held by the store."""
    USER = "user"
    PRODUCT = "product"
    ORDER = "order"


class ExecutionType(str, Enum):
    """Type of tool execution - read operations vs write operations."""
    READ = "read"
    WRITE = "write"


class ToolDefinition(BaseModel):
    """
    Static definition of an invocable tool.

    The input schema drives both advertisement and argument validation.
    The domain names the adapter that executes the tool.
    """
    name: str = Field(..., description="Tool name as advertised to clients")
    domain: str = Field(..., description="Adapter namespace")
    description: str = Field(..., description="Human readable description")
    version: str = Field(default="1.0.0")
    input_schema: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON Schema for input validation"
    )
    execution_type: ExecutionType = Field(default=ExecutionType.READ)

    model_config = ConfigDict(frozen=True)

    def to_mcp(self) -> dict[str, Any]:
        """Return the definition in MCP tools/list format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema or {"type": "object", "properties": {}},
        }


class ResourceDescriptor(BaseModel):
    """Static descriptor of a URI-addressed resource."""
    uri: str
    name: str
    description: str
    mime_type: str = Field(default="application/json", alias="mimeType")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ToolCallRequest(BaseModel):
    """Decoded tool invocation."""
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ResourceReadRequest(BaseModel):
    """Decoded resource read."""
    uri: str


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Uniform content envelope around a successful tool result."""
    content: list[TextContent]

    @classmethod
    def from_result(cls, result: Any) -> "ToolResponse":
        return cls(content=[TextContent(text=dump_json(result))])


class ResourceContent(BaseModel):
    uri: str
    mime_type: str = Field(alias="mimeType")
    text: str

    model_config = ConfigDict(populate_by_name=True)


class ResourceResponse(BaseModel):
    """Content envelope returned for a resource read."""
    contents: list[ResourceContent]


class DataActionResult(BaseModel):
    """
    Outcome of a manage_data action.

    Record-level failures travel as data through this model rather than as
    exceptions, so a caller can tell a missing record from a bad request.
    """
    action: str
    type: str
    success: bool
    data: Any = None
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)

    @classmethod
    def ok(cls, action: str, record_type: str, data: Any, **kwargs: Any) -> "DataActionResult":
        return cls(action=action, type=record_type, success=True, data=data, **kwargs)

    @classmethod
    def failed(cls, action: str, record_type: str, error: str, **kwargs: Any) -> "DataActionResult":
        return cls(action=action, type=record_type, success=False, error=error, **kwargs)

    def to_payload(self) -> dict[str, Any]:
        """Return the wire payload, carrying either data or error."""
        payload: dict[str, Any] = {
            "action": self.action,
            "type": self.type,
            "success": self.success,
        }
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
        payload["timestamp"] = self.timestamp
        return payload


class ToolResultStatus(str, Enum):
    """Status of a tool call as recorded by the audit log."""
    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"


class AuditEntry(BaseModel):
    """
    Audit log entry for a tool call.

    Captures tool, arguments, timestamp, and outcome.
    """
    id: str
    timestamp: datetime = Field(default_factory=utcnow)

    tool_name: str
    domain: Optional[str] = None
    execution_type: Optional[ExecutionType] = None

    arguments: dict[str, Any] = Field(default_factory=dict)

    status: ToolResultStatus
    error: Optional[str] = None
    execution_time_ms: float = 0
