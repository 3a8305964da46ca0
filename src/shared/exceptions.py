"""Error taxonomy for the record tools server.

Dispatch-level failures (unknown tool or resource, invalid arguments) are
raised to the caller. Record-level failures raised by the store are caught
by the data adapter and reported back as data.
"""


class McpError(Exception):
    """Base class for all expected server errors."""

    code = "MCP_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidType(McpError):
    """Record type outside the closed enumeration."""

    code = "INVALID_TYPE"

    def __init__(self, record_type: str) -> None:
        super().__init__(f"Invalid data type: {record_type}")
        self.record_type = record_type


class NotFound(McpError):
    """Known record type, absent id."""

    code = "NOT_FOUND"

    def __init__(self, record_type: str, record_id: str) -> None:
        super().__init__(f"{record_type} with id {record_id} not found")
        self.record_type = record_type
        self.record_id = record_id


class UnknownTool(McpError):
    code = "UNKNOWN_TOOL"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ResourceNotFound(McpError):
    code = "RESOURCE_NOT_FOUND"

    def __init__(self, uri: str) -> None:
        super().__init__(f'Resource "{uri}" not found')
        self.uri = uri


class ValidationFailed(McpError):
    """Schema violation on tool arguments or a record payload."""

    code = "VALIDATION_ERROR"


class DivisionByZero(McpError):
    code = "DIVISION_BY_ZERO"

    def __init__(self) -> None:
        super().__init__("Division by zero is not allowed")
