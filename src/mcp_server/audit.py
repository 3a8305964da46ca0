"""Audit logging for the MCP server.

Logs every tool call for debugging and traceability.
Captures: tool, arguments, timestamp, outcome.
"""

import asyncio
import uuid
from pathlib import Path
from typing import Any, Optional

import aiofiles

from shared.logging import get_logger
from shared.models import AuditEntry, ToolDefinition, ToolResultStatus, utcnow

logger = get_logger(__name__)


class AuditLogger:
    """
    Audit logger for tool calls.

    Every call is logged with:
    - Tool name and domain
    - Arguments (with sensitive data redaction)
    - Timestamp
    - Result status and error
    """

    # Arguments that should be redacted in audit logs
    SENSITIVE_PARAMS = {"password", "token", "secret", "api_key", "apikey", "credential"}

    def __init__(
        self,
        log_path: str = "logs/audit.log",
        enabled: bool = True,
        buffer_size: int = 100
    ) -> None:
        self.log_path = Path(log_path)
        self.enabled = enabled
        self.buffer_size = buffer_size
        self._buffer: list[AuditEntry] = []
        self._lock = asyncio.Lock()

        if self.enabled:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def _redact_sensitive(self, params: dict[str, Any]) -> dict[str, Any]:
        """Redact sensitive arguments from audit logs."""
        return {
            key: "[REDACTED]" if key.lower() in self.SENSITIVE_PARAMS else self._redact_value(value)
            for key, value in params.items()
        }

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self._redact_sensitive(value)
        if isinstance(value, (list, tuple)):
            return [self._redact_value(item) for item in value]
        return value

    def create_entry(
        self,
        tool_name: str,
        arguments: dict[str, Any],
        status: ToolResultStatus,
        tool: Optional[ToolDefinition] = None,
        error: Optional[str] = None,
        execution_time_ms: float = 0
    ) -> AuditEntry:
        """
        Create an audit entry for a tool call.

        Args:
            tool_name: Requested tool name
            arguments: Call arguments
            status: Outcome of the call
            tool: Tool definition, when the name resolved
            error: Error message for failed calls
            execution_time_ms: Wall time spent in the call
        """
        return AuditEntry(
            id=str(uuid.uuid4()),
            timestamp=utcnow(),
            tool_name=tool_name,
            domain=tool.domain if tool else None,
            execution_type=tool.execution_type if tool else None,
            arguments=self._redact_sensitive(arguments),
            status=status,
            error=error,
            execution_time_ms=execution_time_ms,
        )

    async def log(self, entry: AuditEntry) -> None:
        """Log an audit entry and buffer it for the audit file."""
        if not self.enabled:
            return

        logger.info(
            "Tool executed",
            audit_id=entry.id,
            tool=entry.tool_name,
            domain=entry.domain,
            status=entry.status.value,
            execution_time_ms=entry.execution_time_ms
        )

        async with self._lock:
            self._buffer.append(entry)

            if len(self._buffer) >= self.buffer_size:
                await self._flush()

    async def _flush(self) -> None:
        """Flush buffered entries to file."""
        if not self._buffer:
            return

        entries_to_write = self._buffer.copy()
        self._buffer.clear()

        try:
            async with aiofiles.open(self.log_path, "a") as f:
                for entry in entries_to_write:
                    await f.write(entry.model_dump_json() + "\n")
        except OSError as e:
            logger.error("Failed to write audit log", error=str(e))
            # Re-add entries to buffer for retry
            self._buffer.extend(entries_to_write)

    async def flush(self) -> None:
        """Public method to flush audit buffer."""
        async with self._lock:
            await self._flush()

    @property
    def pending(self) -> int:
        """Number of entries not yet written to file."""
        return len(self._buffer)
