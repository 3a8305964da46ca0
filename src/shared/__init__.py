"""Shared models, validation, configuration and logging."""

from shared.models import (
    DataActionResult,
    RecordType,
    ResourceDescriptor,
    ToolDefinition,
    ToolResponse,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "DataActionResult",
    "RecordType",
    "ResourceDescriptor",
    "ToolDefinition",
    "ToolResponse",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
