"""Records Domain - CRUD over the in-memory record store.

Exposes the ``manage_data`` tool. Supplied field values are checked against
the record rules; required fields are not enforced here. Record-level
failures (missing record, invalid field value) are returned as
``success: false`` results; only malformed calls are raised, and those are
caught earlier by schema validation.
"""

from typing import Any, Callable

from shared.exceptions import McpError, NotFound, ValidationFailed
from shared.logging import get_logger
from shared.models import DataActionResult, ExecutionType, RecordType, ToolDefinition
from shared.schema import validate_record
from domains.base import BaseAdapter, Handler
from mcp_server.store import Record, RecordStore

logger = get_logger(__name__)


ACTIONS = ["create", "read", "update", "delete", "list"]
MANAGED_TYPES = [RecordType.USER.value, RecordType.PRODUCT.value]


def _requires(action: str, *fields: str) -> dict[str, Any]:
    return {
        "if": {
            "properties": {"action": {"const": action}},
            "required": ["action"]
        },
        "then": {"required": list(fields)}
    }


class RecordsAdapter(BaseAdapter):
    """Adapter for the ``manage_data`` tool, backed by a RecordStore."""

    domain = "records"

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        super().__init__()
        self._actions: dict[str, Callable[[str, dict[str, Any]], Any]] = {
            "create": self._create,
            "read": self._read,
            "update": self._update,
            "delete": self._delete,
            "list": self._list,
        }

    def _define_tools(self) -> None:
        self._tools["manage_data"] = ToolDefinition(
            name="manage_data",
            domain=self.domain,
            description="Create, read, update, delete or list user and product records.",
            input_schema={
                "type": "object",
                "properties": {
                    "action": {
                        "type": "string",
                        "enum": ACTIONS,
                        "description": "The operation to perform"
                    },
                    "type": {
                        "type": "string",
                        "enum": MANAGED_TYPES,
                        "description": "The record type to operate on"
                    },
                    "id": {
                        "type": "string",
                        "description": "Record ID (read, update, delete)"
                    },
                    "data": {
                        "type": "object",
                        "description": "Record fields (create, update)"
                    }
                },
                "required": ["action", "type"],
                "allOf": [
                    _requires("create", "data"),
                    _requires("read", "id"),
                    _requires("update", "id", "data"),
                    _requires("delete", "id"),
                ]
            },
            execution_type=ExecutionType.WRITE,
        )

    def _handlers(self) -> dict[str, Handler]:
        return {"manage_data": self._manage_data}

    def _manage_data(self, args: dict[str, Any]) -> dict[str, Any]:
        return self.run_action(args["action"], args["type"], args).to_payload()

    def run_action(
        self,
        action: str,
        record_type: str,
        args: dict[str, Any]
    ) -> DataActionResult:
        """
        Run one manage_data action against the store.

        Returns:
            A successful result with data, or a failed result with the error
        """
        try:
            data = self._actions[action](record_type, args)
        except McpError as e:
            logger.info(
                "Data action failed",
                action=action,
                type=record_type,
                error=e.message
            )
            return DataActionResult.failed(
                action, record_type, e.message, timestamp=self.store.now()
            )

        return DataActionResult.ok(action, record_type, data, timestamp=self.store.now())

    def _check_fields(self, record_type: str, data: dict[str, Any]) -> None:
        # Null and absent fields are stored as given; only supplied values are ruled.
        supplied = {key: value for key, value in data.items() if value is not None}
        is_valid, error = validate_record(record_type, supplied, partial=True)
        if not is_valid:
            raise ValidationFailed(error)

    def _create(self, record_type: str, args: dict[str, Any]) -> Record:
        data = args["data"]
        self._check_fields(record_type, data)
        return self.store.create(record_type, data)

    def _read(self, record_type: str, args: dict[str, Any]) -> Record:
        record = self.store.read(record_type, args["id"])
        if record is None:
            raise NotFound(record_type, args["id"])
        return record

    def _update(self, record_type: str, args: dict[str, Any]) -> Record:
        data = args["data"]
        self._check_fields(record_type, data)
        return self.store.update(record_type, args["id"], data)

    def _delete(self, record_type: str, args: dict[str, Any]) -> dict[str, Any]:
        return self.store.delete(record_type, args["id"])

    def _list(self, record_type: str, args: dict[str, Any]) -> list[Record]:
        return self.store.list(record_type)


def register_records_domain(dispatcher, store: RecordStore) -> RecordsAdapter:
    """Register the records domain with the dispatcher."""
    adapter = RecordsAdapter(store)
    dispatcher.register_adapter(adapter)

    logger.info("Records domain registered", tool_count=len(adapter.tools))
    return adapter
