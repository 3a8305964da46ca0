"""JSON Schema validation utilities.

Tool arguments and record payloads are both checked against JSON Schemas.
These functions never raise for invalid input; they report.
"""

from typing import Any, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from shared.models import RecordType, ToolDefinition

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


RECORD_SCHEMAS: dict[RecordType, dict[str, Any]] = {
    RecordType.USER: {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "email": {"type": "string", "pattern": EMAIL_PATTERN},
            "status": {"enum": ["active", "inactive"]},
        },
        "required": ["name", "email"],
    },
    RecordType.PRODUCT: {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "price": {"type": "number", "exclusiveMinimum": 0},
            "category": {"type": "string", "minLength": 1},
            "stock": {"type": "number", "minimum": 0},
        },
        "required": ["name", "price", "category"],
    },
    RecordType.ORDER: {
        "type": "object",
        "properties": {
            "userId": {"type": "string", "minLength": 1},
            "productId": {"type": "string", "minLength": 1},
            "quantity": {"type": "number", "exclusiveMinimum": 0},
            "total": {"type": "number", "exclusiveMinimum": 0},
            "status": {"enum": ["pending", "completed", "shipped", "cancelled"]},
        },
        "required": ["userId", "productId", "quantity", "total"],
    },
}


def _format_error(error) -> str:
    if error.path:
        return f"{'.'.join(str(p) for p in error.path)}: {error.message}"
    return error.message


def validate_schema(data: Any, schema: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate data against a JSON Schema.

    Args:
        data: The data to validate
        schema: JSON Schema to validate against

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not schema:
        return True, []

    validator = Draft7Validator(schema)
    errors = list(validator.iter_errors(data))

    if not errors:
        return True, []

    return False, [_format_error(e) for e in errors]


def first_error(data: Any, schema: dict[str, Any]) -> Optional[str]:
    """Return the most relevant violation of a schema, or None."""
    if not schema:
        return None

    error = best_match(Draft7Validator(schema).iter_errors(data))
    if error is None:
        return None
    return _format_error(error)


def validate_tool_arguments(
    tool: ToolDefinition,
    arguments: Any
) -> tuple[bool, Optional[str]]:
    """
    Validate tool arguments against the tool's input schema.

    Args:
        tool: Tool definition carrying the input schema
        arguments: Decoded argument object

    Returns:
        Tuple of (is_valid, error_message)
    """
    error = first_error(arguments, tool.input_schema)
    if error:
        return False, f"Invalid arguments for tool {tool.name}: {error}"
    return True, None


def validate_record(
    record_type: str,
    data: Any,
    partial: bool = False
) -> tuple[bool, Optional[str]]:
    """
    Validate a record payload against its type's field rules.

    Args:
        record_type: Record type token
        data: Field mapping to check
        partial: Only check supplied fields (used for updates)

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        schema = RECORD_SCHEMAS[RecordType(record_type)]
    except ValueError:
        return False, f"Unknown data type: {record_type}"

    if partial:
        schema = {key: value for key, value in schema.items() if key != "required"}

    error = first_error(data, schema)
    if error:
        return False, f"Invalid data for type {record_type}: {error}"
    return True, None
