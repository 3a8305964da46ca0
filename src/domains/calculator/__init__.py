"""Calculator Domain - arithmetic on two operands."""

import math
import operator
from typing import Any, Callable, Optional

from shared.exceptions import DivisionByZero
from shared.logging import get_logger
from shared.models import ExecutionType, ToolDefinition, utcnow
from domains.base import BaseAdapter, Handler

logger = get_logger(__name__)


OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}


def as_double(value: float) -> float:
    """Coerce a JSON number to an IEEE-754 double."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


class CalculatorAdapter(BaseAdapter):
    """Adapter for the ``calculate`` tool."""

    domain = "calculator"

    def __init__(self, clock: Optional[Callable[[], Any]] = None) -> None:
        self._clock = clock or utcnow
        super().__init__()

    def _define_tools(self) -> None:
        self._tools["calculate"] = ToolDefinition(
            name="calculate",
            domain=self.domain,
            description="Perform basic arithmetic (add, subtract, multiply, divide) on two numbers.",
            input_schema={
                "type": "object",
                "properties": {
                    "operation": {
                        "type": "string",
                        "enum": list(OPERATIONS),
                        "description": "The mathematical operation to perform"
                    },
                    "a": {
                        "type": "number",
                        "description": "First number"
                    },
                    "b": {
                        "type": "number",
                        "description": "Second number"
                    }
                },
                "required": ["operation", "a", "b"]
            },
            execution_type=ExecutionType.READ,
        )

    def _handlers(self) -> dict[str, Handler]:
        return {"calculate": self._calculate}

    def _calculate(self, args: dict[str, Any]) -> dict[str, Any]:
        operation = args["operation"]
        a = args["a"]
        b = args["b"]

        if operation == "divide" and b == 0:
            raise DivisionByZero()

        result = OPERATIONS[operation](as_double(a), as_double(b))

        return {
            "operation": operation,
            "operands": {"a": a, "b": b},
            "result": result,
            "timestamp": self._clock(),
        }


def register_calculator_domain(dispatcher) -> CalculatorAdapter:
    """Register the calculator domain with the dispatcher."""
    adapter = CalculatorAdapter()
    dispatcher.register_adapter(adapter)

    logger.info("Calculator domain registered", tool_count=len(adapter.tools))
    return adapter
