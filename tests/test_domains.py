"""Tests for application domains."""

import pytest

from shared.exceptions import DivisionByZero, UnknownTool


class TestCalculatorDomain:
    """Tests for the calculator domain."""

    def setup_method(self):
        """Set up test fixtures."""
        from domains.calculator import CalculatorAdapter

        self.adapter = CalculatorAdapter()

    @pytest.mark.parametrize("operation, a, b, expected", [
        ("add", 5, 3, 8),
        ("subtract", 10, 4, 6),
        ("multiply", 6, 7, 42),
        ("divide", 15, 3, 5),
        ("multiply", -5, 3, -15),
        ("add", 999999999, 999999999, 1999999998),
        ("divide", 1, 1000000, 0.000001),
    ])
    def test_operations(self, operation, a, b, expected):
        """Test each arithmetic operation."""
        result = self.adapter.execute("calculate", {"operation": operation, "a": a, "b": b})

        assert result["operation"] == operation
        assert result["operands"] == {"a": a, "b": b}
        assert result["result"] == expected
        assert result["timestamp"] is not None

    def test_floating_point_precision(self):
        result = self.adapter.execute("calculate", {"operation": "add", "a": 0.1, "b": 0.2})

        assert result["result"] == pytest.approx(0.3)

    def test_integers_use_double_precision(self):
        """Test 2**53 + 1 rounds the way a double does."""
        result = self.adapter.execute(
            "calculate", {"operation": "add", "a": 2**53, "b": 1}
        )

        assert result["result"] == 9007199254740992.0
        assert isinstance(result["result"], float)
        assert result["operands"] == {"a": 2**53, "b": 1}

    def test_overflow_is_infinite(self):
        result = self.adapter.execute(
            "calculate", {"operation": "multiply", "a": 1e308, "b": 10}
        )

        assert result["result"] == float("inf")

    def test_division_by_zero(self):
        """Test dividing by zero raises instead of returning infinity."""
        with pytest.raises(DivisionByZero, match="Division by zero is not allowed"):
            self.adapter.execute("calculate", {"operation": "divide", "a": 10, "b": 0})

    def test_zero_divided_is_fine(self):
        result = self.adapter.execute("calculate", {"operation": "divide", "a": 0, "b": 4})
        assert result["result"] == 0

    def test_unknown_action(self):
        with pytest.raises(UnknownTool):
            self.adapter.execute("integrate", {})

    def test_tools(self):
        assert [t.name for t in self.adapter.tools] == ["calculate"]
        assert self.adapter.tools[0].domain == "calculator"


class TestRecordsDomain:
    """Tests for the records domain."""

    @pytest.fixture(autouse=True)
    def _adapter(self, store):
        from domains.records import RecordsAdapter

        self.store = store
        self.adapter = RecordsAdapter(store)

    def test_create(self):
        result = self.adapter.execute("manage_data", {
            "action": "create",
            "type": "user",
            "data": {"name": "Tool User", "email": "tool@example.com"},
        })

        assert result["success"] is True
        assert result["action"] == "create"
        assert result["type"] == "user"
        assert result["data"]["name"] == "Tool User"
        assert self.store.read("user", result["data"]["id"]) is not None

    def test_read(self):
        result = self.adapter.execute("manage_data", {"action": "read", "type": "user", "id": "1"})

        assert result["success"] is True
        assert result["data"]["name"] == "John Doe"
        assert "error" not in result

    def test_read_missing_is_data_not_error(self):
        """Test a missing record comes back as a failed result."""
        result = self.adapter.execute(
            "manage_data", {"action": "read", "type": "user", "id": "non-existent"}
        )

        assert result["success"] is False
        assert "not found" in result["error"]
        assert "data" not in result
        assert result["timestamp"] is not None

    def test_update(self):
        result = self.adapter.execute("manage_data", {
            "action": "update",
            "type": "user",
            "id": "1",
            "data": {"name": "Updated via Tool"},
        })

        assert result["success"] is True
        assert result["data"]["name"] == "Updated via Tool"
        assert result["data"]["email"] == "john@example.com"

    def test_update_missing(self):
        result = self.adapter.execute("manage_data", {
            "action": "update",
            "type": "product",
            "id": "42",
            "data": {"stock": 1},
        })

        assert result["success"] is False
        assert result["error"] == "product with id 42 not found"

    def test_delete(self):
        result = self.adapter.execute("manage_data", {"action": "delete", "type": "user", "id": "2"})

        assert result["success"] is True
        assert result["data"] == {"id": "2", "deleted": True}
        assert self.store.read("user", "2") is None

    def test_delete_missing(self):
        result = self.adapter.execute(
            "manage_data", {"action": "delete", "type": "user", "id": "nope"}
        )
        assert result["success"] is False

    def test_list(self):
        result = self.adapter.execute("manage_data", {"action": "list", "type": "product"})

        assert result["success"] is True
        assert isinstance(result["data"], list)
        assert len(result["data"]) == 3

    def test_invalid_payload_is_reported(self):
        """Test record validation failures are returned, not raised."""
        result = self.adapter.execute("manage_data", {
            "action": "create",
            "type": "product",
            "data": {"name": "Lamp", "price": -1, "category": "Home"},
        })

        assert result["success"] is False
        assert "price" in result["error"]
        assert len(self.store.list("product")) == 3

    def test_create_with_empty_payload(self):
        result = self.adapter.execute("manage_data", {"action": "create", "type": "user", "data": {}})

        assert result["success"] is True
        assert result["data"]["id"]
        assert len(self.store.list("user")) == 4

    def test_create_keeps_null_fields(self):
        """Test null values are stored as given rather than rejected."""
        result = self.adapter.execute("manage_data", {
            "action": "create",
            "type": "user",
            "data": {"name": None, "status": "active"},
        })

        assert result["success"] is True
        assert result["data"]["name"] is None
        assert result["data"]["status"] == "active"

    def test_invalid_partial_update_is_reported(self):
        result = self.adapter.execute("manage_data", {
            "action": "update",
            "type": "user",
            "id": "1",
            "data": {"email": "not-an-email"},
        })

        assert result["success"] is False
        assert self.store.read("user", "1")["email"] == "john@example.com"

    def test_run_action_result_model(self):
        result = self.adapter.run_action("read", "user", {"id": "3"})

        assert result.success
        assert result.data["name"] == "Bob Johnson"
        assert result.error is None
