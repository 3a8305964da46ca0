"""Tests for the resource resolver."""

import json

import pytest

from shared.exceptions import ResourceNotFound


def read(resolver, uri):
    response = resolver.read_resource({"uri": uri})
    assert len(response.contents) == 1
    block = response.contents[0]
    assert block.uri == uri
    assert block.mime_type == "application/json"
    return json.loads(block.text)


class TestResourceResolver:
    """Tests for URI resolution."""

    @pytest.fixture(autouse=True)
    def _resolver(self, store):
        from mcp_server.resources import ResourceResolver

        self.store = store
        self.resolver = ResourceResolver(store)

    def test_list_resources(self):
        uris = [r.uri for r in self.resolver.list_resources()]

        assert uris == ["users://all", "products://all", "users://stats", "products://stats"]

    def test_descriptor_serializes_mime_type_alias(self):
        descriptor = self.resolver.list_resources()[0]

        assert descriptor.model_dump(by_alias=True)["mimeType"] == "application/json"

    def test_users_all(self):
        content = read(self.resolver, "users://all")

        assert content["type"] == "users"
        assert content["count"] == 3
        assert [u["id"] for u in content["data"]] == ["1", "2", "3"]
        assert "totalValue" not in content
        assert "lastUpdated" in content

    def test_products_all_total_value(self):
        content = read(self.resolver, "products://all")

        assert content["type"] == "products"
        assert content["count"] == 3
        assert content["totalValue"] == pytest.approx(999.99 * 50 + 699.99 * 100 + 249.99 * 25)

    def test_total_value_for_known_catalog(self):
        """Test Σ price*stock over a two-product catalog."""
        self.store.clear("product")
        self.store.create("product", {"name": "Laptop", "price": 999.99, "stock": 50})
        self.store.create("product", {"name": "Mouse", "price": 29.99, "stock": 200})

        content = read(self.resolver, "products://all")

        assert content["totalValue"] == pytest.approx(999.99 * 50 + 29.99 * 200)

    def test_total_value_missing_fields_count_as_zero(self):
        self.store.clear("product")
        self.store.create("product", {"name": "Gift card", "price": 25})

        assert read(self.resolver, "products://all")["totalValue"] == 0

    def test_listing_reflects_mutations(self):
        self.store.delete("user", "1")

        assert read(self.resolver, "users://all")["count"] == 2

    @pytest.mark.parametrize("uri, tag", [
        ("users://stats", "user_statistics"),
        ("products://stats", "product_statistics"),
    ])
    def test_stats(self, uri, tag):
        content = read(self.resolver, uri)

        assert content["type"] == tag
        assert content["total"] == 3
        assert content["createdToday"] == 3
        assert "timestamp" in content

    def test_stats_next_day(self, clock):
        clock.advance(days=1)
        self.store.create("user", {"name": "Late", "email": "late@example.com"})

        content = read(self.resolver, "users://stats")

        assert content["total"] == 4
        assert content["createdToday"] == 1

    @pytest.mark.parametrize("uri", ["invalid://resource", "malformed://", "", "users://"])
    def test_unknown_uri(self, uri):
        with pytest.raises(ResourceNotFound, match="not found"):
            self.resolver.read_resource({"uri": uri})

    def test_not_found_message(self):
        with pytest.raises(ResourceNotFound) as exc_info:
            self.resolver.read_resource({"uri": "invalid://resource"})

        assert str(exc_info.value) == 'Resource "invalid://resource" not found'
