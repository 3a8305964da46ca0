"""Resource Resolver for the MCP server.

Maps resource URIs to read-only projections of the record store.
"""

from typing import Any, Callable

from shared.exceptions import ResourceNotFound
from shared.logging import get_logger
from shared.models import (
    RecordType,
    ResourceContent,
    ResourceDescriptor,
    ResourceReadRequest,
    ResourceResponse,
    dump_json,
)
from mcp_server.store import Record, RecordStore

logger = get_logger(__name__)


RESOURCES: tuple[ResourceDescriptor, ...] = (
    ResourceDescriptor(
        uri="users://all",
        name="All Users",
        description="Complete list of users in the system",
    ),
    ResourceDescriptor(
        uri="products://all",
        name="All Products",
        description="Complete product catalog with total inventory value",
    ),
    ResourceDescriptor(
        uri="users://stats",
        name="User Statistics",
        description="Counts and activity statistics for users",
    ),
    ResourceDescriptor(
        uri="products://stats",
        name="Product Statistics",
        description="Counts and activity statistics for products",
    ),
)


def inventory_value(products: list[Record]) -> float:
    """Sum of price * stock over products; missing fields count as zero."""
    return sum(p.get("price", 0) * p.get("stock", 0) for p in products)


class ResourceResolver:
    """
    Resolves resource URIs against a fixed descriptor table.

    Every resource is a read-only view; reads never mutate the store.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self._descriptors = {d.uri: d for d in RESOURCES}
        self._readers: dict[str, Callable[[], dict[str, Any]]] = {
            "users://all": lambda: self._read_all(RecordType.USER, "users"),
            "products://all": lambda: self._read_all(RecordType.PRODUCT, "products"),
            "users://stats": lambda: self._read_stats(RecordType.USER),
            "products://stats": lambda: self._read_stats(RecordType.PRODUCT),
        }

    def list_resources(self) -> list[ResourceDescriptor]:
        """Return all resource descriptors."""
        return list(RESOURCES)

    def read_resource(self, request: ResourceReadRequest | dict[str, Any]) -> ResourceResponse:
        """
        Read a resource by URI.

        Args:
            request: Decoded ``{uri}`` request

        Returns:
            Single content block carrying the JSON payload

        Raises:
            ResourceNotFound: If the URI matches no descriptor
        """
        if isinstance(request, dict):
            request = ResourceReadRequest(**request)

        uri = request.uri
        descriptor = self._descriptors.get(uri)
        if descriptor is None:
            logger.info("Unknown resource requested", uri=uri)
            raise ResourceNotFound(uri)

        payload = self._readers[uri]()
        logger.debug("Resource read", uri=uri)

        return ResourceResponse(contents=[
            ResourceContent(uri=uri, mime_type=descriptor.mime_type, text=dump_json(payload))
        ])

    def _read_all(self, record_type: RecordType, label: str) -> dict[str, Any]:
        records = self.store.list(record_type)
        payload: dict[str, Any] = {
            "type": label,
            "count": len(records),
            "data": records,
        }
        if record_type is RecordType.PRODUCT:
            payload["totalValue"] = inventory_value(records)
        payload["lastUpdated"] = self.store.now()
        return payload

    def _read_stats(self, record_type: RecordType) -> dict[str, Any]:
        stats = self.store.stats(record_type)
        return {
            **stats,
            "type": f"{record_type.value}_statistics",
            "timestamp": self.store.now(),
        }
