"""Application Domains.

Each domain contains:
- Tool definitions
- An adapter implementing the tools

Domains share nothing but the record store handed to them.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_server.router import ToolDispatcher
    from mcp_server.store import RecordStore


def load_all_domains(dispatcher: "ToolDispatcher", store: "RecordStore") -> None:
    """
    Load and register all application domains.

    Registration order is the order tools are advertised in.
    """
    from domains.calculator import register_calculator_domain
    from domains.records import register_records_domain

    register_calculator_domain(dispatcher)
    register_records_domain(dispatcher, store)


__all__ = ["load_all_domains"]
