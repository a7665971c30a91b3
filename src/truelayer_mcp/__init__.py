"""TrueLayer MCP Server package.

This package contains the FastMCP server and tools for reading and creating
payments, payouts, payment links and transactions through the TrueLayer API.
"""

# Intentionally do not re-export symbols from submodules to avoid importing
# heavy dependencies and triggering environment validation at package import
# time. Individual modules (e.g., ``server``) should be imported directly by
# consumers as needed.

__all__: list[str] = []
