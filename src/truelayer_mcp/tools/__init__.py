"""Tools package for MCP server.

Contains MCP tool registration modules:
- ``merchant``: Configured merchant account details
- ``payments``: Payment lookup
- ``payouts``: Payout lookup and creation
- ``payment_links``: Payment link creation and lookup
- ``transactions``: Merchant account transaction listing
- ``common``: Shared helpers that turn results and failures into text
"""
