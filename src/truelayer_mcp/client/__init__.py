"""Client package for the TrueLayer MCP server.

Provides HTTP client setup, request signing and token management for the
TrueLayer Payments API:
- ``signing``: ``Tl-Signature`` computation and signed request assembly
- ``token_manager``: Bearer token lifecycle with a buffered expiry check
- ``http``: Shared ``httpx`` client factory and response helpers
- ``truelayer_client``: Authenticated, signed API calls
"""
