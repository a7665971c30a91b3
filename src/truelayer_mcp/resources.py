"""MCP resources for the TrueLayer configuration.

Exposes the configured merchant account as a read-only resource.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace
from typing import Any

from fastmcp import FastMCP

from .operations.merchant import get_merchant_account

MERCHANT_ACCOUNT_URI = "truelayer://merchant-account"


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register resources on the provided app instance.

    Args:
        app: The FastMCP application instance to add resources to.
        deps: Dependencies namespace with ``resolve_config``.

    """

    @app.resource(
        uri=MERCHANT_ACCOUNT_URI,
        name="TrueLayer Merchant Account",
        description="Merchant account and client ids used by this server.",
        mime_type="application/json",
        tags={"config"},
    )
    def merchant_account() -> dict[str, Any]:
        return get_merchant_account(deps.resolve_config())


__all__ = ["MERCHANT_ACCOUNT_URI", "register"]
