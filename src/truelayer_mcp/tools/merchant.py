"""MCP tool: truelayer-get-merchant-account.

Returns the merchant account and client ids from local configuration. No
request is made to TrueLayer.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace

from fastmcp import Context, FastMCP

from ..operations.merchant import get_merchant_account
from .common import format_success, report_failure


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the merchant account tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with ``resolve_config``.

    """

    @app.tool(
        name="truelayer-get-merchant-account",
        description="Get merchant account details from TrueLayer",
        annotations={"title": "Get merchant account", "readOnlyHint": True},
    )
    async def truelayer_get_merchant_account(ctx: Context) -> str:
        await ctx.info("Reading configured TrueLayer merchant account.")
        try:
            account = get_merchant_account(deps.resolve_config())
        except Exception as exc:
            return await report_failure(ctx, "retrieve merchant account", exc)
        return format_success("Merchant account", account)


__all__ = ["register"]
