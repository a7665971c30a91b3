"""MCP tool: truelayer-list-transactions.

Without ``from_date``/``to_date`` the listing covers the 30 days ending now.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from ..client.truelayer_client import TrueLayerClient
from .common import run_api_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the transaction listing tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with config resolution, token manager
              lookup, ``create_client`` and ``list_transactions``.

    """

    @app.tool(
        name="truelayer-list-transactions",
        description="Get a list of transactions for a merchant account from TrueLayer",
        annotations={"title": "List transactions", "readOnlyHint": True},
    )
    async def truelayer_list_transactions(
        ctx: Context,
        merchant_account_id: Annotated[
            str | None,
            Field(description="Merchant account ID; defaults to the configured account"),
        ] = None,
        from_date: Annotated[
            str | None,
            Field(description="Start date for transactions (YYYY-MM-DDTHH:MM:SS±HH:MM)"),
        ] = None,
        to_date: Annotated[
            str | None,
            Field(description="End date for transactions (YYYY-MM-DDTHH:MM:SS±HH:MM)"),
        ] = None,
        cursor: Annotated[str | None, Field(description="Cursor for pagination")] = None,
    ) -> str:
        async def _list(client: TrueLayerClient) -> Any:
            account_id = merchant_account_id or client.config.merchant_account_id
            return await deps.list_transactions(client, account_id, from_=from_date, to=to_date, cursor=cursor)

        return await run_api_tool(
            ctx,
            deps,
            call=_list,
            action="list transactions",
            label="Transactions",
            log_message="Listing TrueLayer merchant account transactions.",
        )


__all__ = ["register"]
