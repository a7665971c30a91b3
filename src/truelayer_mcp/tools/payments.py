"""MCP tool: truelayer-get-payment."""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from .common import run_api_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the payment lookup tool on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tool to.
        deps: Dependencies namespace with config resolution, token manager
              lookup, ``create_client`` and ``get_payment``.

    """

    @app.tool(
        name="truelayer-get-payment",
        description="Retrieve payment details from TrueLayer API",
        annotations={"title": "Get payment", "readOnlyHint": True},
    )
    async def truelayer_get_payment(
        ctx: Context,
        payment_id: Annotated[str, Field(description="ID of the payment to retrieve")],
    ) -> str:
        return await run_api_tool(
            ctx,
            deps,
            call=lambda client: deps.get_payment(client, payment_id),
            action="retrieve payment",
            label="Payment details",
            log_message=f"Retrieving TrueLayer payment {payment_id}.",
        )


__all__ = ["register"]
