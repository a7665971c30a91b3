"""MCP tools: truelayer-get-payout and truelayer-create-payout.

Creating a payout moves money, so the tool is annotated as destructive and
non-idempotent; each invocation is sent with a new idempotency key.
"""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from ..models import Beneficiary, PayoutRequest
from .common import report_failure, run_api_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the payout tools on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tools to.
        deps: Dependencies namespace with config resolution, token manager
              lookup, ``create_client``, ``get_payout`` and ``create_payout``.

    """

    @app.tool(
        name="truelayer-get-payout",
        description="Get payout details from TrueLayer API",
        annotations={"title": "Get payout", "readOnlyHint": True},
    )
    async def truelayer_get_payout(
        ctx: Context,
        payout_id: Annotated[str, Field(description="Payout ID to retrieve")],
    ) -> str:
        return await run_api_tool(
            ctx,
            deps,
            call=lambda client: deps.get_payout(client, payout_id),
            action="retrieve payout",
            label="Payout details",
            log_message=f"Retrieving TrueLayer payout {payout_id}.",
        )

    @app.tool(
        name="truelayer-create-payout",
        description="Create a new payout using TrueLayer API",
        annotations={"title": "Create payout", "readOnlyHint": False, "destructiveHint": True, "idempotentHint": False},
    )
    async def truelayer_create_payout(
        ctx: Context,
        currency: Annotated[str, Field(description="Currency code (e.g., GBP)")],
        amount_in_minor: Annotated[int, Field(description="Amount in minor currency units")],
        beneficiary: Beneficiary,
        merchant_account_id: Annotated[
            str | None,
            Field(description="Merchant account to pay from; defaults to the configured account"),
        ] = None,
    ) -> str:
        try:
            request = PayoutRequest(
                currency=currency,
                amount_in_minor=amount_in_minor,
                merchant_account_id=merchant_account_id or deps.resolve_config().merchant_account_id,
                beneficiary=beneficiary,
            )
        except Exception as exc:
            return await report_failure(ctx, "create payout", exc)
        return await run_api_tool(
            ctx,
            deps,
            call=lambda client: deps.create_payout(client, request),
            action="create payout",
            label="Payout created successfully",
            log_message=f"Creating TrueLayer payout of {amount_in_minor} {currency}.",
        )


__all__ = ["register"]
