"""MCP tools: truelayer-create-payment-link and truelayer-get-payment-link."""

# pyright: reportUnusedFunction=false

from types import SimpleNamespace
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from ..models import PaymentLinkUser
from .common import report_failure, run_api_tool


def register(app: FastMCP, *, deps: SimpleNamespace) -> None:
    """Register the payment link tools on the provided app instance.

    Args:
        app: The FastMCP application instance to add the tools to.
        deps: Dependencies namespace with config resolution, token manager
              lookup, ``create_client``, ``build_payment_link_request``,
              ``create_payment_link`` and ``get_payment_link``.

    """

    @app.tool(
        name="truelayer-create-payment-link",
        description="Create a new payment link using TrueLayer API",
        annotations={"title": "Create payment link", "readOnlyHint": False, "idempotentHint": False},
    )
    async def truelayer_create_payment_link(
        ctx: Context,
        amount_in_minor: Annotated[int, Field(description="Amount in minor currency units")],
        currency: Annotated[str, Field(description="Currency code")],
        user: Annotated[PaymentLinkUser, Field(description="User information")],
        merchant_account_id: Annotated[
            str | None,
            Field(description="Merchant account ID; defaults to the configured account"),
        ] = None,
        expires_in_hours: Annotated[
            int | None,
            Field(description="Payment link expiry time in hours"),
        ] = None,
    ) -> str:
        try:
            config = deps.resolve_config()
            request = deps.build_payment_link_request(
                amount_in_minor=amount_in_minor,
                currency=currency,
                merchant_account_id=merchant_account_id or config.merchant_account_id,
                user=user,
                expires_in_hours=expires_in_hours or config.payment_link_expiry_hours,
            )
        except Exception as exc:
            return await report_failure(ctx, "create payment link", exc)
        return await run_api_tool(
            ctx,
            deps,
            call=lambda client: deps.create_payment_link(client, request),
            action="create payment link",
            label="Payment link created successfully",
            log_message=f"Creating TrueLayer payment link for {amount_in_minor} {currency}.",
        )

    @app.tool(
        name="truelayer-get-payment-link",
        description="Retrieve payment link details from TrueLayer API",
        annotations={"title": "Get payment link", "readOnlyHint": True},
    )
    async def truelayer_get_payment_link(
        ctx: Context,
        payment_link_id: Annotated[str, Field(description="ID of the payment link to retrieve")],
    ) -> str:
        return await run_api_tool(
            ctx,
            deps,
            call=lambda client: deps.get_payment_link(client, payment_link_id),
            action="retrieve payment link",
            label="Payment link details",
            log_message=f"Retrieving TrueLayer payment link {payment_link_id}.",
        )


__all__ = ["register"]
