"""Payout creation and lookups.

Payouts move funds out of a merchant account to an external beneficiary.
Creating one is a mutating call, so every request carries its own
idempotency key (added by ``TrueLayerClient.post``).
"""

import logging
from typing import Any

from ..client.truelayer_client import TrueLayerClient
from ..models import PayoutRequest
from .common import resource_path

logger = logging.getLogger("truelayer_mcp.operations.payouts")

PAYOUTS_PATH = "/v3/payouts"


async def get_payout(client: TrueLayerClient, payout_id: str) -> Any:
    """Return the payout with the given id as decoded JSON."""
    return await client.get(resource_path(PAYOUTS_PATH, payout_id))


async def create_payout(client: TrueLayerClient, request: PayoutRequest) -> Any:
    """Create a payout and return TrueLayer's response.

    Args:
        client: Authenticated TrueLayer client.
        request: Validated payout request body.

    Returns:
        Decoded JSON response (normally ``{"id": ...}``).

    """
    logger.info(
        "Creating payout of %d %s from merchant account %s",
        request.amount_in_minor,
        request.currency,
        request.merchant_account_id,
    )
    return await client.post(PAYOUTS_PATH, request.model_dump(mode="json", exclude_none=True))


__all__ = ["PAYOUTS_PATH", "create_payout", "get_payout"]
