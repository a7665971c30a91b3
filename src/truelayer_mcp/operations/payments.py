"""Payment lookups."""

from typing import Any

from ..client.truelayer_client import TrueLayerClient
from .common import resource_path

PAYMENTS_PATH = "/v3/payments"


async def get_payment(client: TrueLayerClient, payment_id: str) -> Any:
    """Return the payment with the given id as decoded JSON."""
    return await client.get(resource_path(PAYMENTS_PATH, payment_id))


__all__ = ["PAYMENTS_PATH", "get_payment"]
