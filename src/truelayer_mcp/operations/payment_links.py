"""Payment link creation and lookups.

A payment link is a hosted page where an end user pays into the merchant
account. Links created here are single payments by bank transfer with the
provider chosen by the user, and expire a configurable number of hours after
creation.
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from ..client.truelayer_client import TrueLayerClient
from ..models import PaymentLinkUser
from .common import format_timestamp, resource_path

logger = logging.getLogger("truelayer_mcp.operations.payment_links")

PAYMENT_LINKS_PATH = "/v3/payment-links"


def build_payment_link_request(
    *,
    amount_in_minor: int,
    currency: str,
    merchant_account_id: str,
    user: PaymentLinkUser,
    expires_in_hours: int,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build the ``POST /v3/payment-links`` body.

    Args:
        amount_in_minor: Amount in minor currency units; must be positive.
        currency: ISO 4217 currency code.
        merchant_account_id: Merchant account that receives the funds.
        user: The paying user; a fresh user id is generated.
        expires_in_hours: Link lifetime in hours; must be positive.
        now: Creation time, defaults to the current UTC time.

    Returns:
        JSON-serializable request body.

    Raises:
        ValueError: If the amount or lifetime is not positive.

    """
    if amount_in_minor <= 0:
        msg = "amount_in_minor must be a positive integer."
        raise ValueError(msg)
    if expires_in_hours <= 0:
        msg = "expires_in_hours must be a positive integer."
        raise ValueError(msg)

    created_at = now or datetime.now(UTC)
    return {
        "type": "single_payment",
        "expires_at": format_timestamp(created_at + timedelta(hours=expires_in_hours)),
        "payment_configuration": {
            "currency": currency,
            "amount_in_minor": amount_in_minor,
            "payment_method": {
                "type": "bank_transfer",
                "provider_selection": {"type": "user_selected"},
                "beneficiary": {
                    "type": "merchant_account",
                    "merchant_account_id": merchant_account_id,
                },
            },
            "user": {"id": str(uuid.uuid4()), **user.model_dump(mode="json")},
        },
    }


async def create_payment_link(client: TrueLayerClient, request: dict[str, Any]) -> Any:
    """Create a payment link from a body built by ``build_payment_link_request``."""
    logger.info("Creating payment link expiring at %s", request.get("expires_at"))
    return await client.post(PAYMENT_LINKS_PATH, request)


async def get_payment_link(client: TrueLayerClient, payment_link_id: str) -> Any:
    """Return the payment link with the given id as decoded JSON."""
    return await client.get(resource_path(PAYMENT_LINKS_PATH, payment_link_id))


__all__ = [
    "PAYMENT_LINKS_PATH",
    "build_payment_link_request",
    "create_payment_link",
    "get_payment_link",
]
