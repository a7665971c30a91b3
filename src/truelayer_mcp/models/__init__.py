"""Pydantic models for TrueLayer API request bodies."""

from .payment_links import PaymentLinkUser, UserAddress
from .payouts import AccountIdentifier, Beneficiary, PayoutRequest

__all__ = [
    "AccountIdentifier",
    "Beneficiary",
    "PaymentLinkUser",
    "PayoutRequest",
    "UserAddress",
]
