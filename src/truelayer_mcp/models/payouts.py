"""Pydantic models for TrueLayer payout requests.

Field names match the ``POST /v3/payouts`` request body so a model dump can be
sent as-is.
"""

from pydantic import BaseModel, ConfigDict, Field


class AccountIdentifier(BaseModel):
    """How the beneficiary's bank account is identified."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Account identifier type (e.g., sort_code_account_number, iban)")
    sort_code: str | None = Field(default=None, description="Sort code")
    account_number: str | None = Field(default=None, description="Account number")
    iban: str | None = Field(default=None, description="IBAN")


class Beneficiary(BaseModel):
    """Who receives the payout."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Beneficiary type (e.g., external_account)")
    account_holder_name: str = Field(description="Account holder name")
    account_identifier: AccountIdentifier
    reference: str | None = Field(default=None, description="Payment reference")


class PayoutRequest(BaseModel):
    """Body of a create-payout request."""

    currency: str = Field(min_length=3, max_length=3, description="ISO 4217 currency code (e.g., GBP)")
    amount_in_minor: int = Field(gt=0, description="Amount in minor currency units")
    merchant_account_id: str = Field(min_length=1)
    beneficiary: Beneficiary


__all__ = ["AccountIdentifier", "Beneficiary", "PayoutRequest"]
