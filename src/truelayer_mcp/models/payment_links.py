"""Pydantic models for the end user attached to a payment link."""

from pydantic import BaseModel, Field


class UserAddress(BaseModel):
    """Postal address of the paying user."""

    address_line1: str = Field(description="Address line 1")
    city: str = Field(description="City")
    zip: str = Field(description="Postal/zip code")
    state: str = Field(description="State/region")
    country_code: str = Field(description="Country code (ISO 3166-1 alpha-2)")


class PaymentLinkUser(BaseModel):
    """The paying user, as supplied by the caller (the id is generated)."""

    name: str = Field(description="User's name")
    email: str = Field(description="User's email address")
    phone: str = Field(description="User's phone number")
    date_of_birth: str = Field(description="User's date of birth (YYYY-MM-DD)")
    address: UserAddress = Field(description="User's address")


__all__ = ["PaymentLinkUser", "UserAddress"]
