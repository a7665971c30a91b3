"""Merchant account details held in local configuration."""

from ..config import TrueLayerConfig


def get_merchant_account(config: TrueLayerConfig) -> dict[str, str]:
    """Return the configured merchant account and client ids (no HTTP call)."""
    return {
        "merchant_account_id": config.merchant_account_id,
        "client_id": config.client_id,
    }


__all__ = ["get_merchant_account"]
