"""Merchant account transaction listing.

When the caller does not bound the window, the listing covers the 30 days
ending now. A window given only by its end covers the 30 days before that end.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from ..client.truelayer_client import TrueLayerClient
from .common import format_timestamp, parse_timestamp, resource_path

MERCHANT_ACCOUNTS_PATH = "/v3/merchant-accounts"
DEFAULT_WINDOW = timedelta(days=30)


def resolve_transaction_window(
    from_: str | None = None,
    to: str | None = None,
    *,
    now: datetime | None = None,
) -> tuple[str, str]:
    """Return the ``(from, to)`` query values, filling in the 30-day defaults.

    Caller-supplied values are passed through verbatim.

    Raises:
        ValueError: If ``to`` must be parsed to derive ``from`` and is not ISO-8601.

    """
    if to:
        to_value = to
    else:
        to_value = format_timestamp(now or datetime.now(UTC))
    if from_:
        return from_, to_value
    end = parse_timestamp(to_value)
    return format_timestamp(end - DEFAULT_WINDOW), to_value


async def list_transactions(
    client: TrueLayerClient,
    merchant_account_id: str,
    *,
    from_: str | None = None,
    to: str | None = None,
    cursor: str | None = None,
) -> Any:
    """List transactions for a merchant account.

    Args:
        client: Authenticated TrueLayer client.
        merchant_account_id: Merchant account to list.
        from_: Window start (ISO-8601); defaults to 30 days before ``to``.
        to: Window end (ISO-8601); defaults to now.
        cursor: Pagination cursor from a previous page, if any.

    Returns:
        Decoded JSON page of transactions.

    """
    from_value, to_value = resolve_transaction_window(from_, to)
    params = {"from": from_value, "to": to_value}
    if cursor:
        params["cursor"] = cursor
    path = f"{resource_path(MERCHANT_ACCOUNTS_PATH, merchant_account_id)}/transactions"
    return await client.get(path, params=params)


__all__ = ["DEFAULT_WINDOW", "list_transactions", "resolve_transaction_window"]
