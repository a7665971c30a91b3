"""Common utilities for TrueLayer operations modules.

Shared helpers for building resource paths and formatting timestamps the way
the TrueLayer API expects them.
"""

from datetime import UTC, datetime
from urllib.parse import quote


def resource_path(prefix: str, resource_id: str) -> str:
    """Return ``prefix/<resource_id>`` with the id percent-encoded.

    Raises:
        ValueError: If the id is blank.

    """
    if not resource_id or not resource_id.strip():
        msg = "Resource id must not be empty."
        raise ValueError(msg)
    return f"{prefix.rstrip('/')}/{quote(resource_id.strip(), safe='')}"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Raises:
        ValueError: If the value is not an ISO-8601 timestamp.

    """
    try:
        moment = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        msg = f"Invalid ISO-8601 timestamp: '{value}'."
        raise ValueError(msg) from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


__all__ = ["format_timestamp", "parse_timestamp", "resource_path"]
