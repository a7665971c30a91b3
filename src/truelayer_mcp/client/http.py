"""Shared HTTP plumbing for the TrueLayer client and token manager.

Provides the async context manager that creates a configured ``httpx`` client
and helpers that transmit signed requests and decode their JSON bodies.
"""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from ..config import TrueLayerConfig
from ..errors import MalformedResponseError, TransportError
from .signing import SignedRequest, SigningCredential

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


@asynccontextmanager
async def create_http_client(
    config: TrueLayerConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Create an ``httpx.AsyncClient`` with the configured timeout.

    Args:
        config: The configuration containing the timeout.
        transport: Optional transport override (used by tests).

    Yields:
        Configured async HTTP client. No retries are configured.

    """
    timeout = httpx.Timeout(config.timeout_ms / 1000)
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        yield client


def signing_credential(config: TrueLayerConfig) -> SigningCredential:
    """Return the signing key material held by the configuration."""
    return SigningCredential(kid=config.kid, private_key_pem=config.private_key_pem.get_secret_value())


async def send_signed(http_client: httpx.AsyncClient, url: str, signed: SignedRequest) -> httpx.Response:
    """Transmit a signed request exactly as it was signed.

    Raises:
        TransportError: If no HTTP response was received.

    """
    try:
        return await http_client.request(
            signed.method,
            url,
            headers=signed.headers,
            content=signed.body or None,
        )
    except httpx.TransportError as exc:
        msg = f"{signed.method} {signed.path} failed: {exc.__class__.__name__}: {exc}"
        raise TransportError(msg) from exc


def parse_json_body(response: httpx.Response) -> Any:
    """Decode a JSON response body.

    Raises:
        MalformedResponseError: If the body is not valid JSON.

    """
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Expected a JSON response body (HTTP {response.status_code})."
        raise MalformedResponseError(msg) from exc


__all__ = [
    "JSON_CONTENT_TYPE",
    "create_http_client",
    "parse_json_body",
    "send_signed",
    "signing_credential",
]
