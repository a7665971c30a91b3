"""TrueLayer API client.

``TrueLayerClient`` authenticates, signs and sends Payments API calls on top
of an ``httpx`` client created by ``create_truelayer_client``.
"""

import json
import logging
import uuid
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import urlencode

import httpx

from ..config import TrueLayerConfig
from ..errors import UpstreamApiError
from .http import JSON_CONTENT_TYPE, create_http_client, parse_json_body, send_signed, signing_credential
from .signing import SigningInput, build_signed_request
from .token_manager import TokenManager

logger = logging.getLogger("truelayer_mcp.client")


def _raise_for_upstream_status(response: httpx.Response) -> None:
    """Raise ``UpstreamApiError`` for non-2xx responses, keeping problem details."""
    if response.is_success:
        return
    title: str | None = None
    detail: str | None = None
    try:
        problem = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        problem = None
    if isinstance(problem, dict):
        title = problem.get("title")
        detail = problem.get("detail")
    logger.warning("TrueLayer API returned HTTP %s for %s", response.status_code, response.request.url.path)
    raise UpstreamApiError(response.status_code, title=title, detail=detail)


class TrueLayerClient:
    """Authenticated, signed access to the TrueLayer Payments API."""

    def __init__(
        self,
        config: TrueLayerConfig,
        *,
        token_manager: TokenManager,
        http_client: httpx.AsyncClient,
    ) -> None:
        """Initialize the client.

        Args:
            config: Resolved TrueLayer configuration.
            token_manager: Source of bearer tokens.
            http_client: Open HTTP client used for API calls.

        """
        self._config = config
        self._token_manager = token_manager
        self._http_client = http_client

    @property
    def config(self) -> TrueLayerConfig:
        """Return the configuration the client was built with."""
        return self._config

    async def get(self, path: str, *, params: Mapping[str, str] | None = None) -> Any:
        """Send a signed GET request and return the decoded JSON body."""
        return await self._call("GET", path, params=params)

    async def post(self, path: str, payload: Mapping[str, Any]) -> Any:
        """Send a signed POST request carrying a fresh idempotency key."""
        return await self._call("POST", path, payload=payload)

    async def _call(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        access_token = await self._token_manager.get_access_token()
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": self._config.user_agent,
        }
        body = ""
        if payload is not None:
            body = json.dumps(payload)
            headers["Content-Type"] = JSON_CONTENT_TYPE
            headers["Idempotency-Key"] = str(uuid.uuid4())

        target = f"{path}?{urlencode(params)}" if params else path
        signed = build_signed_request(
            signing_credential(self._config),
            SigningInput(method=method, path=target, headers=headers, body=body),
        )
        url = f"{self._config.base_uri}{target}"

        logger.debug("Sending %s %s", method, path)
        response = await send_signed(self._http_client, url, signed)
        _raise_for_upstream_status(response)
        return parse_json_body(response)


@asynccontextmanager
async def create_truelayer_client(
    config: TrueLayerConfig,
    *,
    token_manager: TokenManager,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[TrueLayerClient]:
    """Create a ``TrueLayerClient`` backed by a fresh HTTP client.

    Args:
        config: The configuration containing base URI, timeouts and credentials.
        token_manager: Token manager shared across calls.
        transport: Optional transport override (used by tests).

    Yields:
        Configured TrueLayerClient instance.

    """
    async with create_http_client(config, transport=transport) as http_client:
        yield TrueLayerClient(config, token_manager=token_manager, http_client=http_client)


__all__ = ["TrueLayerClient", "create_truelayer_client"]
