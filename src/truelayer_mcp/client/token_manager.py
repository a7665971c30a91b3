"""Token management utilities for the TrueLayer API.

Access tokens come from a client-credentials exchange that is itself a signed
request. The manager keeps one cached token per configuration and only goes
back to the token endpoint when the cached one is inside the expiry buffer.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from ..config import TrueLayerConfig
from ..errors import AuthExchangeError, MalformedResponseError, TrueLayerError
from .http import create_http_client, parse_json_body, send_signed, signing_credential
from .signing import SigningInput, build_signed_request

logger = logging.getLogger("truelayer_mcp.token_manager")

TOKEN_PATH = "/connect/token"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(slots=True)
class CachedToken:
    """The current bearer token and its expiry in epoch milliseconds."""

    token: str | None = None
    expires_at_ms: int = 0

    def is_valid(self, now_ms: int, buffer_ms: int) -> bool:
        """Return True if the token outlives ``now_ms`` by more than ``buffer_ms``."""
        return self.token is not None and self.expires_at_ms > now_ms + buffer_ms


class TokenManager:
    """Manage bearer tokens for the TrueLayer API, refreshing when necessary."""

    def __init__(
        self,
        config: TrueLayerConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the token manager.

        Args:
            config: The resolved TrueLayer configuration to authenticate with.
            transport: Optional HTTP transport override for the token endpoint.
            clock: Returns the current time in epoch seconds.

        """
        self._config = config
        self._transport = transport
        self._clock = clock
        self._cache = CachedToken()
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def cache(self) -> CachedToken:
        """Return the token cache (read-only use outside this class)."""
        return self._cache

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _ensure_lock(self) -> asyncio.Lock:
        """Return an asyncio lock bound to the current event loop.

        Creates a new lock if one does not exist or if the event loop has changed.
        """
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def get_access_token(self) -> str:
        """Return a valid bearer token, exchanging credentials if needed."""
        if self._cache.is_valid(self._now_ms(), self._config.token_expiry_buffer_ms):
            return self._cache.token  # type: ignore[return-value]

        lock = self._ensure_lock()
        async with lock:
            # Another caller may have refreshed while we waited
            if self._cache.is_valid(self._now_ms(), self._config.token_expiry_buffer_ms):
                return self._cache.token  # type: ignore[return-value]
            return await self._fetch_and_cache_token()

    async def _fetch_and_cache_token(self) -> str:
        """Exchange credentials for a token and cache it.

        The cache is only written once the exchange has fully succeeded.
        """
        try:
            response = await self.exchange_token()
        except TrueLayerError:
            logger.exception("Failed to obtain an access token from TrueLayer")
            raise

        token: str = response["access_token"]
        expires_in = response.get("expires_in") or self._config.token_expiry_fallback_seconds
        try:
            lifetime_ms = int(float(expires_in) * 1000)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Token response had unusable expires_in %r; using fallback lifetime.", expires_in)
            lifetime_ms = self._config.token_expiry_fallback_seconds * 1000

        self._cache.token = token
        self._cache.expires_at_ms = self._now_ms() + lifetime_ms
        logger.debug("Fetched new access token from TrueLayer; valid for %d s.", lifetime_ms // 1000)
        return token

    async def exchange_token(self) -> dict[str, Any]:
        """Perform the signed client-credentials exchange.

        Returns:
            The decoded token response (``access_token``, ``expires_in``,
            ``token_type``).

        Raises:
            AuthExchangeError: If the token endpoint returns a non-2xx status.
            TransportError: If the token endpoint cannot be reached.
            MalformedResponseError: If the body is not JSON or has no token.
            SigningError: If the request cannot be signed.

        """
        form_body = urlencode(
            {
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret.get_secret_value(),
                "scope": self._config.token_scope,
                "grant_type": self._config.token_grant_type,
            },
        )
        signed = build_signed_request(
            signing_credential(self._config),
            SigningInput(
                method="POST",
                path=TOKEN_PATH,
                headers={"Content-Type": FORM_CONTENT_TYPE, "User-Agent": self._config.user_agent},
                body=form_body,
            ),
        )

        async with create_http_client(self._config, transport=self._transport) as http_client:
            response = await send_signed(http_client, self._config.auth_uri, signed)

        if not response.is_success:
            raise AuthExchangeError(response.status_code)

        data = parse_json_body(response)
        token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token.strip():
            msg = "Token response did not contain an access_token."
            raise MalformedResponseError(msg)
        return data


_managers: dict[TrueLayerConfig, TokenManager] = {}


def get_token_manager(config: TrueLayerConfig) -> TokenManager:
    """Return the process-wide token manager for ``config``."""
    manager = _managers.get(config)
    if manager is None:
        manager = TokenManager(config)
        _managers[config] = manager
    return manager


__all__ = ["TOKEN_PATH", "CachedToken", "TokenManager", "get_token_manager"]
