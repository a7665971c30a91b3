"""Configuration management for the TrueLayer MCP server.

This module defines the ``TrueLayerConfig`` model and helpers to load
configuration from environment variables. The signing key and client secret
are held as ``SecretStr`` so they never leak into reprs or log lines.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

# Load variables from a local .env file for development convenience
load_dotenv()

ENVIRONMENT_URIS: dict[str, tuple[str, str]] = {
    "production": ("https://auth.truelayer.com/connect/token", "https://api.truelayer.com"),
    "sandbox": ("https://auth.truelayer-sandbox.com/connect/token", "https://api.truelayer-sandbox.com"),
}

_ENV_FIELDS: dict[str, str] = {
    "kid": "TRUELAYER_KID",
    "private_key_pem": "TRUELAYER_PRIVATE_KEY_PEM",
    "client_id": "TRUELAYER_CLIENT_ID",
    "client_secret": "TRUELAYER_CLIENT_SECRET",
    "merchant_account_id": "TRUELAYER_MERCHANT_ACCOUNT_ID",
    "auth_uri": "TRUELAYER_AUTH_URI",
    "base_uri": "TRUELAYER_BASE_URI",
    "user_agent": "TRUELAYER_USER_AGENT",
    "token_scope": "TRUELAYER_TOKEN_SCOPE",
    "token_expiry_fallback_seconds": "TRUELAYER_TOKEN_EXPIRY_FALLBACK_SECONDS",
    "token_expiry_buffer_ms": "TRUELAYER_TOKEN_EXPIRY_BUFFER_MS",
    "payment_link_expiry_hours": "TRUELAYER_PAYMENT_LINK_EXPIRY_HOURS",
    "timeout_ms": "TRUELAYER_TIMEOUT_MS",
}


class TrueLayerConfig(BaseModel):
    """Credentials and tunables required to talk to the TrueLayer API."""

    model_config = ConfigDict(frozen=True)

    kid: str
    private_key_pem: SecretStr
    client_id: str
    client_secret: SecretStr
    merchant_account_id: str = ""
    auth_uri: str = ENVIRONMENT_URIS["production"][0]
    base_uri: str = ENVIRONMENT_URIS["production"][1]
    user_agent: str = "truelayer-mcp/1.0.0"
    token_scope: str = "paydirect payments"
    token_grant_type: str = "client_credentials"
    token_expiry_fallback_seconds: int = Field(default=1800, ge=1)
    token_expiry_buffer_ms: int = Field(default=60000, ge=0)
    payment_link_expiry_hours: int = Field(default=24, ge=1)
    timeout_ms: int = Field(default=10000, ge=1000, le=600000)

    @field_validator("kid", "client_id")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value.strip()

    @field_validator("auth_uri", "base_uri")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            msg = f"Invalid URL '{value}'. Expected an http(s) URL."
            raise ValueError(msg)
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> TrueLayerConfig:
        """Build a configuration object from environment variables."""
        raw_config: dict[str, Any] = {}
        for field_name, env_name in _ENV_FIELDS.items():
            value = os.getenv(env_name)
            if value:
                raw_config[field_name] = value

        key_path = os.getenv("TRUELAYER_PRIVATE_KEY_PATH")
        if "private_key_pem" not in raw_config and key_path:
            try:
                raw_config["private_key_pem"] = Path(key_path).expanduser().read_text(encoding="utf-8")
            except OSError as exc:
                msg = f"Unable to read TRUELAYER_PRIVATE_KEY_PATH '{key_path}': {exc}"
                raise RuntimeError(msg) from exc

        environment = _resolve_environment(os.getenv("TRUELAYER_ENVIRONMENT", "production"))
        auth_uri, base_uri = ENVIRONMENT_URIS[environment]
        raw_config.setdefault("auth_uri", auth_uri)
        raw_config.setdefault("base_uri", base_uri)

        try:
            return cls(**raw_config)
        except ValidationError as exc:
            messages = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
            msg = f"Invalid TrueLayer configuration: {messages}"
            raise RuntimeError(msg) from exc


def _resolve_environment(value: str) -> Literal["production", "sandbox"]:
    """Normalize ``TRUELAYER_ENVIRONMENT`` to a known environment name."""
    normalized = value.strip().lower()
    if normalized == "production":
        return "production"
    if normalized == "sandbox":
        return "sandbox"
    msg = f"TRUELAYER_ENVIRONMENT must be 'production' or 'sandbox', got '{value}'."
    raise RuntimeError(msg)


__all__ = ["ENVIRONMENT_URIS", "TrueLayerConfig"]
