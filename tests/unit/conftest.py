"""Shared fixtures for the TrueLayer MCP unit tests."""

from collections.abc import Callable
from typing import TypeAlias

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from truelayer_mcp.config import TrueLayerConfig

AUTH_URI = "https://auth.truelayer.test/connect/token"
BASE_URI = "https://api.truelayer.test"

Handler: TypeAlias = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(scope="session")
def signing_key() -> ec.EllipticCurvePrivateKey:
    """Return a throwaway P-521 key for the test session."""
    return ec.generate_private_key(ec.SECP521R1())


@pytest.fixture(scope="session")
def private_key_pem(signing_key: ec.EllipticCurvePrivateKey) -> str:
    """Return the session key as an unencrypted PKCS#8 PEM string."""
    return signing_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def public_key_pem(signing_key: ec.EllipticCurvePrivateKey) -> str:
    """Return the public half of the session key as PEM."""
    return (
        signing_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("ascii")
    )


@pytest.fixture
def config(private_key_pem: str) -> TrueLayerConfig:
    """Return a complete configuration pointing at test hosts."""
    return TrueLayerConfig(
        kid="kid-123",
        private_key_pem=private_key_pem,
        client_id="client-abc",
        client_secret="secret-xyz",
        merchant_account_id="m-1",
        auth_uri=AUTH_URI,
        base_uri=BASE_URI,
    )


class FakeClock:
    """Settable clock returning epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Return a fake clock fixed at a known instant."""
    return FakeClock()


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it handled."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def to_host(self, host: str) -> list[httpx.Request]:
        """Return the recorded requests sent to ``host``."""
        return [request for request in self.requests if request.url.host == host]


def token_response(token: str = "access-1", expires_in: int | None = 3600) -> httpx.Response:
    """Build a token endpoint response."""
    body: dict[str, object] = {"access_token": token, "token_type": "Bearer"}
    if expires_in is not None:
        body["expires_in"] = expires_in
    return httpx.Response(200, json=body)
