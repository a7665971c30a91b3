"""Unit tests for the TrueLayer MCP tool wrappers.

Validates registration, text rendering of results and the conversion of every
failure into a ``Failed to ...`` string (without requiring a running FastMCP
app).
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, TypeAlias
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastmcp import Context

from truelayer_mcp.config import TrueLayerConfig
from truelayer_mcp.errors import AuthExchangeError, TransportError, UpstreamApiError
from truelayer_mcp.models import Beneficiary, PaymentLinkUser
from truelayer_mcp.operations.payment_links import build_payment_link_request
from truelayer_mcp.tools.common import format_failure, format_success, resolve_tool_deps
from truelayer_mcp.tools.merchant import register as register_merchant
from truelayer_mcp.tools.payment_links import register as register_payment_links
from truelayer_mcp.tools.payments import register as register_payments
from truelayer_mcp.tools.payouts import register as register_payouts
from truelayer_mcp.tools.transactions import register as register_transactions

ToolFunc: TypeAlias = Callable[..., Awaitable[str]]


class _FakeApp:
    """Minimal stand-in for FastMCP app to capture registered tools."""

    def __init__(self) -> None:
        self.tools: dict[str, ToolFunc] = {}
        self.annotations: dict[str, dict[str, Any] | None] = {}

    def tool(
        self,
        *,
        name: str,
        description: str,
        annotations: dict[str, Any] | None = None,
    ) -> Callable[[ToolFunc], ToolFunc]:
        """Register a tool by name and return a decorator that captures the function."""

        def _decorator(func: ToolFunc) -> ToolFunc:
            _ = description
            self.tools[name] = func
            self.annotations[name] = annotations
            return func

        return _decorator


@pytest.fixture
def mock_ctx() -> Context:
    """Return a Context-like AsyncMock for tool logging."""
    ctx = MagicMock(spec=Context)
    ctx.info = AsyncMock()
    ctx.error = AsyncMock()
    return ctx


@pytest.fixture
def client(config: TrueLayerConfig) -> MagicMock:
    """Return the client object handed to operations."""
    fake = MagicMock()
    fake.config = config
    return fake


@pytest.fixture
def deps(config: TrueLayerConfig, client: MagicMock) -> SimpleNamespace:
    """Return a dependencies namespace with mocked operations."""

    @asynccontextmanager
    async def _create_client(_config: TrueLayerConfig, *, token_manager: object) -> AsyncIterator[MagicMock]:
        _ = token_manager
        yield client

    return SimpleNamespace(
        resolve_config=lambda: config,
        get_token_manager=MagicMock(return_value=MagicMock()),
        create_client=_create_client,
        get_payment=AsyncMock(return_value={"id": "pay_123", "status": "executed"}),
        get_payout=AsyncMock(return_value={"id": "po_1"}),
        create_payout=AsyncMock(return_value={"id": "po_new"}),
        build_payment_link_request=build_payment_link_request,
        create_payment_link=AsyncMock(return_value={"id": "link_1", "uri": "https://pay.example/link_1"}),
        get_payment_link=AsyncMock(return_value={"id": "link_1"}),
        list_transactions=AsyncMock(return_value={"items": [], "pagination": {}}),
    )


@pytest.fixture
def app(deps: SimpleNamespace) -> _FakeApp:
    """Return a fake app with every TrueLayer tool registered."""
    fake = _FakeApp()
    for register in (
        register_merchant,
        register_payments,
        register_payouts,
        register_payment_links,
        register_transactions,
    ):
        register(fake, deps=deps)  # type: ignore[arg-type]
    return fake


def _beneficiary() -> Beneficiary:
    return Beneficiary.model_validate(
        {
            "type": "external_account",
            "account_holder_name": "Ada",
            "account_identifier": {"type": "iban", "iban": "GB33BUKB20201555555555"},
        },
    )


def test_all_tools_registered(app: _FakeApp) -> None:
    """Every TrueLayer tool should be registered under its public name."""
    assert set(app.tools) == {
        "truelayer-get-merchant-account",
        "truelayer-get-payout",
        "truelayer-create-payout",
        "truelayer-create-payment-link",
        "truelayer-get-payment-link",
        "truelayer-get-payment",
        "truelayer-list-transactions",
    }
    assert app.annotations["truelayer-get-payment"] == {"title": "Get payment", "readOnlyHint": True}
    assert app.annotations["truelayer-create-payout"]["destructiveHint"] is True  # type: ignore[index]


def test_format_helpers() -> None:
    """Success and failure text should follow the tool output conventions."""
    assert format_success("Payment details", {"id": "p"}) == 'Payment details: {\n  "id": "p"\n}'
    assert format_failure("retrieve payment", TransportError("boom")) == "Failed to retrieve payment: boom"
    assert format_failure("retrieve payment", RuntimeError()) == "Failed to retrieve payment: RuntimeError"


def test_resolve_tool_deps(deps: SimpleNamespace, config: TrueLayerConfig) -> None:
    """Resolution should pair the config with its token manager."""
    resolved = resolve_tool_deps(deps)

    assert resolved.config is config
    deps.get_token_manager.assert_called_once_with(config)
    assert resolved.create_client is deps.create_client


@pytest.mark.asyncio
async def test_get_merchant_account_tool(app: _FakeApp, mock_ctx: Context) -> None:
    """The merchant tool should echo configured ids without calling the API."""
    result = await app.tools["truelayer-get-merchant-account"](mock_ctx)

    assert result.startswith("Merchant account: ")
    assert '"merchant_account_id": "m-1"' in result
    assert '"client_id": "client-abc"' in result


@pytest.mark.asyncio
async def test_get_merchant_account_config_error(app: _FakeApp, mock_ctx: Context, deps: SimpleNamespace) -> None:
    """Configuration failures should come back as text."""
    deps.resolve_config = MagicMock(side_effect=RuntimeError("Invalid TrueLayer configuration: kid"))

    result = await app.tools["truelayer-get-merchant-account"](mock_ctx)

    assert result == "Failed to retrieve merchant account: Invalid TrueLayer configuration: kid"
    mock_ctx.error.assert_awaited_once_with(result)  # type: ignore[attr-defined]


@pytest.mark.asyncio
async def test_get_payment_success(
    app: _FakeApp,
    mock_ctx: Context,
    deps: SimpleNamespace,
    client: MagicMock,
) -> None:
    """Successful lookups should render the JSON body with a label."""
    result = await app.tools["truelayer-get-payment"](mock_ctx, payment_id="pay_123")

    deps.get_payment.assert_awaited_once_with(client, "pay_123")
    assert result.startswith("Payment details: ")
    assert '"status": "executed"' in result
    mock_ctx.info.assert_awaited()  # type: ignore[attr-defined]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (AuthExchangeError(401), "Failed to retrieve payout: Token exchange failed with HTTP 401."),
        (TransportError("GET /v3/payouts/po_1 failed"), "Failed to retrieve payout: GET /v3/payouts/po_1 failed"),
        (UpstreamApiError(404, title="Not Found"), "Failed to retrieve payout: TrueLayer API returned HTTP 404: Not Found"),
        (KeyError("surprise"), "Failed to retrieve payout: 'surprise'"),
    ],
)
async def test_failures_become_text(
    app: _FakeApp,
    mock_ctx: Context,
    deps: SimpleNamespace,
    error: Exception,
    expected: str,
) -> None:
    """No error should escape the tool boundary."""
    deps.get_payout.side_effect = error

    result = await app.tools["truelayer-get-payout"](mock_ctx, payout_id="po_1")

    assert result == expected
    mock_ctx.error.assert_awaited_once_with(expected)  # type: ignore[attr-defined]


@pytest.mark.asyncio
async def test_create_payout_defaults_merchant_account(
    app: _FakeApp,
    mock_ctx: Context,
    deps: SimpleNamespace,
) -> None:
    """Omitting the merchant account should use the configured one."""
    result = await app.tools["truelayer-create-payout"](
        mock_ctx,
        currency="GBP",
        amount_in_minor=1000,
        beneficiary=_beneficiary(),
    )

    assert result.startswith("Payout created successfully: ")
    request = deps.create_payout.await_args.args[1]
    assert request.merchant_account_id == "m-1"
    assert request.amount_in_minor == 1000


@pytest.mark.asyncio
async def test_create_payout_invalid_amount(app: _FakeApp, mock_ctx: Context, deps: SimpleNamespace) -> None:
    """Validation failures should be reported without calling the API."""
    result = await app.tools["truelayer-create-payout"](
        mock_ctx,
        currency="GBP",
        amount_in_minor=0,
        beneficiary=_beneficiary(),
    )

    assert result.startswith("Failed to create payout: ")
    deps.create_payout.assert_not_awaited()
    mock_ctx.error.assert_awaited_once_with(result)  # type: ignore[attr-defined]


@pytest.mark.asyncio
async def test_create_payment_link_uses_configured_expiry(
    app: _FakeApp,
    mock_ctx: Context,
    deps: SimpleNamespace,
) -> None:
    """The link should be built with configured defaults and posted."""
    user = PaymentLinkUser.model_validate(
        {
            "name": "Ada",
            "email": "ada@example.com",
            "phone": "+447700900000",
            "date_of_birth": "1990-01-01",
            "address": {
                "address_line1": "1 Example St",
                "city": "London",
                "zip": "EC1A 1BB",
                "state": "London",
                "country_code": "GB",
            },
        },
    )

    result = await app.tools["truelayer-create-payment-link"](
        mock_ctx,
        amount_in_minor=5000,
        currency="GBP",
        user=user,
    )

    assert result.startswith("Payment link created successfully: ")
    body = deps.create_payment_link.await_args.args[1]
    assert body["payment_configuration"]["amount_in_minor"] == 5000
    assert body["payment_configuration"]["payment_method"]["beneficiary"]["merchant_account_id"] == "m-1"


@pytest.mark.asyncio
async def test_get_payment_link(app: _FakeApp, mock_ctx: Context, deps: SimpleNamespace, client: MagicMock) -> None:
    """The payment link lookup should delegate to its operation."""
    result = await app.tools["truelayer-get-payment-link"](mock_ctx, payment_link_id="link_1")

    deps.get_payment_link.assert_awaited_once_with(client, "link_1")
    assert result.startswith("Payment link details: ")


@pytest.mark.asyncio
async def test_list_transactions_passes_window(
    app: _FakeApp,
    mock_ctx: Context,
    deps: SimpleNamespace,
    client: MagicMock,
) -> None:
    """Arguments should reach the operation, with the configured account as default."""
    result = await app.tools["truelayer-list-transactions"](mock_ctx, to_date="2026-01-31T00:00:00Z", cursor="c1")

    deps.list_transactions.assert_awaited_once_with(
        client,
        "m-1",
        from_=None,
        to="2026-01-31T00:00:00Z",
        cursor="c1",
    )
    assert result.startswith("Transactions: ")


@pytest.mark.asyncio
async def test_create_payment_link_invalid_amount(
    app: _FakeApp,
    mock_ctx: Context,
    deps: SimpleNamespace,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Rejected arguments should be logged and reported like API failures."""
    user = PaymentLinkUser.model_validate(
        {
            "name": "Ada",
            "email": "ada@example.com",
            "phone": "+447700900000",
            "date_of_birth": "1990-01-01",
            "address": {
                "address_line1": "1 Example St",
                "city": "London",
                "zip": "EC1A 1BB",
                "state": "London",
                "country_code": "GB",
            },
        },
    )

    with caplog.at_level(logging.ERROR, logger="truelayer_mcp.tools"):
        result = await app.tools["truelayer-create-payment-link"](
            mock_ctx,
            amount_in_minor=0,
            currency="GBP",
            user=user,
        )

    assert result == "Failed to create payment link: amount_in_minor must be a positive integer."
    mock_ctx.error.assert_awaited_once_with(result)  # type: ignore[attr-defined]
    deps.create_payment_link.assert_not_awaited()
    assert "Failed to create payment link" in caplog.text
