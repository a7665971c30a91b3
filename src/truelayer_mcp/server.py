"""Entry point for the TrueLayer MCP server.

This module wires together the FastMCP app and registers tools, prompts and
resources. API logic lives in ``truelayer_mcp.operations`` and the signing and
token handling in ``truelayer_mcp.client``.

Registered tools:
- ``truelayer-get-merchant-account``: configured merchant account details
- ``truelayer-get-payout`` / ``truelayer-create-payout``: payouts
- ``truelayer-get-payment``: payments
- ``truelayer-create-payment-link`` / ``truelayer-get-payment-link``: payment links
- ``truelayer-list-transactions``: merchant account transactions
"""

import logging
import os
import signal
import sys
from functools import cache
from types import SimpleNamespace

from fastmcp import FastMCP

from . import prompts, resources
from .client.token_manager import TokenManager, get_token_manager
from .client.truelayer_client import create_truelayer_client
from .config import TrueLayerConfig
from .operations.payment_links import build_payment_link_request, create_payment_link, get_payment_link
from .operations.payments import get_payment
from .operations.payouts import create_payout, get_payout
from .operations.transactions import list_transactions
from .tools.merchant import register as register_merchant_tools
from .tools.payment_links import register as register_payment_link_tools
from .tools.payments import register as register_payment_tools
from .tools.payouts import register as register_payout_tools
from .tools.transactions import register as register_transaction_tools

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(name)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("truelayer_mcp.server")

app = FastMCP(
    name="truelayer-mcp",
    instructions=(
        "Expose tools that read and create TrueLayer payments, payouts, payment links "
        "and merchant account transactions."
    ),
)


@cache
def resolve_config() -> TrueLayerConfig:
    """Load the configuration from the environment once, on first use."""
    return TrueLayerConfig.from_env()


def build_deps() -> SimpleNamespace:
    """Return the dependencies namespace shared by tools and resources."""
    return SimpleNamespace(
        resolve_config=resolve_config,
        get_token_manager=get_token_manager,
        create_client=create_truelayer_client,
        get_payment=get_payment,
        get_payout=get_payout,
        create_payout=create_payout,
        build_payment_link_request=build_payment_link_request,
        create_payment_link=create_payment_link,
        get_payment_link=get_payment_link,
        list_transactions=list_transactions,
    )


def _register_capabilities() -> None:
    """Register tool, resource, and prompt modules with the app instance."""
    deps = build_deps()
    register_merchant_tools(app, deps=deps)
    register_payout_tools(app, deps=deps)
    register_payment_tools(app, deps=deps)
    register_payment_link_tools(app, deps=deps)
    register_transaction_tools(app, deps=deps)
    resources.register(app, deps=deps)
    prompts.register(app)


# Register all capabilities with the app instance (after function is defined)
_register_capabilities()


def handle_interrupt(signum: int, frame: object) -> None:  # noqa: ARG001
    """Handle keyboard interrupt gracefully."""
    logger.info("Received interrupt signal, shutting down...")
    sys.exit(0)


def main() -> None:
    """Entry point for the truelayer-mcp console script."""
    signal.signal(signal.SIGINT, handle_interrupt)
    signal.signal(signal.SIGTERM, handle_interrupt)
    logger.info("TrueLayer MCP server running on stdio")
    app.run()


# Explicit re-exports for public API stability (and to satisfy linters)
__all__ = [
    "TokenManager",
    "TrueLayerConfig",
    "app",
    "build_deps",
    "handle_interrupt",
    "main",
    "resolve_config",
]


if __name__ == "__main__":
    main()
