"""Common utilities for MCP tool registration.

Every TrueLayer tool returns text: a labelled JSON payload on success or a
``Failed to ...`` message on any error. Exceptions never cross the tool
boundary.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from types import SimpleNamespace
from typing import Any, TypeAlias

from fastmcp import Context

from ..client.truelayer_client import TrueLayerClient

logger = logging.getLogger("truelayer_mcp.tools")

ApiCall: TypeAlias = Callable[[TrueLayerClient], Awaitable[Any]]


def resolve_tool_deps(deps: SimpleNamespace) -> SimpleNamespace:
    """Resolve the configuration and token manager for a tool call.

    Args:
        deps: Dependencies namespace with ``resolve_config``,
              ``get_token_manager`` and ``create_client``.

    Returns:
        Namespace with ``config``, ``token_manager`` and ``create_client``.

    """
    config = deps.resolve_config()
    return SimpleNamespace(
        config=config,
        token_manager=deps.get_token_manager(config),
        create_client=deps.create_client,
    )


def format_success(label: str, payload: Any) -> str:
    """Render a successful result as ``<label>: <json>``."""
    return f"{label}: {json.dumps(payload, indent=2, default=str)}"


def format_failure(action: str, exc: BaseException) -> str:
    """Render a failure as ``Failed to <action>: <error>``."""
    detail = str(exc) or exc.__class__.__name__
    return f"Failed to {action}: {detail}"


async def report_failure(ctx: Context, action: str, exc: BaseException) -> str:
    """Log a tool failure, report it to the client and return its text."""
    logger.exception("Failed to %s", action)
    message = format_failure(action, exc)
    await ctx.error(message)
    return message


async def run_api_tool(
    ctx: Context,
    deps: SimpleNamespace,
    *,
    call: ApiCall,
    action: str,
    label: str,
    log_message: str,
) -> str:
    """Run one TrueLayer API call on behalf of a tool.

    Args:
        ctx: FastMCP context.
        deps: Dependencies namespace (see ``resolve_tool_deps``).
        call: Coroutine function receiving an open ``TrueLayerClient``.
        action: Verb phrase used in the failure message (e.g., "retrieve payout").
        label: Prefix for the success message (e.g., "Payout details").
        log_message: Progress message sent to the client before the call.

    Returns:
        The success or failure text.

    """
    await ctx.info(log_message)
    try:
        resolved = resolve_tool_deps(deps)
        async with resolved.create_client(resolved.config, token_manager=resolved.token_manager) as client:
            result = await call(client)
    except Exception as exc:
        return await report_failure(ctx, action, exc)
    return format_success(label, result)


__all__ = [
    "ApiCall",
    "format_failure",
    "format_success",
    "report_failure",
    "resolve_tool_deps",
    "run_api_tool",
]
