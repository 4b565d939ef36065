"""Business logic for MCP protocol handlers."""

from typing import Any

from pydantic import BaseModel, ValidationError
from structlog import get_logger

from ggleap_mcp.auth import configure
from ggleap_mcp.config import Environment, get_settings
from ggleap_mcp.dependencies import ServerState
from ggleap_mcp.tools import TOOL_HANDLERS, get_tool_catalog

from .schemas import (
    MCPTool,
    MCPToolListResult,
    MCPToolCallResult,
    MCPInitializeParams,
)

logger = get_logger()

PROTOCOL_VERSION = "2024-11-05"
CONFIGURE_TOOL_NAME = "ggleap_configure"


class ConfigureArgs(BaseModel):
    authToken: str
    environment: Environment = Environment.PRODUCTION


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
            for err in exc.errors()
        )
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


async def handle_initialize(params: MCPInitializeParams) -> dict[str, Any]:
    """Handle initialize request.

    Args:
        params: Initialize parameters from client.

    Returns:
        Server initialization response.
    """
    settings = get_settings()
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {
                "listChanged": False
            }
        },
        "serverInfo": {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION
        }
    }


async def handle_tools_list() -> MCPToolListResult:
    """Handle tools/list request with the full static catalog."""
    catalog = get_tool_catalog()
    return MCPToolListResult(
        tools=[
            MCPTool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in catalog.tools
        ]
    )


async def _configure(state: ServerState, arguments: dict[str, Any]) -> MCPToolCallResult:
    args = ConfigureArgs.model_validate(arguments)
    state.auth = await configure(
        client=state.http_client,
        auth_token=args.authToken,
        environment=args.environment,
    )
    return MCPToolCallResult.text("GGLeap configured successfully")


async def handle_tools_call(
    state: ServerState,
    name: str,
    arguments: dict[str, Any],
) -> MCPToolCallResult:
    """Handle tools/call request.

    Every failure is reported as an error result whose text starts with
    "Error:"; nothing is raised to the transport.

    Args:
        state: Shared server state holding the configured gateway.
        name: Tool name to invoke.
        arguments: Tool arguments.

    Returns:
        Tool execution result.
    """
    try:
        if name == CONFIGURE_TOOL_NAME:
            return await _configure(state, arguments)

        if state.auth is None:
            return MCPToolCallResult.text(
                f"Error: Please call {CONFIGURE_TOOL_NAME} first", is_error=True
            )

        handler = TOOL_HANDLERS.get(name)
        if handler is None:
            raise ValueError(f"Unknown tool: {name}")

        return MCPToolCallResult.text(await handler(state.auth, arguments))

    except Exception as e:
        logger.warning("tool_call_failed", tool_name=name, error_type=type(e).__name__)
        return MCPToolCallResult.text(f"Error: {_error_message(e)}", is_error=True)
