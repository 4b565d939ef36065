"""Newline-delimited JSON-RPC transport for the MCP protocol."""

import json
from typing import AsyncIterable, Awaitable, Callable

import anyio
from pydantic import ValidationError
from structlog import get_logger

from ggleap_mcp.dependencies import ServerState

from .schemas import (
    MCPErrorCodes,
    MCPInitializeParams,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPToolCallParams,
)
from .service import handle_initialize, handle_tools_call, handle_tools_list

logger = get_logger()

LineWriter = Callable[[str], Awaitable[None]]


def _jsonrpc_error_response(
    request_id: str | int | None,
    code: int,
    message: str,
) -> MCPJSONRPCResponse:
    return MCPJSONRPCResponse(
        id=request_id,
        error={"code": code, "message": message},
    )


async def dispatch(
    state: ServerState,
    jsonrpc_request: MCPJSONRPCRequest,
) -> MCPJSONRPCResponse | None:
    """Route one JSON-RPC message to its handler.

    Args:
        state: Shared server state.
        jsonrpc_request: Parsed request or notification.

    Returns:
        The response to write, or None for notifications.
    """
    method = jsonrpc_request.method
    params = jsonrpc_request.params or {}

    if method.startswith("notifications/"):
        return None

    try:
        if method == "initialize":
            init_params = MCPInitializeParams(**params)
            result = await handle_initialize(init_params)
            return MCPJSONRPCResponse(id=jsonrpc_request.id, result=result)

        elif method == "ping":
            return MCPJSONRPCResponse(id=jsonrpc_request.id, result={})

        elif method == "tools/list":
            result = await handle_tools_list()
            return MCPJSONRPCResponse(id=jsonrpc_request.id, result=result.model_dump())

        elif method == "tools/call":
            call_params = MCPToolCallParams(**params)
            result = await handle_tools_call(
                state,
                name=call_params.name,
                arguments=call_params.arguments,
            )
            return MCPJSONRPCResponse(id=jsonrpc_request.id, result=result.model_dump())

        else:
            return _jsonrpc_error_response(
                jsonrpc_request.id,
                MCPErrorCodes.METHOD_NOT_FOUND,
                f"Method not found: {method}",
            )

    except ValidationError as e:
        return _jsonrpc_error_response(
            jsonrpc_request.id,
            MCPErrorCodes.INVALID_PARAMS,
            f"Invalid params: {e.error_count()} validation error(s)",
        )
    except Exception as e:
        logger.error("internal_error", method=method, exc_info=True)
        return _jsonrpc_error_response(
            jsonrpc_request.id,
            MCPErrorCodes.INTERNAL_ERROR,
            f"Internal error: {str(e)}",
        )


async def handle_line(state: ServerState, line: str) -> MCPJSONRPCResponse | None:
    """Parse one input line and produce its response, if any."""
    try:
        body = json.loads(line)
    except json.JSONDecodeError:
        logger.warning("invalid_jsonrpc_message", reason="parse_error")
        return _jsonrpc_error_response(None, MCPErrorCodes.PARSE_ERROR, "Parse error")

    request_id = body.get("id") if isinstance(body, dict) else None
    try:
        jsonrpc_request = MCPJSONRPCRequest(**body)
    except (TypeError, ValidationError):
        logger.warning("invalid_jsonrpc_message", reason="invalid_request")
        if not isinstance(request_id, (str, int)):
            request_id = None
        return _jsonrpc_error_response(request_id, MCPErrorCodes.INVALID_REQUEST, "Invalid Request")

    response = await dispatch(state, jsonrpc_request)
    if "id" not in body:
        return None
    return response


async def serve(
    state: ServerState,
    lines: AsyncIterable[str],
    write_line: LineWriter,
) -> None:
    """Serve JSON-RPC messages until the input stream ends.

    Each message is handled in its own task so slow tool calls do not block
    later messages. Output lines are written one at a time.

    Args:
        state: Shared server state.
        lines: Incoming lines, one JSON-RPC message each.
        write_line: Writes one response line (without trailing newline).
    """
    write_lock = anyio.Lock()

    async def process(line: str) -> None:
        response = await handle_line(state, line)
        if response is None:
            return
        async with write_lock:
            await write_line(response.to_line())

    async with anyio.create_task_group() as tg:
        async for line in lines:
            line = line.strip()
            if not line:
                continue
            tg.start_soon(process, line)
