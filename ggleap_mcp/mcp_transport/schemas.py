"""Pydantic schemas for MCP protocol messages."""

import json
from typing import Any, Literal
from pydantic import BaseModel, Field


class MCPInitializeParams(BaseModel):
    """Parameters for initialize request."""
    
    protocolVersion: str = Field(default="2024-11-05", description="MCP protocol version")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    clientInfo: dict[str, Any] = Field(default_factory=dict)


class MCPTool(BaseModel):
    """MCP tool definition."""
    
    name: str
    description: str
    inputSchema: dict[str, Any]


class MCPToolListResult(BaseModel):
    """Result for tools/list."""
    
    tools: list[MCPTool]


class MCPToolCallParams(BaseModel):
    """Parameters for tools/call."""
    
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class MCPContent(BaseModel):
    """Content item in tool response."""
    
    type: Literal["text"] = "text"
    text: str


class MCPToolCallResult(BaseModel):
    """Result for tools/call."""
    
    content: list[MCPContent]
    isError: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "MCPToolCallResult":
        return cls(content=[MCPContent(text=text)], isError=is_error)


class MCPJSONRPCRequest(BaseModel):
    """Generic JSON-RPC 2.0 request or notification (no id)."""
    
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    method: str
    params: dict[str, Any] | None = None


class MCPJSONRPCResponse(BaseModel):
    """Generic JSON-RPC 2.0 response."""
    
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: Any | None = None
    error: dict[str, Any] | None = None

    def to_line(self) -> str:
        """Serialize as one JSON line carrying either error or result."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error
        else:
            data["result"] = self.result if self.result is not None else {}
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


class MCPErrorCodes:
    """Standard JSON-RPC error codes."""
    
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
