"""MCP transport - JSON-RPC over newline-delimited stdio."""
