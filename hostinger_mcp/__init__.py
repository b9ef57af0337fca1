"""MCP server exposing the Hostinger API as JSON-RPC tools over stdio or HTTP/SSE."""

__version__ = "1.0.0"
