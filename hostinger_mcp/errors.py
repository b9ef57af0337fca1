"""Error types shared by the protocol, dispatcher and transports.

Two families never mix:

* ``JsonRpcFault`` subclasses describe a request that is itself invalid and
  become JSON-RPC ``error`` objects.
* ``ToolError`` subclasses (and any other exception a handler raises) describe
  a tool that ran and failed; the dispatcher turns them into a successful
  result narrating the failure.
"""
from __future__ import annotations

from typing import Any, Optional


class ConfigError(RuntimeError):
    """Process configuration is missing or malformed (fatal at startup)."""


class CatalogBindingError(RuntimeError):
    """Catalog entries and handler bindings are not 1:1 (fatal at startup)."""


# ---------------------------------------------------------------------
# Protocol-level faults
# ---------------------------------------------------------------------
class JsonRpcFault(Exception):
    code: int = -32603
    http_status: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None, *, data: Any = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.data = data

    def to_error(self) -> dict:
        err: dict = {"code": self.code, "message": self.message}
        if self.data is not None:
            err["data"] = self.data
        return err


class ParseError(JsonRpcFault):
    code = -32700
    http_status = 400
    default_message = "Parse error"


class InvalidRequest(JsonRpcFault):
    code = -32600
    http_status = 400
    default_message = "Invalid Request"


class MethodNotFound(JsonRpcFault):
    code = -32601
    http_status = 400
    default_message = "Method not found"


class InvalidParams(JsonRpcFault):
    code = -32602
    http_status = 400
    default_message = "Invalid params"


class InternalError(JsonRpcFault):
    code = -32603
    http_status = 500
    default_message = "Internal error"


# ---------------------------------------------------------------------
# Tool-execution faults
# ---------------------------------------------------------------------
class ToolError(Exception):
    """A tool call failed; reported to the caller as result text."""


class UnknownTool(ToolError):
    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArguments(ToolError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid arguments: {detail}")


class MissingArgument(ToolError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing required argument: {key}")


class HostingerAPIError(ToolError):
    """Hostinger API call failed (network error or non-2xx status)."""
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
        self.message = message
