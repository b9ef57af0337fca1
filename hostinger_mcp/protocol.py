 # protocol.py
 # - JSON-RPC 2.0 envelope handling shared by the stdio and HTTP/SSE transports
 # - Protocol faults -> JSON-RPC error objects; tool faults stay inside results

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from hostinger_mcp.config import Config
from hostinger_mcp.dispatcher import Dispatcher
from hostinger_mcp.errors import (
    InternalError,
    InvalidParams,
    InvalidRequest,
    JsonRpcFault,
    MethodNotFound,
)
from hostinger_mcp.schemas.mcp import JSONRPC_VERSION, JsonRpcRequest

logger = logging.getLogger("mcp")

METHODS = ("initialize", "ping", "tools/list", "tools/call")


def _jsonrpc_ok(id_val: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": id_val, "result": result}


def error_envelope(id_val: Any, fault: JsonRpcFault) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": id_val, "error": fault.to_error()}


def _readable_id(payload: Any) -> Any:
    if isinstance(payload, dict):
        val = payload.get("id")
        if isinstance(val, (str, int, float)) and not isinstance(val, bool):
            return val
    return None


def log_event(event: str, **fields: Any) -> None:
    try:
        msg = {"event": event}
        msg.update(fields)
        logger.info(json.dumps(msg, ensure_ascii=False, default=str))
    except Exception:
        logger.info(f"{event} {fields}")


class McpProtocol:
    """Decode, validate and route one JSON-RPC envelope.

    ``handle`` always returns ``(envelope, http_status)`` and never raises;
    the status is a hint for the HTTP transport and ignored on stdio.
    """

    def __init__(self, dispatcher: Dispatcher, cfg: Config):
        self.dispatcher = dispatcher
        self.server_info = {"name": cfg.server_name, "version": cfg.server_version}
        self.protocol_revision = cfg.protocol_revision
        self.capabilities = {"tools": {"listChanged": False}}

    def parse(self, payload: Any) -> JsonRpcRequest:
        if isinstance(payload, list):
            raise InvalidRequest("Batch not supported")
        if not isinstance(payload, dict):
            raise InvalidRequest()
        try:
            req = JsonRpcRequest.model_validate(payload)
        except ValidationError:
            raise InvalidRequest()
        if req.jsonrpc != JSONRPC_VERSION:
            raise InvalidRequest("Invalid jsonrpc version")
        return req

    async def handle(self, payload: Any) -> Tuple[Dict[str, Any], int]:
        t0 = time.time()
        id_val = _readable_id(payload)
        method: Optional[str] = None
        try:
            req = self.parse(payload)
            id_val, method = req.id, req.method
            result = await self._route(req)
        except JsonRpcFault as fault:
            log_event("rpc.error", id=id_val, method=method, code=fault.code, msg=fault.message)
            return error_envelope(id_val, fault), fault.http_status
        except Exception as e:
            logger.exception("server error while dispatching")
            fault = InternalError(data=str(e))
            return error_envelope(id_val, fault), fault.http_status
        tool = req.params.get("name") if method == "tools/call" and isinstance(req.params, dict) else None
        log_event("rpc", id=id_val, method=method, tool=tool, ms=int((time.time() - t0) * 1000))
        return _jsonrpc_ok(id_val, result), 200

    async def _route(self, req: JsonRpcRequest) -> Dict[str, Any]:
        method = req.method
        if method == "initialize":
            return {
                "protocolVersion": self.protocol_revision,
                "capabilities": self.capabilities,
                "serverInfo": self.server_info,
            }
        if method == "ping" or method.startswith("notifications/"):
            return {}
        if method == "tools/list":
            return self.dispatcher.list_tools()
        if method == "tools/call":
            params = req.params
            if params is None:
                params = {}
            if not isinstance(params, dict):
                raise InvalidParams()
            name = params.get("name")
            arguments = params.get("arguments")
            if arguments is None:
                arguments = {}
            if not isinstance(name, str) or not isinstance(arguments, dict):
                raise InvalidParams()
            result = await self.dispatcher.call_tool(name, arguments)
            return result.to_wire()
        raise MethodNotFound()
