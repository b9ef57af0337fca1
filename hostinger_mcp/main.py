 # main.py
 # - FastAPI-based HTTP/SSE transport
 # - POST /mcp: one JSON-RPC envelope in, one out (tools/list, tools/call)
 # - GET /sse + POST /messages: session-bound server-push channel
 # - GET /health, GET /: liveness and capability index

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from hostinger_mcp.api.security import dep_require_api_key
from hostinger_mcp.api.sse import MESSAGES_PATH, SseSessionRegistry
from hostinger_mcp.config import Config
from hostinger_mcp.errors import InternalError
from hostinger_mcp.infrastructure.hostinger_client import HostingerClient
from hostinger_mcp.protocol import METHODS, McpProtocol, error_envelope

logger = logging.getLogger("mcp")


async def _read_envelope(request: Request, protocol: McpProtocol) -> tuple[Dict[str, Any], int]:
    """Decode the body and route it; any failure here is an InternalError."""
    try:
        payload = await request.json()
    except Exception as e:
        logger.warning(f"malformed request body: {e}")
        fault = InternalError(data=str(e))
        return error_envelope(None, fault), fault.http_status
    return await protocol.handle(payload)


def create_app(protocol: McpProtocol, cfg: Config, *, client: Optional[HostingerClient] = None) -> FastAPI:
    """Build the HTTP/SSE transport around one shared protocol router.

    When ``client`` is given it is closed on application shutdown.
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        if client is not None:
            await client.aclose()

    app = FastAPI(title=cfg.server_name, version=cfg.server_version, lifespan=lifespan)
    app.state.cfg = cfg
    app.state.protocol = protocol
    app.state.sessions = SseSessionRegistry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.allow_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.get("/health")
    def health():
        return {
            "status": "healthy",
            "service": cfg.service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": cfg.server_version,
        }

    @app.get("/")
    def index():
        return {
            "server": protocol.server_info,
            "protocolRevision": protocol.protocol_revision,
            "capabilities": protocol.capabilities,
            "methods": list(METHODS),
            "tools": len(protocol.dispatcher.catalog),
            "endpoints": {
                "health": "/health",
                "sse": "/sse",
                "messages": MESSAGES_PATH,
                "mcp": "/mcp",
            },
        }

    @app.get("/sse", dependencies=[Depends(dep_require_api_key)])
    async def sse():
        sessions: SseSessionRegistry = app.state.sessions
        session = sessions.open()
        return StreamingResponse(
            sessions.stream(session, cfg.sse_keepalive_sec),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.post(MESSAGES_PATH, dependencies=[Depends(dep_require_api_key)])
    async def sse_message(request: Request, session_id: Optional[str] = None):
        session = app.state.sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Unknown or expired session")
        envelope, _ = await _read_envelope(request, protocol)
        await session.send(envelope)
        return JSONResponse({"status": "accepted"}, status_code=202)

    @app.post("/mcp", dependencies=[Depends(dep_require_api_key)])
    async def mcp_entry(request: Request):
        envelope, status = await _read_envelope(request, protocol)
        return JSONResponse(envelope, status_code=status)

    return app
