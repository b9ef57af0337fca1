from __future__ import annotations
import secrets
from typing import Optional
from fastapi import HTTPException, Request, Header


def _get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    lower = authorization.lower()
    if lower.startswith("bearer "):
        return authorization.split(" ", 1)[1].strip()
    return None


def get_provided_key(x_api_key: Optional[str], authorization: Optional[str]) -> Optional[str]:
    # Priority: X-API-Key header -> Authorization: Bearer
    return x_api_key or _get_bearer_token(authorization)


def require_api_key(expected: Optional[str], x_api_key: Optional[str], authorization: Optional[str]) -> None:
    # No MCP_API_KEY configured: transport is open
    if not expected:
        return
    provided = get_provided_key(x_api_key, authorization) or ""
    if not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=401, detail="Invalid or missing API Key")


# FastAPI dependency wrapper (declarative)
def dep_require_api_key(request: Request, x_api_key: Optional[str] = Header(None), authorization: Optional[str] = Header(None)):
    require_api_key(request.app.state.cfg.mcp_api_key, x_api_key, authorization)
    return None
