import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional
from dotenv import load_dotenv

from hostinger_mcp.errors import ConfigError


TRANSPORTS = ("stdio", "http")


def _get_env_list(env: Mapping[str, str], key: str, default: List[str] | None = None) -> List[str]:
    raw = env.get(key)
    if raw is None:
        return default or []
    parts = [p.strip() for p in raw.split(",")]
    return [p for p in parts if p]


def _get_env_float(env: Mapping[str, str], key: str) -> Optional[float]:
    raw = (env.get(key) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Config:
    # hostinger api (external collaborator)
    api_key: str
    base_url: str = "https://api.hostinger.com"
    # None means no client-side timeout
    http_timeout: Optional[float] = None

    # server
    server_name: str = "hostinger-api"
    server_version: str = "1.0.0"
    service_name: str = "hostinger-mcp-server"
    protocol_revision: str = "2024-11-05"
    log_level: str = "INFO"

    # transport
    transport: str = "stdio"
    host: str = "0.0.0.0"
    port: int = 3000
    mcp_api_key: Optional[str] = None
    sse_keepalive_sec: float = 15.0

    # cors
    allow_origins: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build the process configuration.

        Reads ``os.environ`` (after loading ``.env`` if present) unless an
        explicit mapping is given. Raises ``ConfigError`` when the Hostinger
        credential is missing or a value is malformed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        env = environ

        api_key = (env.get("HOSTINGER_API_KEY") or "").strip()
        if not api_key:
            raise ConfigError("HOSTINGER_API_KEY environment variable is required")

        transport = (env.get("MCP_TRANSPORT") or "stdio").strip().lower()
        if transport not in TRANSPORTS:
            raise ConfigError(f"MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}")

        try:
            port = int(env.get("PORT", "3000"))
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {env.get('PORT')!r}")

        keepalive = _get_env_float(env, "SSE_KEEPALIVE_SEC")

        return cls(
            api_key=api_key,
            base_url=(env.get("HOSTINGER_BASE_URL") or "https://api.hostinger.com").rstrip("/"),
            http_timeout=_get_env_float(env, "HTTP_TIMEOUT"),
            server_name=env.get("SERVER_NAME", "hostinger-api"),
            server_version=env.get("SERVER_VERSION", "1.0.0"),
            service_name=env.get("SERVICE_NAME", "hostinger-mcp-server"),
            protocol_revision=env.get("MCP_PROTOCOL_REV", "2024-11-05"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            transport=transport,
            host=env.get("HOST", "0.0.0.0"),
            port=port,
            mcp_api_key=(env.get("MCP_API_KEY") or None),
            sse_keepalive_sec=keepalive if keepalive is not None else 15.0,
            allow_origins=_get_env_list(env, "ALLOW_ORIGINS", []),
        )

