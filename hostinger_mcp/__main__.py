"""Process entry point: ``python -m hostinger_mcp`` / ``hostinger-mcp``.

Loads configuration (fatal without ``HOSTINGER_API_KEY``), builds the single
Dispatcher, then serves exactly one transport chosen by ``MCP_TRANSPORT``.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

import uvicorn

from hostinger_mcp.catalog import default_catalog
from hostinger_mcp.config import Config
from hostinger_mcp.dispatcher import Dispatcher
from hostinger_mcp.handlers import HANDLERS
from hostinger_mcp.infrastructure.hostinger_client import HostingerClient
from hostinger_mcp.main import create_app
from hostinger_mcp.protocol import McpProtocol
from hostinger_mcp.stdio import StdioServer

logger = logging.getLogger("mcp")


def configure_logging(level: str) -> None:
    # stderr only: stdout carries protocol frames in stdio mode
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_protocol(cfg: Config, client: HostingerClient) -> McpProtocol:
    dispatcher = Dispatcher(default_catalog(), HANDLERS, client)
    return McpProtocol(dispatcher, cfg)


async def run_stdio(cfg: Config) -> None:
    async with HostingerClient.from_config(cfg) as client:
        server = StdioServer(build_protocol(cfg, client))
        logger.info(f"{cfg.server_name} running on stdio")
        await server.serve_stdio()


def run_http(cfg: Config) -> None:
    client = HostingerClient.from_config(cfg)
    app = create_app(build_protocol(cfg, client), cfg, client=client)
    logger.info(f"{cfg.server_name} listening on http://{cfg.host}:{cfg.port}")
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level.lower())


def main(cfg: Optional[Config] = None) -> None:
    cfg = cfg or Config.from_env()
    configure_logging(cfg.log_level)
    if cfg.transport == "http":
        run_http(cfg)
    else:
        asyncio.run(run_stdio(cfg))


if __name__ == "__main__":
    main()
