 # stdio.py
 # - STDIO MCP mode: newline-delimited JSON-RPC on stdin, responses on stdout
 # - every line is dispatched in its own task; responses are written as each settles

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Protocol, Set

from hostinger_mcp.errors import ParseError
from hostinger_mcp.protocol import McpProtocol, error_envelope

logger = logging.getLogger("mcp")

MAX_LINE_BYTES = 4 * 1024 * 1024


class LineWriter(Protocol):
    def write(self, data: bytes) -> Any: ...

    async def drain(self) -> None: ...


class StdioServer:
    """Line-framed JSON-RPC over a duplex byte stream.

    No ordering barrier between requests: responses go out in completion
    order and carry the id of their own request. Returns after EOF once every
    in-flight request has been answered.
    """

    def __init__(self, protocol: McpProtocol):
        self.protocol = protocol

    async def serve(self, reader: asyncio.StreamReader, writer: LineWriter) -> None:
        pending: Set[asyncio.Task] = set()
        while True:
            try:
                line = await reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                # EOF; a final line may lack its newline
                line = e.partial
                if not line:
                    break
            except asyncio.LimitOverrunError as e:
                await _discard_line(reader, e.consumed)
                await self._write(writer, error_envelope(None, ParseError(data=str(e))))
                continue
            line = line.strip()
            if not line:
                continue
            task = asyncio.create_task(self._respond(line, writer))
            pending.add(task)
            task.add_done_callback(pending.discard)
        if pending:
            await asyncio.gather(*pending)
        logger.info("stdio channel closed")

    async def _respond(self, line: bytes, writer: LineWriter) -> None:
        try:
            payload = json.loads(line)
        except ValueError as e:
            envelope = error_envelope(None, ParseError(data=str(e)))
        else:
            envelope, _ = await self.protocol.handle(payload)
        await self._write(writer, envelope)

    async def _write(self, writer: LineWriter, envelope: dict) -> None:
        writer.write((json.dumps(envelope, ensure_ascii=False) + "\n").encode("utf-8"))
        await writer.drain()

    async def serve_stdio(self) -> None:
        reader, writer = await open_stdio()
        logger.info("[MCP STDIO mode] Ready for JSON-RPC requests via stdin.")
        await self.serve(reader, writer)


async def _discard_line(reader: asyncio.StreamReader, consumed: int) -> None:
    """Drop the rest of an overlong line, through its newline or EOF."""
    while True:
        await reader.read(consumed)
        try:
            await reader.readuntil(b"\n")
            return
        except asyncio.LimitOverrunError as e:
            consumed = e.consumed
        except asyncio.IncompleteReadError:
            return


async def open_stdio() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    w_transport, w_protocol = await loop.connect_write_pipe(asyncio.streams.FlowControlMixin, sys.stdout)
    writer = asyncio.StreamWriter(w_transport, w_protocol, reader, loop)
    return reader, writer
