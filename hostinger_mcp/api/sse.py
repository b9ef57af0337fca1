"""SSE session registry.

Each ``GET /sse`` connection owns one session: a queue that receives the
responses to envelopes posted to ``/messages?session_id=<id>``. Sessions are
isolated from each other and live exactly as long as their stream.
"""
from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, AsyncIterator, Dict, Optional

logger = logging.getLogger("mcp")

MESSAGES_PATH = "/messages"


def sse_frame(data: str, event: Optional[str] = None) -> str:
    head = f"event: {event}\n" if event else ""
    return f"{head}data: {data}\n\n"


class SseSession:
    def __init__(self, session_id: str):
        self.id = session_id
        self.closed = False
        self.queue: asyncio.Queue[str] = asyncio.Queue()

    @property
    def endpoint(self) -> str:
        return f"{MESSAGES_PATH}?session_id={self.id}"

    async def send(self, envelope: Dict[str, Any]) -> None:
        # dropped once the stream has ended
        if self.closed:
            return
        self.queue.put_nowait(json.dumps(envelope, ensure_ascii=False))


class SseSessionRegistry:
    def __init__(self) -> None:
        self._sessions: Dict[str, SseSession] = {}

    def open(self) -> SseSession:
        session = SseSession(uuid.uuid4().hex)
        self._sessions[session.id] = session
        logger.info(json.dumps({"event": "sse.open", "session": session.id}))
        return session

    def get(self, session_id: Optional[str]) -> Optional[SseSession]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def close(self, session: SseSession) -> None:
        session.closed = True
        if self._sessions.pop(session.id, None) is not None:
            logger.info(json.dumps({"event": "sse.close", "session": session.id}))

    def __len__(self) -> int:
        return len(self._sessions)

    async def stream(self, session: SseSession, keepalive_sec: float) -> AsyncIterator[str]:
        """Endpoint announcement, then message frames until the client leaves."""
        try:
            yield sse_frame(session.endpoint, event="endpoint")
            while True:
                try:
                    item = await asyncio.wait_for(session.queue.get(), timeout=keepalive_sec)
                    yield sse_frame(item, event="message")
                except asyncio.TimeoutError:
                    # keep alive comment
                    yield ": ping\n\n"
        finally:
            self.close(session)
