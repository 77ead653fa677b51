from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

logger = logging.getLogger(__name__)


class Role(StrEnum):
    """Which end of the connection this peer is; fixed for the session."""

    RESPONDER = "responder"  # accepted the connection, speaks first in the handshake
    INITIATOR = "initiator"  # opened the connection, listens first in the handshake


class HandshakeState(StrEnum):
    START = "start"
    NAME_EXCHANGED = "name_exchanged"
    READY = "ready"


@dataclass
class ChatConnection:
    """
    Owns the stream pair and the peer's display name for one session.

    close() is idempotent: it releases whatever is still held and is a no-op
    afterwards. Use the connection as an async context manager so teardown
    runs on every exit path.
    """

    reader: asyncio.StreamReader
    writer: Optional[asyncio.StreamWriter]
    role: Role
    local_name: str
    peername: str = "unknown"
    peer_name: Optional[str] = None
    state: HandshakeState = HandshakeState.START

    @property
    def is_open(self) -> bool:
        return self.writer is not None

    @property
    def is_ready(self) -> bool:
        return self.state is HandshakeState.READY and self.is_open

    def set_peer_name(self, name: str) -> None:
        if self.peer_name is not None:
            raise RuntimeError("peer name is set once per session")
        self.peer_name = name

    async def close(self) -> None:
        writer, self.writer = self.writer, None
        self.peer_name = None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except Exception as e:
            logger.debug("Error during writer cleanup: %s", e)
        logger.info("Connection to %s closed", self.peername)

    async def __aenter__(self) -> "ChatConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ["ChatConnection", "HandshakeState", "Role"]
