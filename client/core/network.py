from __future__ import annotations

import asyncio
import logging

from shared.core.connection import ChatConnection, Role
from shared.protocol.errors import TransportError

logger = logging.getLogger(__name__)


class NetworkClient:
    """Resolves the responder's host and opens the single session connection."""

    def __init__(self, host: str, port: int, display_name: str) -> None:
        self.host = host
        self.port = port
        self.display_name = display_name

    async def connect(self) -> ChatConnection:
        logger.info("Requesting to connect to %s:%s", self.host, self.port)
        try:
            reader, writer = await asyncio.open_connection(self.host, self.port)
        except OSError as exc:
            # socket.gaierror is an OSError too; resolution failures land here.
            raise TransportError(f"Failed to connect to {self.host}:{self.port}.\nDetails: {exc}") from exc
        logger.info("Connected to %s:%s", self.host, self.port)
        return ChatConnection(
            reader=reader,
            writer=writer,
            role=Role.INITIATOR,
            local_name=self.display_name,
            peername=f"{self.host}:{self.port}",
        )


__all__ = ["NetworkClient"]
