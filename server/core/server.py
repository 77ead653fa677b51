from __future__ import annotations

import asyncio
import logging
from typing import Optional

from shared.core.connection import ChatConnection, Role
from shared.protocol.errors import TransportError

logger = logging.getLogger(__name__)


class SocketServer:
    """Listens on host:port and hands out the first accepted peer as a ChatConnection."""

    def __init__(self, host: str, port: int, display_name: str) -> None:
        self.host = host
        self.port = port
        self.display_name = display_name
        self._server: Optional[asyncio.AbstractServer] = None
        self._peer: Optional[asyncio.Future[ChatConnection]] = None

    @property
    def bound_port(self) -> int:
        """Actual listening port (differs from port when port is 0)."""
        if self._server is None or not self._server.sockets:
            return self.port
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        self._peer = asyncio.get_running_loop().create_future()
        try:
            self._server = await asyncio.start_server(self._handle_client, self.host, self.port, backlog=5)
        except OSError as exc:
            raise TransportError(f"Failed to bind and listen on {self.host}:{self.port}.\nDetails: {exc}") from exc
        logger.info("Server listening on %s:%s", self.host, self.bound_port)

    async def wait_for_peer(self) -> ChatConnection:
        """Block until one peer connects, then stop listening."""
        if self._peer is None:
            await self.start()
        assert self._peer is not None
        try:
            return await self._peer
        finally:
            await self.stop()

    async def stop(self) -> None:
        # Only the listening socket; Server.wait_closed() would also wait for the accepted peer.
        if self._server is not None:
            self._server.close()
            self._server = None

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        peername = _format_peer(writer.get_extra_info("peername"))
        if self._peer is None or self._peer.done():
            logger.warning("Rejecting extra connection from %s; one peer per session", peername)
            writer.close()
            return
        logger.info("Accepted connection from %s", peername)
        self._peer.set_result(
            ChatConnection(
                reader=reader,
                writer=writer,
                role=Role.RESPONDER,
                local_name=self.display_name,
                peername=peername,
            )
        )


def _format_peer(peer) -> str:
    if isinstance(peer, tuple) and len(peer) >= 2:
        return f"{peer[0]}:{peer[1]}"
    return str(peer)


__all__ = ["SocketServer"]
