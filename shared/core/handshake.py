from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from shared.protocol.errors import HandshakeError, Outcome
from shared.protocol.framing import FrameCodec
from shared.protocol.messages import Frame

from .connection import ChatConnection, HandshakeState, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandshakeResult:
    peer_name: str
    peer_timestamp: int  # display only; never used for ordering

    @property
    def sent_at(self) -> datetime:
        return datetime.fromtimestamp(self.peer_timestamp).astimezone()


async def perform_handshake(connection: ChatConnection, codec: FrameCodec) -> HandshakeResult:
    """
    Exchange display names.

    The responder writes its name and then reads; the initiator reads and then
    writes. Both sides must keep this order or they block on each other's read.
    Raises HandshakeError if the peer goes away or the stream fails.
    """
    if connection.state is not HandshakeState.START:
        raise RuntimeError(f"handshake already ran (state={connection.state})")

    if connection.role is Role.RESPONDER:
        await _send_name(connection, codec)
        frame = await _receive_name(connection, codec)
    else:
        frame = await _receive_name(connection, codec)
        await _send_name(connection, codec)
    connection.state = HandshakeState.NAME_EXCHANGED

    connection.set_peer_name(frame.text)
    connection.state = HandshakeState.READY
    logger.info("Handshake with %s complete, peer is %r", connection.peername, connection.peer_name)
    return HandshakeResult(peer_name=frame.text, peer_timestamp=frame.timestamp)


async def _send_name(connection: ChatConnection, codec: FrameCodec) -> None:
    if connection.writer is None:
        raise HandshakeError("send display name", Outcome.DISCONNECTED)
    result = await codec.write_frame(connection.writer, connection.local_name)
    if not result.ok:
        raise HandshakeError("send display name", result.outcome, result.error)


async def _receive_name(connection: ChatConnection, codec: FrameCodec) -> Frame:
    result = await codec.read_frame(connection.reader)
    if not result.ok:
        raise HandshakeError("receive display name", result.outcome, result.error)
    assert result.frame is not None
    return result.frame


__all__ = ["HandshakeResult", "perform_handshake"]
