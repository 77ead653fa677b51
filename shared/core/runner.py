from __future__ import annotations

import logging

from shared.protocol.errors import IOFailure, Outcome, describe_os_error
from shared.protocol.framing import FrameCodec
from shared.ui.console import ChatConsole

from .connection import ChatConnection, Role
from .conversation import SessionOutcome, run_conversation
from .handshake import perform_handshake

logger = logging.getLogger(__name__)


async def run_session(connection: ChatConnection, codec: FrameCodec, console: ChatConsole) -> SessionOutcome:
    """
    Drive one session from handshake to teardown.

    The connection is closed exactly once whichever way the session ends;
    fatal conditions are raised only after that.
    """
    async with connection:
        handshake = await perform_handshake(connection, codec)
        console.handshake_complete(handshake.peer_name, handshake.peer_timestamp)
        if connection.role is Role.RESPONDER:
            console.info(f"Waiting for 1st message from {handshake.peer_name}...")
        outcome = await run_conversation(connection, codec, console)
        if outcome.outcome is Outcome.DISCONNECTED and not outcome.local_close:
            console.peer_disconnected(handshake.peer_name)

    if outcome.outcome is Outcome.IO_FAILURE:
        detail = describe_os_error(outcome.error) if outcome.error else "unknown error"
        logger.error("Session with %s failed during %s: %s", connection.peername, outcome.step, detail)
        raise IOFailure(f"Unexpected failure to {outcome.step}.", cause=outcome.error)
    return outcome


__all__ = ["run_session"]
