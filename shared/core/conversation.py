from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Optional

from shared.protocol.errors import ExitCode, Outcome
from shared.protocol.framing import FrameCodec, IOResult
from shared.ui.console import ChatConsole

from .connection import ChatConnection, Role

logger = logging.getLogger(__name__)


@dataclass
class SessionOutcome:
    """How the turn-taking loop ended."""

    outcome: Outcome
    step: str = ""
    local_close: bool = False
    error: Optional[BaseException] = None
    sent: int = 0
    received: int = 0

    @property
    def exit_code(self) -> ExitCode:
        if self.outcome is Outcome.IO_FAILURE:
            return ExitCode.FAILURE
        return ExitCode.SUCCESS


@dataclass
class _Turns:
    connection: ChatConnection
    codec: FrameCodec
    console: ChatConsole
    tally: SessionOutcome = field(default_factory=lambda: SessionOutcome(Outcome.OK))

    def _ended(self, result: IOResult, step: str) -> SessionOutcome:
        self.tally.outcome = result.outcome
        self.tally.step = step
        self.tally.error = result.error
        return self.tally

    async def speak(self) -> Optional[SessionOutcome]:
        text = await self.console.prompt()
        if text is None:
            logger.info("Local input closed, ending session")
            self.tally.outcome = Outcome.DISCONNECTED
            self.tally.step = "prompt"
            self.tally.local_close = True
            return self.tally
        writer = self.connection.writer
        if writer is None:
            return self._ended(IOResult(Outcome.DISCONNECTED), "send message")
        result = await self.codec.write_frame(writer, text)
        if not result.ok:
            return self._ended(result, "send message")
        self.tally.sent += 1
        self.console.info("Waiting for response...")
        return None

    async def listen(self) -> Optional[SessionOutcome]:
        result = await self.codec.read_frame(self.connection.reader)
        if not result.ok:
            return self._ended(result, "receive message")
        assert result.frame is not None
        self.tally.received += 1
        self.console.show_message(result.frame, self.connection.peer_name or "peer")
        return None


async def run_conversation(connection: ChatConnection, codec: FrameCodec, console: ChatConsole) -> SessionOutcome:
    """
    Alternate send and receive until one side goes away.

    The initiator speaks first, the responder listens first. Every turn is one
    send followed by one receive (or the reverse), never two of the same.
    """
    if not connection.is_ready:
        raise RuntimeError("conversation requires a completed handshake")

    turns = _Turns(connection, codec, console)
    steps: tuple[Callable[[], Awaitable[Optional[SessionOutcome]]], ...]
    if connection.role is Role.INITIATOR:
        steps = (turns.speak, turns.listen)
    else:
        steps = (turns.listen, turns.speak)

    while True:
        for step in steps:
            ended = await step()
            if ended is not None:
                logger.info(
                    "Conversation ended: %s at %s (sent=%s, received=%s)",
                    ended.outcome.value,
                    ended.step,
                    ended.sent,
                    ended.received,
                )
                return ended


__all__ = ["SessionOutcome", "run_conversation"]
