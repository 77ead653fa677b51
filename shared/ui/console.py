from __future__ import annotations

import asyncio
import sys
import threading
from typing import Optional, TextIO

from shared.protocol.messages import Frame
from shared.utils.common import local_asctime


class ChatConsole:
    """Terminal side of a session: prompting for lines and printing frames."""

    def __init__(self, prompt: str = "Message > ", out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self.prompt_text = prompt
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    async def prompt(self) -> Optional[str]:
        """Read one line; None once stdin is exhausted."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Optional[str]] = loop.create_future()

        def _read() -> None:
            try:
                line: Optional[str] = input(self.prompt_text)
            except EOFError:
                line = None
            except Exception as exc:  # delivered to the awaiting coroutine
                loop.call_soon_threadsafe(_deliver_exception, future, exc)
                return
            loop.call_soon_threadsafe(_deliver, future, line)

        # Daemon thread so a pending input() never holds up interpreter exit.
        threading.Thread(target=_read, name="console-input", daemon=True).start()
        return await future

    def info(self, text: str) -> None:
        print(text, file=self.out, flush=True)

    def error(self, text: str) -> None:
        print(f"[Error]: {text}", file=self.err, flush=True)

    def connected(self, peername: str) -> None:
        self.info(f"Connected to {peername}")

    def handshake_complete(self, peer_name: str, timestamp: int) -> None:
        self.info(f"Info exchange complete: peer sent display name, {peer_name}, at {local_asctime(timestamp)}")

    def show_message(self, frame: Frame, name: str) -> None:
        self.info(f"{local_asctime(frame.timestamp)}\t{name}:\t{frame.text}")

    def peer_disconnected(self, peer_name: str) -> None:
        self.info(f"{peer_name} disconnected.")


def _deliver(future: asyncio.Future, value: Optional[str]) -> None:
    if not future.done():
        future.set_result(value)


def _deliver_exception(future: asyncio.Future, exc: BaseException) -> None:
    if not future.done():
        future.set_exception(exc)


__all__ = ["ChatConsole"]
