from __future__ import annotations

import asyncio
import io
from typing import Iterable, List, Optional, Tuple, Union

import pytest

from shared.protocol import FrameCodec
from shared.protocol.messages import Frame
from shared.ui import ChatConsole


class FakeWriter:
    """Stands in for asyncio.StreamWriter; records bytes and close calls."""

    def __init__(self, fail: Optional[BaseException] = None) -> None:
        self.buffer = bytearray()
        self.fail = fail
        self.close_calls = 0
        self._closing = False

    def is_closing(self) -> bool:
        return self._closing

    def write(self, data: bytes) -> None:
        self.buffer += data

    async def drain(self) -> None:
        if self.fail is not None:
            raise self.fail

    def close(self) -> None:
        self.close_calls += 1
        self._closing = True

    async def wait_closed(self) -> None:
        return None


class ScriptedReader:
    """readexactly() answers from a script of byte chunks or exceptions."""

    def __init__(self, script: Iterable[Union[bytes, BaseException]]) -> None:
        self.script = list(script)

    async def readexactly(self, n: int) -> bytes:
        if not self.script:
            raise asyncio.IncompleteReadError(b"", n)
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        assert len(item) == n, f"script expected read of {len(item)}, got {n}"
        return item


class ScriptedConsole(ChatConsole):
    """Console that answers prompts from a list and records what it showed."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        super().__init__(out=io.StringIO(), err=io.StringIO())
        self.lines = list(lines)
        self.shown: List[Tuple[str, str]] = []

    async def prompt(self) -> Optional[str]:
        return self.lines.pop(0) if self.lines else None

    def show_message(self, frame: Frame, name: str) -> None:
        self.shown.append((name, frame.text))
        super().show_message(frame, name)

    @property
    def output(self) -> str:
        return self.out.getvalue()


def split_frame(codec: FrameCodec, payload: Union[str, bytes]) -> List[bytes]:
    """Encode payload and split it the way read_frame consumes it."""
    data = codec.encode(payload)
    return [data[:12], data[12:]]


@pytest.fixture
def codec() -> FrameCodec:
    return FrameCodec("little")
