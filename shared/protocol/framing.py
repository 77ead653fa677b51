from __future__ import annotations

import asyncio
import logging
import struct
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from shared.utils.common import utc_timestamp

from .constants import BYTE_ORDERS, DEFAULT_BYTE_ORDER, ENCODING, HEADER_SIZE, MAX_PAYLOAD_SIZE
from .errors import Outcome, ProtocolError
from .messages import Frame

logger = logging.getLogger(__name__)

Payload = Union[str, bytes, bytearray]


class PayloadTruncatedWarning(UserWarning):
    """Payload was cut to MAX_PAYLOAD_SIZE before framing."""


@dataclass(frozen=True)
class IOResult:
    """Tagged outcome of a single read or write step."""

    outcome: Outcome
    frame: Optional[Frame] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


class FrameCodec:
    """
    Serializes frames as a 12 byte header followed by the payload.

    Header layout: 8 byte signed timestamp, then 4 byte signed payload length.
    Both fields use the configured byte order ("native" keeps the host layout,
    which is what peers built without an explicit order expect).
    """

    def __init__(self, byte_order: str = DEFAULT_BYTE_ORDER) -> None:
        if byte_order not in BYTE_ORDERS:
            raise ValueError(f"Unknown byte order {byte_order!r}, expected one of {sorted(BYTE_ORDERS)}")
        self.byte_order = byte_order
        self._header = struct.Struct(f"{BYTE_ORDERS[byte_order]}qi")
        assert self._header.size == HEADER_SIZE

    def encode(self, payload: Payload, declared_length: int = -1, timestamp: Optional[int] = None) -> bytes:
        """
        Frame payload. A negative declared_length means "use the whole payload".

        Anything over MAX_PAYLOAD_SIZE is truncated and a PayloadTruncatedWarning
        is issued; the frame is still produced.
        """
        data = payload.encode(ENCODING) if isinstance(payload, str) else bytes(payload)
        length = len(data) if declared_length < 0 else min(declared_length, len(data))
        if length > MAX_PAYLOAD_SIZE:
            logger.warning("Payload too large to fit a frame, truncating from %s to %s bytes", length, MAX_PAYLOAD_SIZE)
            warnings.warn(
                f"payload truncated from {length} to {MAX_PAYLOAD_SIZE} bytes",
                PayloadTruncatedWarning,
                stacklevel=2,
            )
            length = MAX_PAYLOAD_SIZE
        stamp = utc_timestamp() if timestamp is None else timestamp
        return self._header.pack(stamp, length) + data[:length]

    def decode_header(self, header: bytes) -> Tuple[int, int]:
        if len(header) != HEADER_SIZE:
            raise ProtocolError(f"Header must be {HEADER_SIZE} bytes, got {len(header)}")
        timestamp, length = self._header.unpack(header)
        if not (0 <= length <= MAX_PAYLOAD_SIZE):
            raise ProtocolError(f"Declared payload length {length} outside 0..{MAX_PAYLOAD_SIZE}")
        return timestamp, length

    def decode(self, data: bytes) -> Frame:
        """Decode one complete header+payload buffer."""
        timestamp, length = self.decode_header(data[:HEADER_SIZE])
        payload = data[HEADER_SIZE:]
        if len(payload) != length:
            raise ProtocolError(f"Payload length mismatch: header says {length}, got {len(payload)}")
        return Frame.build(payload, timestamp)

    async def read_frame(self, reader: asyncio.StreamReader) -> IOResult:
        """
        Read one frame. The header and the payload are separate reads and either
        one may be where the peer disconnects or the stream fails.
        """
        outcome, header, error = await _read_segment(reader, HEADER_SIZE, "header")
        if outcome is not Outcome.OK:
            return IOResult(outcome, error=error)
        try:
            timestamp, length = self.decode_header(header)
        except ProtocolError as exc:
            logger.error("Malformed frame header: %s", exc)
            return IOResult(Outcome.IO_FAILURE, error=exc)

        outcome, payload, error = await _read_segment(reader, length, "payload")
        if outcome is not Outcome.OK:
            return IOResult(outcome, error=error)
        frame = Frame.build(payload, timestamp)
        logger.debug("Received frame ts=%s len=%s", frame.timestamp, frame.payload_length)
        return IOResult(Outcome.OK, frame=frame)

    async def write_frame(
        self,
        writer: asyncio.StreamWriter,
        payload: Payload,
        declared_length: int = -1,
    ) -> IOResult:
        if writer.is_closing():
            return IOResult(Outcome.DISCONNECTED)
        data = self.encode(payload, declared_length)
        try:
            writer.write(data)
            await writer.drain()
        except OSError as exc:
            logger.error("Write failed: %s", exc)
            return IOResult(Outcome.IO_FAILURE, error=exc)
        logger.debug("Sent frame of %s bytes", len(data))
        return IOResult(Outcome.OK)


async def _read_segment(reader: asyncio.StreamReader, size: int, what: str) -> Tuple[Outcome, bytes, Optional[BaseException]]:
    # readexactly keeps reading until size bytes arrived; short reads never surface.
    try:
        return Outcome.OK, await reader.readexactly(size), None
    except asyncio.IncompleteReadError as exc:
        if exc.partial:
            logger.info("Peer closed mid-%s after %s of %s bytes", what, len(exc.partial), size)
        else:
            logger.info("Peer closed before %s", what)
        return Outcome.DISCONNECTED, exc.partial, None
    except OSError as exc:
        logger.error("Read of %s failed: %s", what, exc)
        return Outcome.IO_FAILURE, b"", exc


DEFAULT_CODEC = FrameCodec()


def encode_frame(payload: Payload, declared_length: int = -1) -> bytes:
    return DEFAULT_CODEC.encode(payload, declared_length)


def decode_frame(data: bytes) -> Frame:
    return DEFAULT_CODEC.decode(data)


async def read_frame(reader: asyncio.StreamReader) -> IOResult:
    return await DEFAULT_CODEC.read_frame(reader)


async def write_frame(writer: asyncio.StreamWriter, payload: Payload, declared_length: int = -1) -> IOResult:
    return await DEFAULT_CODEC.write_frame(writer, payload, declared_length)


__all__ = [
    "FrameCodec",
    "IOResult",
    "Payload",
    "PayloadTruncatedWarning",
    "DEFAULT_CODEC",
    "encode_frame",
    "decode_frame",
    "read_frame",
    "write_frame",
]
