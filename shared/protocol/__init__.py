"""
Shared protocol package: wire constants, error taxonomy, the Frame model,
the frame codec and startup parameter validation for both peer roles.
"""

from .constants import ENCODING, HEADER_SIZE, MAX_PAYLOAD_SIZE
from .errors import (
    ChatError,
    ConfigError,
    ExitCode,
    HandshakeError,
    IOFailure,
    Outcome,
    ProtocolError,
    TransportError,
    ValidationError,
)
from .framing import (
    DEFAULT_CODEC,
    FrameCodec,
    IOResult,
    PayloadTruncatedWarning,
    decode_frame,
    encode_frame,
    read_frame,
    write_frame,
)
from .messages import Frame
from .validator import InitiatorParams, ResponderParams, validate_port

__all__ = [
    "ENCODING",
    "HEADER_SIZE",
    "MAX_PAYLOAD_SIZE",
    "ChatError",
    "ConfigError",
    "ExitCode",
    "HandshakeError",
    "IOFailure",
    "Outcome",
    "ProtocolError",
    "TransportError",
    "ValidationError",
    "DEFAULT_CODEC",
    "FrameCodec",
    "IOResult",
    "PayloadTruncatedWarning",
    "decode_frame",
    "encode_frame",
    "read_frame",
    "write_frame",
    "Frame",
    "InitiatorParams",
    "ResponderParams",
    "validate_port",
]
