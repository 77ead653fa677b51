from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit statuses."""

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


class Outcome(Enum):
    """Result tag returned from every framing I/O step."""

    OK = "ok"
    DISCONNECTED = "disconnected"
    IO_FAILURE = "io_failure"


class ChatError(Exception):
    """Base for every condition that ends the process with a diagnostic."""

    exit_code: ExitCode = ExitCode.FAILURE

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ChatError):
    """Malformed or out-of-range startup parameter."""


class ConfigError(ValidationError):
    """Raised when configuration values are invalid."""


class TransportError(ChatError):
    """Socket could not be created, bound, resolved or connected."""


class IOFailure(ChatError):
    """A read or write on an established connection failed."""

    def __init__(self, message: str = "", cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message}\nDetails: {describe_os_error(cause)}"
        super().__init__(message)


class HandshakeError(ChatError):
    """The display-name exchange did not complete."""

    def __init__(self, step: str, outcome: Outcome, cause: Optional[BaseException] = None) -> None:
        self.step = step
        self.outcome = outcome
        self.cause = cause
        if outcome is Outcome.DISCONNECTED:
            message = f"Peer unexpectedly disconnected during display name exchange ({step})."
        else:
            message = f"Failed to {step} during display name exchange."
            if cause is not None:
                message = f"{message}\nDetails: {describe_os_error(cause)}"
        super().__init__(message)


class ProtocolError(Exception):
    """Frame that violates the wire format."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


def describe_os_error(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or type(exc).__name__


__all__ = [
    "ExitCode",
    "Outcome",
    "ChatError",
    "ValidationError",
    "ConfigError",
    "TransportError",
    "IOFailure",
    "HandshakeError",
    "ProtocolError",
    "describe_os_error",
]
