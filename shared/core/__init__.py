from .connection import ChatConnection, HandshakeState, Role
from .conversation import SessionOutcome, run_conversation
from .handshake import HandshakeResult, perform_handshake
from .runner import run_session

__all__ = [
    "ChatConnection",
    "HandshakeState",
    "Role",
    "SessionOutcome",
    "run_conversation",
    "HandshakeResult",
    "perform_handshake",
    "run_session",
]
