from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared.utils.common import utc_timestamp

from .constants import ENCODING, MAX_PAYLOAD_SIZE
from .errors import ProtocolError


def _default_timestamp() -> int:
    return utc_timestamp()


class Frame(BaseModel):
    """One header-plus-payload unit as exchanged on the wire."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(default_factory=_default_timestamp, description="Sender local time (seconds)")
    payload: bytes = Field(default=b"", max_length=MAX_PAYLOAD_SIZE, description="Message body")

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    @property
    def text(self) -> str:
        return self.payload.decode(ENCODING, errors="replace")

    @property
    def sent_at(self) -> datetime:
        """Timestamp rendered in the local timezone."""
        return datetime.fromtimestamp(self.timestamp).astimezone()

    @classmethod
    def build(cls, payload: bytes, timestamp: Optional[int] = None) -> "Frame":
        data = {"payload": payload}
        if timestamp is not None:
            data["timestamp"] = timestamp
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ProtocolError(f"Frame validation failed: {exc}") from exc


__all__ = ["Frame"]
