from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError as SchemaError, field_validator

from .constants import MAX_PORT, MIN_PORT_EXCLUSIVE
from .errors import ValidationError


def validate_port(port: Any) -> int:
    """Parse a port argument; digits only, within (1000, 65535]."""
    text = str(port)
    for char in text:
        if not ("0" <= char <= "9"):
            raise ValidationError(
                f'Invalid port number "{text}": contains non-numeric \'{char}\'.\n'
                f"Port number should be a whole number within ({MIN_PORT_EXCLUSIVE}, {MAX_PORT}]."
            )
    if not text:
        raise ValidationError("Port number is empty.")
    value = int(text)
    if value <= MIN_PORT_EXCLUSIVE or value > MAX_PORT:
        raise ValidationError(
            f"Invalid port number {value}: outside of valid range ({MIN_PORT_EXCLUSIVE}, {MAX_PORT}]."
        )
    return value


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True)

    port: int
    display_name: str = Field(min_length=1)

    @field_validator("port", mode="before")
    @classmethod
    def _check_port(cls, value: Any) -> int:
        try:
            return validate_port(value)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc

    @classmethod
    def parse(cls, **data: Any):
        try:
            return cls(**data)
        except SchemaError as exc:
            details = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
            raise ValidationError(f"Invalid startup parameters: {details}") from exc


class ResponderParams(_Params):
    """Listening port plus the local display name."""


class InitiatorParams(_Params):
    """Remote host and port plus the local display name."""

    host: str = Field(min_length=1)


__all__ = ["validate_port", "ResponderParams", "InitiatorParams"]
