"""Protocol-wide constants shared by both peer roles."""

ENCODING = "utf-8"
TIMESTAMP_FIELD_SIZE = 8  # signed seconds since epoch
LENGTH_FIELD_OFFSET = 8
LENGTH_FIELD_SIZE = 4  # signed payload byte count
HEADER_SIZE = TIMESTAMP_FIELD_SIZE + LENGTH_FIELD_SIZE
MAX_PAYLOAD_SIZE = 1023
MAX_FRAME_SIZE = HEADER_SIZE + MAX_PAYLOAD_SIZE

MIN_PORT_EXCLUSIVE = 1000
MAX_PORT = 65535

BYTE_ORDERS = {"native": "=", "little": "<", "big": ">"}
DEFAULT_BYTE_ORDER = "little"

__all__ = [
    "ENCODING",
    "TIMESTAMP_FIELD_SIZE",
    "LENGTH_FIELD_OFFSET",
    "LENGTH_FIELD_SIZE",
    "HEADER_SIZE",
    "MAX_PAYLOAD_SIZE",
    "MAX_FRAME_SIZE",
    "MIN_PORT_EXCLUSIVE",
    "MAX_PORT",
    "BYTE_ORDERS",
    "DEFAULT_BYTE_ORDER",
]
