"""Wire format of a compose message delivered to the composer.

Layout: nonce (u64 BE) | src_eid (u32 BE) | amount_ld (u64 BE) |
compose_from (32 bytes) | compose_msg (rest).
"""

from __future__ import annotations

import struct

_HEADER = struct.Struct(">QIQ")

_NONCE_OFFSET = 0
_SRC_EID_OFFSET = 8
_AMOUNT_LD_OFFSET = 12
_COMPOSE_FROM_OFFSET = 20
_COMPOSE_MSG_OFFSET = 52


def _field(message: bytes, start: int, end: int) -> bytes:
    if len(message) < end:
        raise ValueError(f"message too short: need {end} bytes, got {len(message)}")
    return bytes(message[start:end])


def encode(nonce: int, src_eid: int, amount_ld: int, compose_msg: bytes) -> bytes:
    """Encode a compose message; ``compose_msg`` is compose_from followed by the payload."""
    try:
        header = _HEADER.pack(nonce, src_eid, amount_ld)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc
    return header + bytes(compose_msg)


def nonce(message: bytes) -> int:
    return int.from_bytes(_field(message, _NONCE_OFFSET, _SRC_EID_OFFSET), "big")


def src_eid(message: bytes) -> int:
    return int.from_bytes(_field(message, _SRC_EID_OFFSET, _AMOUNT_LD_OFFSET), "big")


def amount_ld(message: bytes) -> int:
    return int.from_bytes(_field(message, _AMOUNT_LD_OFFSET, _COMPOSE_FROM_OFFSET), "big")


def compose_from(message: bytes) -> bytes:
    return _field(message, _COMPOSE_FROM_OFFSET, _COMPOSE_MSG_OFFSET)


def compose_msg(message: bytes) -> bytes:
    """Payload after compose_from, or empty bytes if there is none."""
    return bytes(message[_COMPOSE_MSG_OFFSET:])