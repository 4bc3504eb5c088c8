"""Wire format of the cross-chain OFT message.

Layout: send_to (32 bytes) | amount_sd (u64 BE) and, when composing,
sender (32 bytes) | compose_msg (rest).
"""

from __future__ import annotations

from typing import Optional

_SEND_TO_OFFSET = 0
_SEND_AMOUNT_SD_OFFSET = 32
_COMPOSE_MSG_OFFSET = 40

_U64_MAX = 2**64 - 1


def _check_bytes32(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(value)}")
    return value


def encode(
    send_to: bytes,
    amount_sd: int,
    sender: bytes,
    compose_msg: Optional[bytes],
) -> bytes:
    """Encode a message; the sender is included only with a compose message."""
    send_to = _check_bytes32("send_to", send_to)
    if not 0 <= amount_sd <= _U64_MAX:
        raise ValueError(f"amount_sd out of range: {amount_sd}")
    encoded = send_to + amount_sd.to_bytes(8, "big")
    if compose_msg is None:
        return encoded
    return encoded + _check_bytes32("sender", sender) + bytes(compose_msg)


def send_to(message: bytes) -> bytes:
    if len(message) < _SEND_AMOUNT_SD_OFFSET:
        raise ValueError("message too short for send_to")
    return bytes(message[_SEND_TO_OFFSET:_SEND_AMOUNT_SD_OFFSET])


def amount_sd(message: bytes) -> int:
    if len(message) < _COMPOSE_MSG_OFFSET:
        raise ValueError("message too short for amount_sd")
    return int.from_bytes(message[_SEND_AMOUNT_SD_OFFSET:_COMPOSE_MSG_OFFSET], "big")


def compose_msg(message: bytes) -> Optional[bytes]:
    """Sender followed by the compose payload, or None for a plain send."""
    if len(message) > _COMPOSE_MSG_OFFSET:
        return bytes(message[_COMPOSE_MSG_OFFSET:])
    return None