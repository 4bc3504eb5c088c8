"""Events emitted when tokens are sent or received."""

from __future__ import annotations

from dataclasses import dataclass

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


def _check_bytes32(name: str, value: bytes) -> None:
    if len(value) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(value)}")


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} out of range: {value}")


@dataclass(frozen=True)
class OFTSent:
    """Tokens left this chain towards ``dst_eid``."""

    guid: bytes
    dst_eid: int
    from_: bytes
    amount_sent_ld: int
    amount_received_ld: int

    def __post_init__(self) -> None:
        _check_bytes32("guid", self.guid)
        _check_bytes32("from_", self.from_)
        _check_range("dst_eid", self.dst_eid, _U32_MAX)
        _check_range("amount_sent_ld", self.amount_sent_ld, _U64_MAX)
        _check_range("amount_received_ld", self.amount_received_ld, _U64_MAX)


@dataclass(frozen=True)
class OFTReceived:
    """Tokens arrived from ``src_eid``."""

    guid: bytes
    src_eid: int
    to: bytes
    amount_received_ld: int

    def __post_init__(self) -> None:
        _check_bytes32("guid", self.guid)
        _check_bytes32("to", self.to)
        _check_range("src_eid", self.src_eid, _U32_MAX)
        _check_range("amount_received_ld", self.amount_received_ld, _U64_MAX)