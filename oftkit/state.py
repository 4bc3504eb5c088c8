"""Persistent OFT state: the store, peer configuration and rate limiting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import OFTError, OFTErrorCode

OFT_SEED = b"OFT"
PEER_SEED = b"Peer"
ENFORCED_OPTIONS_SEED = b"EnforcedOptions"

ENFORCED_OPTIONS_SEND_MAX_LEN = 512
ENFORCED_OPTIONS_SEND_AND_CALL_MAX_LEN = 1024

U64_MAX = 2**64 - 1


def _saturating_add(a: int, b: int) -> int:
    return min(a + b, U64_MAX)


def _saturating_mul(a: int, b: int) -> int:
    return min(a * b, U64_MAX)


def _timestamp(now: int) -> int:
    if now < 0:
        raise ValueError(f"timestamp must not be negative: {now}")
    return int(now)


class OFTType(Enum):
    """Native OFTs mint and burn; adapters lock tokens in escrow."""

    Native = "native"
    Adapter = "adapter"


@dataclass(kw_only=True)
class OFTStore:
    """Configuration and balances of one OFT deployment."""

    oft_type: OFTType
    ld2sd_rate: int
    token_mint: bytes
    token_escrow: bytes
    endpoint_program: bytes
    bump: int = 0
    tvl_ld: int = 0
    admin: bytes
    default_fee_bps: int = 0
    paused: bool = False
    pauser: Optional[bytes] = None
    unpauser: Optional[bytes] = None

    def ld2sd(self, amount_ld: int) -> int:
        """Local-decimal amount to shared-decimal amount, rounding down."""
        return amount_ld // self.ld2sd_rate

    def sd2ld(self, amount_sd: int) -> int:
        """Shared-decimal amount to local-decimal amount."""
        result = amount_sd * self.ld2sd_rate
        if result > U64_MAX:
            raise OverflowError("amount overflows u64")
        return result

    def remove_dust(self, amount_ld: int) -> int:
        """Drop the part of an amount that shared decimals cannot carry."""
        return amount_ld - amount_ld % self.ld2sd_rate


@dataclass
class LzReceiveTypesAccounts:
    """Accounts referenced when resolving a receive."""

    oft_store: bytes
    token_mint: bytes


@dataclass
class RateLimiter:
    """Token bucket; ``now`` arguments are unix timestamps in seconds."""

    capacity: int = 0
    tokens: int = 0
    refill_per_second: int = 0
    last_refill_time: int = 0

    def set_rate(self, refill_per_second: int, now: int) -> None:
        self.refill(0, now)
        self.refill_per_second = refill_per_second

    def set_capacity(self, capacity: int, now: int) -> None:
        current = _timestamp(now)
        self.capacity = capacity
        self.tokens = capacity
        self.last_refill_time = current

    def refill(self, extra_tokens: int, now: int) -> None:
        """Add elapsed-time tokens plus ``extra_tokens``, capped at capacity."""
        current = _timestamp(now)
        new_tokens = extra_tokens
        if current > self.last_refill_time:
            elapsed = current - self.last_refill_time
            new_tokens = _saturating_add(
                new_tokens, _saturating_mul(elapsed, self.refill_per_second)
            )
        self.tokens = min(self.capacity, _saturating_add(self.tokens, new_tokens))
        self.last_refill_time = current

    def try_consume(self, amount: int, now: int) -> None:
        """Take ``amount`` tokens or raise RateLimitExceeded."""
        self.refill(0, now)
        if amount > self.tokens:
            raise OFTError(OFTErrorCode.RateLimitExceeded)
        self.tokens -= amount


@dataclass
class EnforcedOptions:
    """Options the admin requires on every send, with or without compose."""

    send: bytes = b""
    send_and_call: bytes = b""

    def __post_init__(self) -> None:
        self.send = bytes(self.send)
        self.send_and_call = bytes(self.send_and_call)
        if len(self.send) > ENFORCED_OPTIONS_SEND_MAX_LEN:
            raise ValueError("send options too long")
        if len(self.send_and_call) > ENFORCED_OPTIONS_SEND_AND_CALL_MAX_LEN:
            raise ValueError("send_and_call options too long")

    def get_enforced_options(self, compose_msg: Optional[bytes]) -> bytes:
        return self.send if compose_msg is None else self.send_and_call


@dataclass
class PeerConfig:
    """Per-destination settings of an OFT."""

    peer_address: bytes = bytes(32)
    enforced_options: EnforcedOptions = field(default_factory=EnforcedOptions)
    outbound_rate_limiter: Optional[RateLimiter] = None
    inbound_rate_limiter: Optional[RateLimiter] = None
    fee_bps: Optional[int] = None
    bump: int = 0