"""Administrative operations: store configuration, pausing, peers and fee withdrawal."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .errors import OFTError, OFTErrorCode
from .fees import MAX_FEE_BASIS_POINTS
from .send import Endpoint, assert_type_3, store_address
from .state import EnforcedOptions, OFTStore, PeerConfig, RateLimiter
from .tokens import TokenAccount

_PEER_BUMP = 255


@dataclass(frozen=True)
class SetAdmin:
    admin: bytes


@dataclass(frozen=True)
class SetDelegate:
    """OApp delegate registered with the endpoint."""

    delegate: bytes


@dataclass(frozen=True)
class SetDefaultFee:
    fee_bps: int


@dataclass(frozen=True)
class SetPaused:
    paused: bool


@dataclass(frozen=True)
class SetPauser:
    pauser: Optional[bytes]


@dataclass(frozen=True)
class SetUnpauser:
    unpauser: Optional[bytes]


OFTConfigChange = Union[SetAdmin, SetDelegate, SetDefaultFee, SetPaused, SetPauser, SetUnpauser]


@dataclass(frozen=True)
class PeerAddress:
    address: bytes


@dataclass(frozen=True)
class FeeBps:
    fee_bps: Optional[int]


@dataclass(frozen=True)
class EnforcedOptionsParam:
    send: bytes
    send_and_call: bytes


@dataclass(frozen=True)
class RateLimitParams:
    refill_per_second: Optional[int] = None
    capacity: Optional[int] = None


@dataclass(frozen=True)
class OutboundRateLimit:
    params: Optional[RateLimitParams]


@dataclass(frozen=True)
class InboundRateLimit:
    params: Optional[RateLimitParams]


PeerConfigChange = Union[
    PeerAddress, FeeBps, EnforcedOptionsParam, OutboundRateLimit, InboundRateLimit
]


def _require_admin(oft_store: OFTStore, signer: bytes) -> None:
    if bytes(signer) != oft_store.admin:
        raise OFTError(OFTErrorCode.Unauthorized)


def _check_fee_bps(fee_bps: int) -> None:
    if fee_bps >= MAX_FEE_BASIS_POINTS:
        raise OFTError(OFTErrorCode.InvalidFee)


def set_oft_config(
    oft_store: OFTStore,
    signer: bytes,
    change: OFTConfigChange,
    endpoint: Optional[Endpoint] = None,
) -> None:
    """Apply one configuration change; only the admin may do so."""
    _require_admin(oft_store, signer)
    match change:
        case SetAdmin(admin=admin):
            oft_store.admin = bytes(admin)
        case SetDelegate(delegate=delegate):
            if endpoint is None:
                raise ValueError("an endpoint is needed to set the delegate")
            endpoint.set_delegate(store_address(oft_store), delegate)
        case SetDefaultFee(fee_bps=fee_bps):
            _check_fee_bps(fee_bps)
            oft_store.default_fee_bps = fee_bps
        case SetPaused(paused=paused):
            oft_store.paused = paused
        case SetPauser(pauser=pauser):
            oft_store.pauser = None if pauser is None else bytes(pauser)
        case SetUnpauser(unpauser=unpauser):
            oft_store.unpauser = None if unpauser is None else bytes(unpauser)
        case _:
            raise TypeError(f"unknown configuration change: {change!r}")


def set_pause(oft_store: OFTStore, signer: bytes, paused: bool) -> None:
    """Pause (by the pauser) or unpause (by the unpauser) the store."""
    allowed = oft_store.pauser if paused else oft_store.unpauser
    if allowed is None or allowed != bytes(signer):
        raise OFTError(OFTErrorCode.Unauthorized)
    oft_store.paused = paused


def _updated_limiter(
    current: Optional[RateLimiter], params: Optional[RateLimitParams], now: int
) -> Optional[RateLimiter]:
    if params is None:
        return None
    limiter = replace(current) if current is not None else RateLimiter()
    if params.capacity is not None:
        limiter.set_capacity(params.capacity, now)
    if params.refill_per_second is not None:
        limiter.set_rate(params.refill_per_second, now)
    return limiter


def set_peer_config(
    oft_store: OFTStore,
    peer: Optional[PeerConfig],
    signer: bytes,
    change: PeerConfigChange,
    now: int,
) -> PeerConfig:
    """Apply one change to a peer, creating the peer if ``peer`` is None."""
    _require_admin(oft_store, signer)
    peer = peer if peer is not None else PeerConfig()
    match change:
        case PeerAddress(address=address):
            address = bytes(address)
            if len(address) != 32:
                raise ValueError(f"peer address must be 32 bytes, got {len(address)}")
            peer.peer_address = address
        case FeeBps(fee_bps=fee_bps):
            if fee_bps is not None:
                _check_fee_bps(fee_bps)
            peer.fee_bps = fee_bps
        case EnforcedOptionsParam(send=send_options, send_and_call=send_and_call):
            assert_type_3(send_options)
            assert_type_3(send_and_call)
            peer.enforced_options = EnforcedOptions(send_options, send_and_call)
        case OutboundRateLimit(params=params):
            peer.outbound_rate_limiter = _updated_limiter(
                peer.outbound_rate_limiter, params, now
            )
        case InboundRateLimit(params=params):
            peer.inbound_rate_limiter = _updated_limiter(peer.inbound_rate_limiter, params, now)
        case _:
            raise TypeError(f"unknown peer change: {change!r}")
    peer.bump = _PEER_BUMP
    return peer


def withdraw_fee(
    oft_store: OFTStore,
    signer: bytes,
    token_escrow: TokenAccount,
    token_dest: TokenAccount,
    fee_ld: int,
) -> None:
    """Move collected fees, never the locked value, from escrow to ``token_dest``."""
    _require_admin(oft_store, signer)
    if token_escrow.address != oft_store.token_escrow:
        raise ValueError("token_escrow is not the store's escrow")
    if token_escrow.owner != store_address(oft_store):
        raise ValueError("token_escrow is not controlled by the store")
    if token_escrow.amount < oft_store.tvl_ld + fee_ld:
        raise OFTError(OFTErrorCode.InvalidFee)
    token_escrow.transfer_to(token_dest, fee_ld)