"""Creation of a new OFT store for a mint and its escrow account."""

from __future__ import annotations

import hashlib
from typing import Optional

from .errors import OFTError, OFTErrorCode
from .fees import Mint
from .state import OFT_SEED, U64_MAX, LzReceiveTypesAccounts, OFTStore, OFTType

DEFAULT_ENDPOINT_PROGRAM = hashlib.sha256(b"Endpoint").digest()
_LZ_RECEIVE_TYPES_SEED = b"LzReceiveTypes"
_STORE_BUMP = 255


def _check_address(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(value)}")
    return value


def _derive_address(*seeds: bytes) -> bytes:
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(len(seed).to_bytes(2, "big"))
        digest.update(seed)
    return digest.digest()


def init_oft(
    mint: Mint,
    token_mint: bytes,
    token_escrow: bytes,
    oft_type: OFTType,
    admin: bytes,
    shared_decimals: int,
    endpoint_program: Optional[bytes] = None,
) -> tuple[OFTStore, LzReceiveTypesAccounts]:
    """Create the store for ``mint`` and the accounts used when receiving.

    The store's address is derived from the escrow address and recorded in
    the returned ``LzReceiveTypesAccounts``.
    """
    token_mint = _check_address("token_mint", token_mint)
    token_escrow = _check_address("token_escrow", token_escrow)
    admin = _check_address("admin", admin)
    if token_mint != bytes(mint.address):
        raise ValueError("token_mint does not match the mint's address")
    if mint.decimals < shared_decimals:
        raise OFTError(OFTErrorCode.InvalidDecimals)
    ld2sd_rate = 10 ** (mint.decimals - shared_decimals)
    if ld2sd_rate > U64_MAX:
        raise OverflowError("decimal conversion rate overflows u64")

    endpoint = (
        _check_address("endpoint_program", endpoint_program)
        if endpoint_program is not None
        else DEFAULT_ENDPOINT_PROGRAM
    )
    store = OFTStore(
        oft_type=oft_type,
        ld2sd_rate=ld2sd_rate,
        token_mint=token_mint,
        token_escrow=token_escrow,
        endpoint_program=endpoint,
        bump=_STORE_BUMP,
        tvl_ld=0,
        admin=admin,
        default_fee_bps=0,
        paused=False,
        pauser=None,
        unpauser=None,
    )
    store_address = _derive_address(OFT_SEED, token_escrow)
    accounts = LzReceiveTypesAccounts(oft_store=store_address, token_mint=token_mint)
    return store, accounts