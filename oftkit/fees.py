"""Fee arithmetic: the OFT cross-chain fee and token transfer fees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import U64_MAX, OFTStore, OFTType

MAX_FEE_BASIS_POINTS = 10_000
_ONE_IN_BASIS_POINTS = MAX_FEE_BASIS_POINTS
_U128_MAX = 2**128 - 1


def _checked_u64(value: int) -> Optional[int]:
    return value if 0 <= value <= U64_MAX else None


def ceil_div(numerator: int, denominator: int) -> Optional[int]:
    """Ceiling division on u128 values; None on overflow or a zero denominator."""
    total = numerator + denominator
    if total > _U128_MAX or total < 1 or denominator == 0:
        return None
    return (total - 1) // denominator


@dataclass(frozen=True)
class TransferFee:
    """Transfer fee charged by the mint in the current epoch."""

    transfer_fee_basis_points: int
    maximum_fee: int
    epoch: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.transfer_fee_basis_points <= MAX_FEE_BASIS_POINTS:
            raise ValueError(f"basis points out of range: {self.transfer_fee_basis_points}")
        if not 0 <= self.maximum_fee <= U64_MAX:
            raise ValueError(f"maximum fee out of range: {self.maximum_fee}")

    def _fee(self, pre_fee_amount: int) -> Optional[int]:
        if self.transfer_fee_basis_points == 0 or pre_fee_amount == 0:
            return 0
        raw_fee = ceil_div(pre_fee_amount * self.transfer_fee_basis_points, _ONE_IN_BASIS_POINTS)
        if raw_fee is None:
            return None
        return min(raw_fee, self.maximum_fee)

    def calculate_post_fee_amount(self, pre_fee_amount: int) -> Optional[int]:
        """Amount that arrives after the fee is withheld, or None on overflow."""
        fee = self._fee(pre_fee_amount)
        if fee is None or fee > pre_fee_amount:
            return None
        return pre_fee_amount - fee


@dataclass
class Mint:
    """A token mint: its address, decimals and optional transfer fee."""

    address: bytes
    decimals: int
    transfer_fee: Optional[TransferFee] = None


def calculate_fee(pre_fee_amount: int, default_fee_bps: int, fee_bps: Optional[int]) -> int:
    """OFT fee on an amount; a peer's ``fee_bps`` overrides the default."""
    final_fee_bps = fee_bps if fee_bps is not None else default_fee_bps
    if final_fee_bps == 0 or pre_fee_amount == 0:
        return 0
    return pre_fee_amount * final_fee_bps // _ONE_IN_BASIS_POINTS


def calculate_pre_fee_amount(fee: TransferFee, post_fee_amount: int) -> Optional[int]:
    """Smallest amount to send so that ``post_fee_amount`` arrives."""
    maximum_fee = fee.maximum_fee
    basis_points = fee.transfer_fee_basis_points
    if basis_points == 0:
        return post_fee_amount
    if post_fee_amount == 0:
        return 0
    if basis_points == _ONE_IN_BASIS_POINTS:
        return _checked_u64(maximum_fee + post_fee_amount)
    numerator = post_fee_amount * _ONE_IN_BASIS_POINTS
    if numerator > _U128_MAX:
        return None
    denominator = _ONE_IN_BASIS_POINTS - basis_points
    if denominator < 0:
        return None
    raw_pre_fee_amount = ceil_div(numerator, denominator)
    if raw_pre_fee_amount is None:
        return None
    difference = raw_pre_fee_amount - post_fee_amount
    if difference < 0:
        return None
    if difference >= maximum_fee:
        return _checked_u64(post_fee_amount + maximum_fee)
    return _checked_u64(raw_pre_fee_amount)


def get_post_fee_amount_ld(mint: Mint, amount_ld: int) -> int:
    """Amount left after the mint's transfer fee."""
    if mint.transfer_fee is None:
        return amount_ld
    result = mint.transfer_fee.calculate_post_fee_amount(amount_ld)
    if result is None:
        raise ValueError("invalid argument: transfer fee computation overflowed")
    return result


def get_pre_fee_amount_ld(mint: Mint, amount_ld: int) -> int:
    """Amount to send so that ``amount_ld`` arrives; dust is not removed."""
    if mint.transfer_fee is None:
        return amount_ld
    result = calculate_pre_fee_amount(mint.transfer_fee, amount_ld)
    if result is None:
        raise ValueError("invalid argument: transfer fee computation overflowed")
    return result


def compute_fee_and_adjust_amount(
    amount_ld: int,
    oft_store: OFTStore,
    mint: Mint,
    fee_bps: Optional[int],
) -> tuple[int, int, int]:
    """Return ``(amount_sent_ld, amount_received_ld, oft_fee_ld)`` for a send."""
    if oft_store.oft_type == OFTType.Adapter:
        amount_received_ld = oft_store.remove_dust(get_post_fee_amount_ld(mint, amount_ld))
        amount_sent_ld = get_pre_fee_amount_ld(mint, amount_received_ld)
        oft_fee_ld = oft_store.remove_dust(
            calculate_fee(amount_received_ld, oft_store.default_fee_bps, fee_bps)
        )
        amount_received_ld -= oft_fee_ld
    else:
        amount_sent_ld = oft_store.remove_dust(amount_ld)
        oft_fee_ld = oft_store.remove_dust(
            calculate_fee(amount_sent_ld, oft_store.default_fee_bps, fee_bps)
        )
        amount_received_ld = amount_sent_ld - oft_fee_ld
    return amount_sent_ld, amount_received_ld, oft_fee_ld