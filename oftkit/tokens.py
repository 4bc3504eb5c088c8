"""Token balances held in accounts, with transfers and burns."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import OFTError, OFTErrorCode

_U64_MAX = 2**64 - 1


def _check_amount(amount: int) -> int:
    if not 0 <= amount <= _U64_MAX:
        raise ValueError(f"amount out of range: {amount}")
    return amount


@dataclass
class TokenAccount:
    """Balance of one mint held at ``address`` and controlled by ``owner``."""

    address: bytes
    mint: bytes
    owner: bytes
    amount: int = 0

    def __post_init__(self) -> None:
        self.address = bytes(self.address)
        self.mint = bytes(self.mint)
        self.owner = bytes(self.owner)
        _check_amount(self.amount)

    def transfer_to(self, dest: TokenAccount, amount: int) -> None:
        """Move ``amount`` to ``dest``, which must hold the same mint."""
        if dest.mint != self.mint:
            raise OFTError(OFTErrorCode.InvalidTokenDest)
        _check_amount(amount)
        if amount > self.amount:
            raise ValueError(f"insufficient funds: {self.amount} < {amount}")
        if dest is self:
            return
        if dest.amount + amount > _U64_MAX:
            raise OverflowError("destination balance overflows u64")
        self.amount -= amount
        dest.amount += amount

    def burn(self, amount: int) -> None:
        """Destroy ``amount`` tokens held by this account."""
        _check_amount(amount)
        if amount > self.amount:
            raise ValueError(f"insufficient funds: {self.amount} < {amount}")
        self.amount -= amount