"""Read-only queries: the program version and OFT quotes."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import OFTError, OFTErrorCode
from .fees import Mint, compute_fee_and_adjust_amount
from .state import U64_MAX, OFTStore, PeerConfig

TRANSFER_FEE_DESCRIPTION = "Token2022 Transfer Fee"
CROSS_CHAIN_FEE_DESCRIPTION = "Cross Chain Fee"


@dataclass(frozen=True)
class Version:
    """Interface and message format versions."""

    interface: int
    message: int


@dataclass(frozen=True)
class OFTLimits:
    min_amount_ld: int
    max_amount_ld: int


@dataclass(frozen=True)
class OFTFeeDetail:
    fee_amount_ld: int
    description: str


@dataclass(frozen=True)
class OFTReceipt:
    amount_sent_ld: int
    amount_received_ld: int


@dataclass(frozen=True)
class QuoteOFTResult:
    oft_limits: OFTLimits
    oft_fee_details: list[OFTFeeDetail] = field(default_factory=list)
    oft_receipt: OFTReceipt = OFTReceipt(0, 0)


def oft_version() -> Version:
    return Version(interface=2, message=1)


def quote_oft(
    oft_store: OFTStore,
    peer: PeerConfig,
    mint: Mint,
    amount_ld: int,
    min_amount_ld: int,
) -> QuoteOFTResult:
    """Quote limits, fees and amounts for sending ``amount_ld`` to ``peer``."""
    if oft_store.paused:
        raise OFTError(OFTErrorCode.Paused)

    amount_sent_ld, amount_received_ld, oft_fee_ld = compute_fee_and_adjust_amount(
        amount_ld, oft_store, mint, peer.fee_bps
    )
    if amount_received_ld < min_amount_ld:
        raise OFTError(OFTErrorCode.SlippageExceeded)

    details: list[OFTFeeDetail] = []
    if amount_received_ld + oft_fee_ld < amount_sent_ld:
        details.append(
            OFTFeeDetail(
                fee_amount_ld=amount_sent_ld - oft_fee_ld - amount_received_ld,
                description=TRANSFER_FEE_DESCRIPTION,
            )
        )
    if oft_fee_ld > 0:
        details.append(OFTFeeDetail(fee_amount_ld=oft_fee_ld, description=CROSS_CHAIN_FEE_DESCRIPTION))

    return QuoteOFTResult(
        oft_limits=OFTLimits(min_amount_ld=0, max_amount_ld=U64_MAX),
        oft_fee_details=details,
        oft_receipt=OFTReceipt(amount_sent_ld=amount_sent_ld, amount_received_ld=amount_received_ld),
    )