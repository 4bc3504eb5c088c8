"""Sending tokens to a peer chain through a messaging endpoint."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Optional

from . import msg_codec
from .errors import OFTError, OFTErrorCode
from .events import OFTSent
from .fees import Mint, compute_fee_and_adjust_amount, get_post_fee_amount_ld
from .initialize import _derive_address
from .quote import OFTReceipt
from .state import OFT_SEED, OFTStore, OFTType, PeerConfig
from .tokens import TokenAccount

OPTIONS_TYPE_3 = (3).to_bytes(2, "big")
_DEFAULT_SENDER = bytes(32)


def assert_type_3(options: bytes) -> None:
    """Raise ValueError unless ``options`` is empty or starts with the type-3 header."""
    if options and bytes(options[:2]) != OPTIONS_TYPE_3:
        raise ValueError("options must be of type 3")


def combine_options(enforced_options: bytes, extra_options: bytes) -> bytes:
    """Append the caller's options to the enforced ones, sharing one header."""
    enforced_options = bytes(enforced_options)
    extra_options = bytes(extra_options)
    if not enforced_options:
        return extra_options
    if not extra_options:
        return enforced_options
    assert_type_3(enforced_options)
    assert_type_3(extra_options)
    return enforced_options + extra_options[len(OPTIONS_TYPE_3):]


def store_address(oft_store: OFTStore) -> bytes:
    """Address of the store, derived from its escrow account."""
    return _derive_address(OFT_SEED, oft_store.token_escrow)


@dataclass(frozen=True)
class MessagingFee:
    native_fee: int
    lz_token_fee: int


@dataclass(frozen=True)
class MessagingReceipt:
    guid: bytes
    nonce: int
    fee: MessagingFee


@dataclass(frozen=True)
class Packet:
    """A message accepted by the endpoint for delivery."""

    nonce: int
    src_eid: int
    sender: bytes
    dst_eid: int
    receiver: bytes
    guid: bytes
    message: bytes
    options: bytes


@dataclass
class SendParams:
    dst_eid: int
    to: bytes
    amount_ld: int
    min_amount_ld: int
    options: bytes = b""
    compose_msg: Optional[bytes] = None
    native_fee: int = 0
    lz_token_fee: int = 0


@dataclass
class Endpoint:
    """Messaging endpoint charging flat fees and recording outbound packets."""

    eid: int = 0
    native_fee: int = 0
    lz_token_fee: int = 0
    delegates: dict[bytes, bytes] = field(default_factory=dict)
    packets: list[Packet] = field(default_factory=list)
    _nonces: dict[tuple[bytes, int, bytes], int] = field(
        default_factory=dict, init=False, repr=False
    )

    def set_delegate(self, oapp: bytes, delegate: bytes) -> None:
        self.delegates[bytes(oapp)] = bytes(delegate)

    def quote(
        self,
        sender: bytes,
        dst_eid: int,
        receiver: bytes,
        message: bytes,
        enforced_options: bytes,
        extra_options: bytes,
        pay_in_lz_token: bool,
    ) -> MessagingFee:
        """Fee for delivering ``message``; the options must combine cleanly."""
        combine_options(enforced_options, extra_options)
        return MessagingFee(
            native_fee=self.native_fee,
            lz_token_fee=self.lz_token_fee if pay_in_lz_token else 0,
        )

    def send(
        self,
        sender: bytes,
        dst_eid: int,
        receiver: bytes,
        message: bytes,
        enforced_options: bytes,
        extra_options: bytes,
        native_fee: int,
        lz_token_fee: int,
    ) -> MessagingReceipt:
        """Accept a message if the fees paid cover the quote."""
        quoted = self.quote(
            sender, dst_eid, receiver, message, enforced_options, extra_options, lz_token_fee > 0
        )
        if native_fee < quoted.native_fee or lz_token_fee < quoted.lz_token_fee:
            raise ValueError("insufficient messaging fee")
        sender = bytes(sender)
        receiver = bytes(receiver)
        key = (sender, dst_eid, receiver)
        nonce = self._nonces.get(key, 0) + 1
        self._nonces[key] = nonce
        guid = hashlib.sha256(
            nonce.to_bytes(8, "big")
            + self.eid.to_bytes(4, "big")
            + sender
            + dst_eid.to_bytes(4, "big")
            + receiver
        ).digest()
        self.packets.append(
            Packet(
                nonce=nonce,
                src_eid=self.eid,
                sender=sender,
                dst_eid=dst_eid,
                receiver=receiver,
                guid=guid,
                message=bytes(message),
                options=combine_options(enforced_options, extra_options),
            )
        )
        return MessagingReceipt(guid=guid, nonce=nonce, fee=quoted)


def quote_send(
    oft_store: OFTStore,
    peer: PeerConfig,
    mint: Mint,
    params: SendParams,
    pay_in_lz_token: bool,
    endpoint: Endpoint,
) -> MessagingFee:
    """Messaging fee for sending ``params`` to ``peer``."""
    if oft_store.paused:
        raise OFTError(OFTErrorCode.Paused)
    _, amount_received_ld, _ = compute_fee_and_adjust_amount(
        params.amount_ld, oft_store, mint, peer.fee_bps
    )
    if amount_received_ld < params.min_amount_ld:
        raise OFTError(OFTErrorCode.SlippageExceeded)
    return endpoint.quote(
        store_address(oft_store),
        params.dst_eid,
        peer.peer_address,
        msg_codec.encode(params.to, amount_received_ld, _DEFAULT_SENDER, params.compose_msg),
        peer.enforced_options.get_enforced_options(params.compose_msg),
        params.options,
        pay_in_lz_token,
    )


def _transfer_checked(source: TokenAccount, dest: TokenAccount, mint: Mint, amount: int) -> None:
    source.transfer_to(dest, amount)
    # The mint's transfer fee is withheld at the destination and cannot be spent.
    withheld = amount - get_post_fee_amount_ld(mint, amount)
    if withheld:
        dest.burn(withheld)


def _check_accounts(
    oft_store: OFTStore,
    signer: bytes,
    token_source: TokenAccount,
    token_escrow: TokenAccount,
    mint: Mint,
) -> None:
    if token_source.owner != bytes(signer):
        raise OFTError(OFTErrorCode.Unauthorized)
    if bytes(mint.address) != oft_store.token_mint:
        raise ValueError("mint is not the store's mint")
    if token_source.mint != oft_store.token_mint or token_escrow.mint != oft_store.token_mint:
        raise ValueError("token account holds another mint")
    if token_escrow.address != oft_store.token_escrow:
        raise ValueError("token_escrow is not the store's escrow")
    if token_escrow.owner != store_address(oft_store):
        raise ValueError("token_escrow is not controlled by the store")


def send(
    oft_store: OFTStore,
    peer: PeerConfig,
    signer: bytes,
    token_source: TokenAccount,
    token_escrow: TokenAccount,
    mint: Mint,
    params: SendParams,
    endpoint: Endpoint,
    now: int,
) -> tuple[MessagingReceipt, OFTReceipt, OFTSent]:
    """Debit ``token_source`` and send the tokens to ``peer``.

    Returns the endpoint's receipt, the amounts moved and the emitted event.
    """
    _check_accounts(oft_store, signer, token_source, token_escrow, mint)
    if oft_store.paused:
        raise OFTError(OFTErrorCode.Paused)

    amount_sent_ld, amount_received_ld, oft_fee_ld = compute_fee_and_adjust_amount(
        params.amount_ld, oft_store, mint, peer.fee_bps
    )
    if amount_received_ld < params.min_amount_ld:
        raise OFTError(OFTErrorCode.SlippageExceeded)
    if token_source.amount < amount_sent_ld:
        raise ValueError(f"insufficient funds: {token_source.amount} < {amount_sent_ld}")

    sender = store_address(oft_store)
    message = msg_codec.encode(
        params.to, oft_store.ld2sd(amount_received_ld), signer, params.compose_msg
    )
    enforced = peer.enforced_options.get_enforced_options(params.compose_msg)
    quoted = endpoint.quote(
        sender,
        params.dst_eid,
        peer.peer_address,
        message,
        enforced,
        params.options,
        params.lz_token_fee > 0,
    )
    if params.native_fee < quoted.native_fee or params.lz_token_fee < quoted.lz_token_fee:
        raise ValueError("insufficient messaging fee")

    if peer.outbound_rate_limiter is not None:
        peer.outbound_rate_limiter.try_consume(amount_received_ld, now)
    if peer.inbound_rate_limiter is not None:
        peer.inbound_rate_limiter.refill(amount_received_ld, now)

    if oft_store.oft_type == OFTType.Adapter:
        oft_store.tvl_ld += amount_received_ld
        _transfer_checked(token_source, token_escrow, mint, amount_sent_ld)
    else:
        token_source.burn(amount_sent_ld - oft_fee_ld)
        if oft_fee_ld > 0:
            _transfer_checked(token_source, token_escrow, mint, oft_fee_ld)

    receipt = endpoint.send(
        sender,
        params.dst_eid,
        peer.peer_address,
        message,
        enforced,
        params.options,
        params.native_fee,
        params.lz_token_fee,
    )
    event = OFTSent(
        guid=receipt.guid,
        dst_eid=params.dst_eid,
        from_=token_source.address,
        amount_sent_ld=amount_sent_ld,
        amount_received_ld=amount_received_ld,
    )
    return receipt, OFTReceipt(amount_sent_ld, amount_received_ld), event