# oftkit

`oftkit` models an omnichain fungible token (OFT) with plain Python objects. Every amount is an unsigned 64-bit integer. An amount outside that range raises an error.

## What is in the package

- `oftkit.msg_codec` encodes and decodes the cross-chain send message. The message holds the recipient, the amount in shared decimals and, when there is a compose payload, the sender followed by the payload. Its functions are `encode`, `send_to`, `amount_sd` and `compose_msg`.
- `oftkit.compose_msg_codec` encodes and decodes the compose message. The message holds a nonce, the source endpoint id, the amount in local decimals, `compose_from` and the payload.
- `oftkit.state` holds the persistent objects:
  - `OFTStore` carries `ld2sd`, `sd2ld` and `remove_dust`.
  - `OFTType` is either `Native` (mint and burn) or `Adapter` (lock in escrow).
  - `PeerConfig` holds the per-peer settings.
  - `EnforcedOptions` holds the options enforced on each send. Plain sends use at most 512 bytes; sends with a compose payload use at most 1024 bytes.
  - `RateLimiter` is a token bucket with `set_rate`, `set_capacity`, `refill` and `try_consume`.
  - `LzReceiveTypesAccounts` is also defined here.
- `oftkit.tokens.TokenAccount` is an in-memory balance with `transfer_to` and `burn`.
- `oftkit.fees` does the fee arithmetic:
  - `calculate_fee` computes the OFT fee in basis points. A peer's fee overrides the store default.
  - `TransferFee` and `Mint` describe a mint's transfer fee. `calculate_pre_fee_amount`, `get_pre_fee_amount_ld` and `get_post_fee_amount_ld` compute amounts before and after that fee.
  - `compute_fee_and_adjust_amount` returns `(amount_sent_ld, amount_received_ld, oft_fee_ld)`.
- `oftkit.initialize.init_oft` creates an `OFTStore` and its `LzReceiveTypesAccounts` for a mint and an escrow address.
- `oftkit.quote` provides `oft_version()` and `quote_oft(...)`. `quote_oft` returns a `QuoteOFTResult` made of `OFTLimits`, a list of `OFTFeeDetail` and an `OFTReceipt`.
- `oftkit.send` provides:
  - `Endpoint`, an in-memory messaging endpoint that charges flat fees, hands out nonces and GUIDs, keeps delegates and records every accepted `Packet` in `packets`.
  - `SendParams`, `quote_send` and `send`. `send` debits the source account, burns the tokens or locks them in escrow, and returns `(MessagingReceipt, OFTReceipt, OFTSent)`.
  - The helpers `assert_type_3`, `combine_options` and `store_address`.
- `oftkit.admin` provides the admin operations:
  - `set_oft_config` takes one of `SetAdmin`, `SetDelegate`, `SetDefaultFee`, `SetPaused`, `SetPauser` or `SetUnpauser`.
  - `set_pause` may be called only by the store's pauser or unpauser.
  - `set_peer_config` takes one of `PeerAddress`, `FeeBps`, `EnforcedOptionsParam`, `OutboundRateLimit` or `InboundRateLimit`, the last two with `RateLimitParams`. It creates the peer when it is given `None`.
  - `withdraw_fee` moves collected fees out of escrow. It never touches the locked value.
- `oftkit.events` defines the `OFTSent` and `OFTReceived` event records.

A rejected operation raises `oftkit.errors.OFTError`. Its `code` is an `OFTErrorCode`, for example `Paused`, `SlippageExceeded`, `RateLimitExceeded`, `InvalidFee`, `InvalidDecimals`, `InvalidTokenDest` or `Unauthorized`. Malformed input, such as wrong address lengths, insufficient balances or amounts out of range, raises `ValueError` or `OverflowError`.

Operations that depend on time take the current Unix time in seconds as an explicit `now` argument. These are the `RateLimiter` methods, `set_peer_config` and `send`.

## Installation

```
pip install .
pip install ".[test]"    # with the test dependencies
```

## Examples

Message codecs:

```python
from oftkit import compose_msg_codec, msg_codec

send_to = bytes([1] * 32)
sender = bytes(32)
message = msg_codec.encode(send_to, 123456789, sender, b"\x01\x02\x03")
assert msg_codec.send_to(message) == send_to
assert msg_codec.amount_sd(message) == 123456789
assert msg_codec.compose_msg(message) == sender + b"\x01\x02\x03"

compose = compose_msg_codec.encode(7, 30101, 1000, bytes([1] * 32) + b"hello")
assert compose_msg_codec.nonce(compose) == 7
assert compose_msg_codec.compose_msg(compose) == b"hello"
```

A native OFT with 9 local and 6 shared decimals and a 1% peer fee:

```python
from oftkit.admin import FeeBps, PeerAddress, set_peer_config, withdraw_fee
from oftkit.fees import Mint
from oftkit.initialize import init_oft
from oftkit.quote import quote_oft
from oftkit.send import Endpoint, SendParams, send, store_address
from oftkit.state import OFTType
from oftkit.tokens import TokenAccount

admin = bytes([9] * 32)
mint = Mint(address=bytes([2] * 32), decimals=9)
store, _ = init_oft(mint, mint.address, bytes([3] * 32), OFTType.Native, admin, 6)

peer = set_peer_config(store, None, admin, PeerAddress(bytes([4] * 32)), now=0)
set_peer_config(store, peer, admin, FeeBps(100), now=0)

quote = quote_oft(store, peer, mint, 1_234_567, 0)
assert quote.oft_receipt.amount_sent_ld == 1_234_000       # dust removed
assert quote.oft_receipt.amount_received_ld == 1_222_000
assert quote.oft_fee_details[0].description == "Cross Chain Fee"

source = TokenAccount(address=bytes([6] * 32), mint=mint.address, owner=admin, amount=2_000_000)
escrow = TokenAccount(address=store.token_escrow, mint=mint.address, owner=store_address(store))
endpoint = Endpoint(eid=30168)
params = SendParams(dst_eid=30101, to=bytes([5] * 32), amount_ld=1_234_567, min_amount_ld=1_200_000)

receipt, oft_receipt, event = send(store, peer, admin, source, escrow, mint, params, endpoint, now=0)
assert receipt.nonce == 1
assert source.amount == 766_000 and escrow.amount == 12_000
assert event.amount_received_ld == 1_222_000

dest = TokenAccount(address=bytes([7] * 32), mint=mint.address, owner=admin)
withdraw_fee(store, admin, escrow, dest, 12_000)
assert dest.amount == 12_000
```

## What the package does not do

- There is no receive operation. `OFTReceived` is defined, but nothing in the package produces it. The caller must decode incoming messages with `msg_codec` and credit the accounts.
- `Endpoint` only records outbound packets in memory. It does not deliver them anywhere.
- Store addresses and the default endpoint program id are SHA-256 digests of their seeds. They are not real chain addresses.
- Nothing is persisted. All state lives in the objects you hold.
- There is no command-line program.

## Running the tests

```
pytest
```