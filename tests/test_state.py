import pytest

from oftkit.errors import OFTError, OFTErrorCode
from oftkit.state import (
    ENFORCED_OPTIONS_SEND_AND_CALL_MAX_LEN,
    ENFORCED_OPTIONS_SEND_MAX_LEN,
    U64_MAX,
    EnforcedOptions,
    LzReceiveTypesAccounts,
    OFTStore,
    OFTType,
    PeerConfig,
    RateLimiter,
)


def make_store(rate=1000):
    return OFTStore(
        oft_type=OFTType.Native,
        ld2sd_rate=rate,
        token_mint=bytes([1]) * 32,
        token_escrow=bytes([2]) * 32,
        endpoint_program=bytes([3]) * 32,
        admin=bytes([4]) * 32,
    )


def test_store_defaults():
    store = make_store()
    assert store.tvl_ld == 0
    assert store.default_fee_bps == 0
    assert store.paused is False
    assert store.pauser is None and store.unpauser is None


@pytest.mark.parametrize("amount", [0, 1, 999, 1000, 123456, U64_MAX])
def test_remove_dust_invariants(amount):
    store = make_store()
    cleaned = store.remove_dust(amount)
    assert cleaned % store.ld2sd_rate == 0
    assert 0 <= amount - cleaned < store.ld2sd_rate
    assert store.sd2ld(store.ld2sd(amount)) == cleaned


def test_rate_one_is_identity():
    store = make_store(rate=1)
    assert store.ld2sd(777) == 777
    assert store.remove_dust(777) == 777


def test_sd2ld_overflow():
    store = make_store()
    with pytest.raises(OverflowError):
        store.sd2ld(U64_MAX)


def test_lz_receive_types_accounts_fields():
    accounts = LzReceiveTypesAccounts(oft_store=bytes(32), token_mint=bytes([9]) * 32)
    assert accounts.token_mint == bytes([9]) * 32


def test_set_capacity_fills_bucket():
    limiter = RateLimiter()
    limiter.set_capacity(100, now=50)
    assert limiter.tokens == limiter.capacity == 100
    assert limiter.last_refill_time == 50


def test_try_consume_and_exceed():
    limiter = RateLimiter()
    limiter.set_capacity(100, now=10)
    limiter.try_consume(30, now=10)
    assert limiter.tokens == 100 - 30
    with pytest.raises(OFTError) as info:
        limiter.try_consume(100, now=10)
    assert info.value.code is OFTErrorCode.RateLimitExceeded
    assert limiter.tokens == 100 - 30


def test_refill_over_time_capped_at_capacity():
    limiter = RateLimiter()
    limiter.set_capacity(100, now=0)
    limiter.set_rate(10, now=0)
    limiter.try_consume(100, now=0)
    limiter.refill(0, now=3)
    assert limiter.tokens == 3 * 10
    limiter.refill(0, now=1000)
    assert limiter.tokens == limiter.capacity
    assert limiter.last_refill_time == 1000


def test_refill_saturates():
    limiter = RateLimiter(capacity=U64_MAX, tokens=U64_MAX - 1, refill_per_second=U64_MAX)
    limiter.refill(U64_MAX, now=5)
    assert limiter.tokens == U64_MAX


def test_set_rate_refills_with_old_rate_first():
    limiter = RateLimiter(capacity=1000, tokens=0, refill_per_second=1, last_refill_time=0)
    limiter.set_rate(500, now=4)
    assert limiter.tokens == 4
    assert limiter.refill_per_second == 500


def test_extra_tokens_without_time_passing():
    limiter = RateLimiter(capacity=50, tokens=10, refill_per_second=7, last_refill_time=20)
    limiter.refill(15, now=20)
    assert limiter.tokens == 10 + 15


def test_negative_timestamp_rejected():
    with pytest.raises(ValueError):
        RateLimiter().refill(0, now=-1)
    with pytest.raises(ValueError):
        RateLimiter().set_capacity(5, now=-1)


def test_enforced_options_selection():
    options = EnforcedOptions(send=b"\x00\x03a", send_and_call=b"\x00\x03b")
    assert options.get_enforced_options(None) == b"\x00\x03a"
    assert options.get_enforced_options(b"") == b"\x00\x03b"
    assert options.get_enforced_options(b"payload") == b"\x00\x03b"


def test_enforced_options_length_limits():
    EnforcedOptions(send=bytes(ENFORCED_OPTIONS_SEND_MAX_LEN))
    with pytest.raises(ValueError):
        EnforcedOptions(send=bytes(ENFORCED_OPTIONS_SEND_MAX_LEN + 1))
    with pytest.raises(ValueError):
        EnforcedOptions(send_and_call=bytes(ENFORCED_OPTIONS_SEND_AND_CALL_MAX_LEN + 1))


def test_peer_config_defaults():
    peer = PeerConfig()
    assert peer.peer_address == bytes(32)
    assert peer.enforced_options == EnforcedOptions()
    assert peer.outbound_rate_limiter is None and peer.inbound_rate_limiter is None
    assert peer.fee_bps is None
    assert PeerConfig().enforced_options is not peer.enforced_options