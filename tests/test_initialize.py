import pytest

from oftkit.errors import OFTError, OFTErrorCode
from oftkit.fees import Mint
from oftkit.initialize import DEFAULT_ENDPOINT_PROGRAM, init_oft
from oftkit.state import OFTType

MINT_ADDRESS = bytes([1]) * 32
ESCROW = bytes([2]) * 32
ENDPOINT = bytes([3]) * 32
ADMIN = bytes([4]) * 32


def mint(decimals: int = 9) -> Mint:
    return Mint(address=MINT_ADDRESS, decimals=decimals)


def test_init_sets_store_fields():
    store, _ = init_oft(mint(9), MINT_ADDRESS, ESCROW, OFTType.Adapter, ADMIN, 6, ENDPOINT)
    assert store.oft_type == OFTType.Adapter
    assert store.ld2sd_rate == 1000
    assert store.token_mint == MINT_ADDRESS
    assert store.token_escrow == ESCROW
    assert store.endpoint_program == ENDPOINT
    assert store.admin == ADMIN
    assert store.tvl_ld == 0
    assert store.default_fee_bps == 0
    assert store.paused is False
    assert store.pauser is None
    assert store.unpauser is None


def test_rate_converts_between_decimals():
    store, _ = init_oft(mint(8), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 6, ENDPOINT)
    assert store.ld2sd(store.sd2ld(12345)) == 12345
    assert store.remove_dust(store.sd2ld(7)) == store.sd2ld(7)


def test_equal_decimals_rate_is_one():
    store, _ = init_oft(mint(6), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 6, ENDPOINT)
    assert store.ld2sd_rate == 1


def test_default_endpoint():
    store, _ = init_oft(mint(), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 6, None)
    assert store.endpoint_program == DEFAULT_ENDPOINT_PROGRAM


def test_lz_receive_types_accounts():
    _, accounts = init_oft(mint(), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 6, ENDPOINT)
    assert accounts.token_mint == MINT_ADDRESS
    assert len(accounts.oft_store) == 32


def test_store_address_depends_on_escrow():
    _, first = init_oft(mint(), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 6, ENDPOINT)
    _, again = init_oft(mint(), MINT_ADDRESS, ESCROW, OFTType.Adapter, ADMIN, 4, ENDPOINT)
    _, other = init_oft(mint(), MINT_ADDRESS, bytes([9]) * 32, OFTType.Native, ADMIN, 6, ENDPOINT)
    assert first.oft_store == again.oft_store
    assert first.oft_store != other.oft_store


def test_shared_decimals_above_mint_decimals_rejected():
    with pytest.raises(OFTError) as info:
        init_oft(mint(6), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 8, ENDPOINT)
    assert info.value.code == OFTErrorCode.InvalidDecimals


def test_mint_address_mismatch_rejected():
    with pytest.raises(ValueError):
        init_oft(mint(), bytes([5]) * 32, ESCROW, OFTType.Native, ADMIN, 6, ENDPOINT)


def test_rate_overflow():
    with pytest.raises(OverflowError):
        init_oft(mint(30), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 0, ENDPOINT)


def test_largest_rate_fits():
    store, _ = init_oft(mint(19), MINT_ADDRESS, ESCROW, OFTType.Native, ADMIN, 0, ENDPOINT)
    assert store.ld2sd_rate == 10**19


def test_bad_admin_length_rejected():
    with pytest.raises(ValueError):
        init_oft(mint(), MINT_ADDRESS, ESCROW, OFTType.Native, b"short", 6, ENDPOINT)