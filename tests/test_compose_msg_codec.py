import pytest

from oftkit import compose_msg_codec


def test_compose_msg_codec():
    nonce = 123456789
    src_eid = 987654321
    amount_ld = 123456789
    compose_from = bytes([1]) * 32
    compose_msg = bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 0])
    encoded = compose_msg_codec.encode(nonce, src_eid, amount_ld, compose_from + compose_msg)
    assert len(encoded) == 20 + len(compose_from + compose_msg)
    assert compose_msg_codec.nonce(encoded) == nonce
    assert compose_msg_codec.src_eid(encoded) == src_eid
    assert compose_msg_codec.amount_ld(encoded) == amount_ld
    assert compose_msg_codec.compose_from(encoded) == compose_from
    assert compose_msg_codec.compose_msg(encoded) == compose_msg


def test_header_is_big_endian():
    encoded = compose_msg_codec.encode(1, 2, 3, b"")
    assert encoded == (
        b"\x00\x00\x00\x00\x00\x00\x00\x01"
        b"\x00\x00\x00\x02"
        b"\x00\x00\x00\x00\x00\x00\x00\x03"
    )


def test_compose_msg_empty_without_payload():
    encoded = compose_msg_codec.encode(5, 6, 7, bytes(32))
    assert compose_msg_codec.compose_msg(encoded) == b""
    assert compose_msg_codec.compose_from(encoded) == bytes(32)


def test_max_values_round_trip():
    encoded = compose_msg_codec.encode(2**64 - 1, 2**32 - 1, 2**64 - 1, bytes(32))
    assert compose_msg_codec.nonce(encoded) == 2**64 - 1
    assert compose_msg_codec.src_eid(encoded) == 2**32 - 1
    assert compose_msg_codec.amount_ld(encoded) == 2**64 - 1


def test_out_of_range_values_rejected():
    with pytest.raises(ValueError):
        compose_msg_codec.encode(2**64, 0, 0, b"")
    with pytest.raises(ValueError):
        compose_msg_codec.encode(0, 2**32, 0, b"")


def test_short_message_rejected():
    encoded = compose_msg_codec.encode(1, 2, 3, b"")
    with pytest.raises(ValueError):
        compose_msg_codec.compose_from(encoded)
    with pytest.raises(ValueError):
        compose_msg_codec.nonce(b"\x00" * 7)