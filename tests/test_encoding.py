import pytest

from ethgo.encoding import (
    decode_arg_big,
    decode_arg_bytes,
    decode_arg_uint64,
    decode_to_hex,
    encode_arg_big,
    encode_arg_bytes,
    encode_arg_uint64,
    encode_to_hex,
)


@pytest.mark.parametrize("value", [0, 1, 255, 256, 2**200 + 7])
def test_big_round_trip(value):
    assert decode_arg_big(encode_arg_big(value)) == value


def test_big_zero_text():
    assert encode_arg_big(0) == "0x0"


@pytest.mark.parametrize("value", [0, 1, 4096, 2**64 - 1])
def test_uint64_round_trip(value):
    assert decode_arg_uint64(encode_arg_uint64(value)) == value


def test_uint64_empty_is_zero():
    assert decode_arg_uint64("0x") == decode_arg_uint64("0x0")
    assert decode_arg_uint64("") == decode_arg_uint64("0")


def test_uint64_without_prefix():
    assert decode_arg_uint64("ff") == decode_arg_uint64("0xff")


def test_uint64_overflow_rejected():
    with pytest.raises(ValueError):
        decode_arg_uint64("0x1" + "0" * 16)


@pytest.mark.parametrize("text", ["0xzz", "+1", "0x 1", "0x1_0"])
def test_uint64_invalid_rejected(text):
    with pytest.raises(ValueError):
        decode_arg_uint64(text)


@pytest.mark.parametrize("value", [-1, 2**64])
def test_uint64_encode_out_of_range(value):
    with pytest.raises(ValueError):
        encode_arg_uint64(value)


@pytest.mark.parametrize("data", [b"", b"\x00", b"\x01\x02\x03", bytes(range(256))])
def test_bytes_round_trip(data):
    assert decode_arg_bytes(encode_arg_bytes(data)) == data
    assert decode_to_hex(encode_to_hex(data)) == data


def test_encode_to_hex_format():
    assert encode_to_hex(b"\x01\x02") == "0x0102"


def test_odd_length_is_padded():
    assert decode_to_hex("0x1") == decode_to_hex("0x01")
    assert decode_to_hex("abc") == decode_to_hex("0x0abc")


def test_accepts_bytes_input():
    assert decode_to_hex(b"0x0102") == decode_to_hex("0x0102")


def test_decode_to_hex_invalid():
    with pytest.raises(ValueError):
        decode_to_hex("0xgg")


def test_decode_arg_bytes_swallows_errors():
    assert decode_arg_bytes("0xzz") == b""


def test_big_accepts_odd_hex():
    assert decode_arg_big("0x1") == decode_arg_big("0x01")