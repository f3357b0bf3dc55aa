import pytest

from ethgo.keccak import keccak256


def test_empty_input_digest():
    assert keccak256().hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_empty_chunk_equals_no_chunk():
    assert keccak256(b"") == keccak256()


def test_chunks_are_concatenated():
    assert keccak256(b"ab", b"cd") == keccak256(b"abcd")
    assert keccak256(b"a", b"", b"bcd") == keccak256(b"abcd")


@pytest.mark.parametrize("data", [b"", b"\x01", b"hello world" * 20])
def test_digest_is_32_bytes(data):
    assert len(keccak256(data)) == 32


def test_different_inputs_differ():
    assert keccak256(b"\x01") != keccak256(b"\x02")


def test_accepts_bytearray():
    assert keccak256(bytearray(b"xyz")) == keccak256(b"xyz")