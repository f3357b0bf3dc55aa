"""Hex text encodings used by the JSON-RPC wire format."""

from __future__ import annotations

import re

_HEX = re.compile(r"[0-9a-fA-F]*")
_UINT64_LIMIT = 1 << 64


def _as_text(value: str | bytes | bytearray) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode("ascii")
    return value


def decode_to_hex(text: str | bytes) -> bytes:
    """Decode a hex string with an optional ``0x`` prefix; odd lengths are left-padded."""
    digits = _as_text(text).removeprefix("0x")
    if len(digits) % 2:
        digits = "0" + digits
    if not _HEX.fullmatch(digits):
        raise ValueError(f"invalid hex string: {text!r}")
    return bytes.fromhex(digits)


def encode_to_hex(data: bytes) -> str:
    """Encode bytes as a ``0x`` prefixed lower-case hex string."""
    return "0x" + bytes(data).hex()


def encode_arg_big(value: int) -> str:
    """Encode an arbitrary integer as ``0x`` followed by its base-16 digits."""
    return f"0x{value:x}"


def decode_arg_big(text: str | bytes) -> int:
    """Decode hex text into an unsigned big-endian integer."""
    return int.from_bytes(decode_to_hex(text), "big")


def encode_arg_uint64(value: int) -> str:
    """Encode an unsigned 64-bit integer as ``0x`` prefixed hex."""
    if not 0 <= value < _UINT64_LIMIT:
        raise ValueError(f"value {value} does not fit in 64 bits")
    return f"0x{value:x}"


def decode_arg_uint64(text: str | bytes) -> int:
    """Decode ``0x`` prefixed hex into an unsigned 64-bit integer; empty means zero."""
    digits = _as_text(text).removeprefix("0x") or "0"
    if not _HEX.fullmatch(digits):
        raise ValueError(f"invalid uint64 hex value: {text!r}")
    number = int(digits, 16)
    if number >= _UINT64_LIMIT:
        raise ValueError(f"value {text!r} out of range for uint64")
    return number


def encode_arg_bytes(data: bytes) -> str:
    """Encode a byte string as ``0x`` prefixed hex."""
    return encode_to_hex(data)


def decode_arg_bytes(text: str | bytes) -> bytes:
    """Decode hex text into bytes; malformed input yields an empty value."""
    try:
        return decode_to_hex(text)
    except ValueError:
        return b""