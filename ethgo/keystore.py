"""Encrypted key storage in the version 3 and version 4 keystore formats."""

from __future__ import annotations

import hashlib
import hmac
import json
import os
import re
import unicodedata
from collections.abc import Mapping
from typing import Any, Union

from Crypto.Cipher import AES
from Crypto.Protocol.KDF import scrypt as _scrypt_kdf

from .keccak import keccak256

_CIPHER = "aes-128-ctr"
_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")

JsonInput = Union[str, bytes, bytearray]


def _lookup(obj: Mapping[str, Any], name: str) -> Any:
    """Fetch a JSON member, matching the key case-insensitively when not exact."""
    if name in obj:
        return obj[name]
    lowered = name.lower()
    for key, value in obj.items():
        if key.lower() == lowered:
            return value
    return None


def _unhex(value: Any) -> bytes:
    if value is None:
        return b""
    if not isinstance(value, str) or not _HEX.fullmatch(value):
        raise ValueError(f"invalid hex value: {value!r}")
    return bytes.fromhex(value)


def _load_json(content: JsonInput) -> dict[str, Any]:
    try:
        doc = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid keystore json: {exc}") from exc
    if not isinstance(doc, dict):
        raise ValueError("keystore json must be an object")
    return doc


def _section(obj: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = _lookup(obj, name)
    if not isinstance(value, Mapping):
        raise ValueError(f"keystore section '{name}' missing")
    return value


def _dump(doc: Mapping[str, Any]) -> bytes:
    return json.dumps(doc, separators=(",", ":")).encode("utf-8")


def aes_ctr(key: bytes, data: bytes, iv: bytes) -> bytes:
    """Apply AES in counter mode with ``iv`` as the full initial counter block."""
    cipher = AES.new(bytes(key), AES.MODE_CTR, nonce=b"", initial_value=bytes(iv))
    return cipher.encrypt(bytes(data))


def _scrypt(secret: bytes, salt: bytes, n: int, r: int, p: int, dklen: int) -> bytes:
    return _scrypt_kdf(secret, salt, dklen, N=n, r=r, p=p)


def _scrypt_params(salt: bytes, n: int, p: int) -> dict[str, Any]:
    return {"dklen": 32, "salt": salt.hex(), "n": n, "p": p, "r": 8}


def apply_kdf(fn: str, password: bytes | str, params: Mapping[str, Any] | JsonInput) -> bytes:
    """Derive a key with the named KDF (``pbkdf2`` or ``scrypt``) and its parameters."""
    raw = password.encode() if isinstance(password, str) else bytes(password)
    if isinstance(params, (str, bytes, bytearray)):
        params = _load_json(params)
    if fn not in ("pbkdf2", "scrypt"):
        raise ValueError(f"kdf '{fn}' not supported")
    if not isinstance(params, Mapping):
        raise ValueError("kdf params missing")

    dklen = _lookup(params, "dklen") or 0
    salt = _unhex(_lookup(params, "salt"))
    if fn == "pbkdf2":
        if _lookup(params, "prf") != "hmac-sha256":
            raise ValueError("not found")
        rounds = _lookup(params, "c") or 0
        if rounds < 1 or dklen < 1:
            raise ValueError("invalid pbkdf2 parameters")
        return hashlib.pbkdf2_hmac("sha256", raw, salt, rounds, dklen)

    n = _lookup(params, "n") or 0
    r = _lookup(params, "r") or 0
    p = _lookup(params, "p") or 0
    if n < 2 or r < 1 or p < 1 or dklen < 1:
        raise ValueError("invalid scrypt parameters")
    return _scrypt(raw, salt, n, r, p, dklen)


def _check_key(key: bytes) -> bytes:
    if len(key) < 32:
        raise ValueError("derived key is shorter than 32 bytes")
    return key


def encrypt_v3(content: bytes, password: str, *args: int) -> bytes:
    """Encrypt ``content`` as a v3 keystore; optional args override scrypt N and P."""
    scrypt_n = args[0] if len(args) >= 1 else 1 << 18
    scrypt_p = args[1] if len(args) >= 2 else 1

    iv = os.urandom(AES.block_size)
    params = _scrypt_params(os.urandom(32), scrypt_n, scrypt_p)
    key = _check_key(apply_kdf("scrypt", password, params))

    cipher_text = aes_ctr(key[:16], content, iv)
    mac = keccak256(key[16:32], cipher_text)

    return _dump(
        {
            "id": "",
            "version": 3,
            "crypto": {
                "cipher": _CIPHER,
                "cipherparams": {"iv": iv.hex()},
                "ciphertext": cipher_text.hex(),
                "kdf": "scrypt",
                "kdfparams": params,
                "mac": mac.hex(),
            },
        }
    )


def decrypt_v3(content: JsonInput, password: str) -> bytes:
    """Decrypt a v3 keystore document."""
    doc = _load_json(content)
    if _lookup(doc, "version") != 3:
        raise ValueError("only version 3 supported")
    crypto = _section(doc, "crypto")
    cipher_name = _lookup(crypto, "cipher")
    if cipher_name != _CIPHER:
        raise ValueError(f"cipher {cipher_name} not supported")

    key = _check_key(apply_kdf(_lookup(crypto, "kdf"), password, _lookup(crypto, "kdfparams")))

    cipher_text = _unhex(_lookup(crypto, "ciphertext"))
    mac = keccak256(key[16:32], cipher_text)
    if not hmac.compare_digest(mac, _unhex(_lookup(crypto, "mac"))):
        raise ValueError("incorrect mac")

    cipher_params = _lookup(crypto, "cipherparams")
    iv = _unhex(_lookup(cipher_params, "iv")) if isinstance(cipher_params, Mapping) else b""
    return aes_ctr(key[:16], cipher_text, iv)


def normalize_password(password: str) -> str:
    """NFKD-normalise a password and drop single-byte control characters."""
    decomposed = unicodedata.normalize("NFKD", password)
    return "".join(
        char for char in decomposed if not (ord(char) <= 0x1F or ord(char) == 0x7F)
    )


def _checksum(key: bytes, cipher_text: bytes) -> bytes:
    return hashlib.sha256(key[16:32] + cipher_text).digest()


def encrypt_v4(content: bytes, password: str) -> bytes:
    """Encrypt ``content`` as a v4 keystore."""
    password = normalize_password(password)

    params = _scrypt_params(os.urandom(32), 1 << 18, 1)
    key = _check_key(apply_kdf("scrypt", password, params))

    iv = os.urandom(16)
    cipher_text = aes_ctr(key[:16], content, iv)

    return _dump(
        {
            "crypto": {
                "kdf": {"function": "scrypt", "params": params, "message": ""},
                "checksum": {
                    "function": "sha256",
                    "params": None,
                    "message": _checksum(key, cipher_text).hex(),
                },
                "cipher": {
                    "function": _CIPHER,
                    "params": {"iv": iv.hex()},
                    "message": cipher_text.hex(),
                },
            },
            "description": "",
            "pubkey": "",
            "path": "",
            "version": 4,
            "uuid": "",
        }
    )


def decrypt_v4(content: JsonInput, password: str) -> bytes:
    """Decrypt a v4 keystore document."""
    doc = _load_json(content)
    if _lookup(doc, "version") != 4:
        raise ValueError("only version 4 supported")
    crypto = _section(doc, "crypto")
    kdf = _section(crypto, "kdf")
    checksum = _section(crypto, "checksum")
    cipher = _section(crypto, "cipher")

    password = normalize_password(password)
    key = _check_key(apply_kdf(_lookup(kdf, "function"), password, _lookup(kdf, "params")))

    cipher_text = _unhex(_lookup(cipher, "message"))
    if not hmac.compare_digest(
        _checksum(key, cipher_text), _unhex(_lookup(checksum, "message"))
    ):
        raise ValueError("bad checksum")

    function = _lookup(cipher, "function")
    if function != _CIPHER:
        raise ValueError(f"cipher '{function}' not supported")
    cipher_params = _lookup(cipher, "params")
    if not isinstance(cipher_params, Mapping):
        raise ValueError("cipher params missing")
    return aes_ctr(key[:16], cipher_text, _unhex(_lookup(cipher_params, "iv")))