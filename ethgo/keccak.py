"""Legacy Keccak-256 hashing."""

from Crypto.Hash import keccak


def keccak256(*args: bytes) -> bytes:
    """Return the Keccak-256 digest of the concatenation of ``args``."""
    hasher = keccak.new(digest_bits=256)
    for chunk in args:
        hasher.update(bytes(chunk))
    return hasher.digest()