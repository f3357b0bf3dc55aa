"""Ethereum toolkit: primitives, hex encodings, keystores, EIP-712 typed data and a solc driver."""

__version__ = "0.1.3"

__all__ = [
    "keccak",
    "encoding",
    "structs",
    "keystore",
    "eip712",
    "compiler",
    "version",
    "cli",
]