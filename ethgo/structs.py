"""Core Ethereum value types: addresses, hashes, blocks, transactions and logs."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional, Union

from .keccak import keccak256

_HEX = re.compile(r"[0-9a-fA-F]*")


class Network(IntEnum):
    """Chain identifiers of well known networks."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5


class _FixedBytes(bytes):
    SIZE: ClassVar[int] = 0

    def __new__(cls, value: Optional[bytes] = None):
        data = bytes(cls.SIZE) if value is None else bytes(value)
        if len(data) != cls.SIZE:
            raise ValueError(
                f"{cls.__name__} needs {cls.SIZE} bytes, got {len(data)}"
            )
        return super().__new__(cls, data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"


class Address(_FixedBytes):
    """A 20-byte Ethereum account address."""

    SIZE: ClassVar[int] = 20

    def __str__(self) -> str:
        lower = self.hex()
        digest = keccak256(lower.encode("ascii")).hex()
        return "0x" + "".join(
            char.upper() if int(nibble, 16) > 7 else char
            for char, nibble in zip(lower, digest)
        )

    def address(self) -> Address:
        return self

    def sign(self, digest: bytes) -> bytes:
        """An address holds no private key, so signing always fails."""
        size = len(bytes(digest))
        message = (
            f"an address cannot sign messages (address {self}, {size}-byte digest)"
        )
        raise TypeError(message)


class Hash(_FixedBytes):
    """A 32-byte hash."""

    SIZE: ClassVar[int] = 32

    def __str__(self) -> str:
        return "0x" + self.hex()

    def location(self) -> str:
        return str(self)


ZERO_ADDRESS = Address()
ZERO_HASH = Hash()


def complete_hex(text: str, size: int) -> str:
    """Left-pad or left-truncate hex digits to exactly ``size`` bytes, with ``0x`` prefix."""
    width = size * 2
    digits = text.removeprefix("0x")
    if len(digits) < width:
        digits = digits.rjust(width, "0")
    else:
        digits = digits[len(digits) - width:]
    return "0x" + digits


def _fixed_from_hex(text: str, size: int) -> bytes:
    digits = text.removeprefix("0x")
    if len(digits) != size * 2 or not _HEX.fullmatch(digits):
        raise ValueError(f"invalid {size}-byte hex value: {text!r}")
    return bytes.fromhex(digits)


def hex_to_address(text: str) -> Address:
    """Parse hex text into an address; malformed digits give the zero address."""
    try:
        return Address(_fixed_from_hex(complete_hex(text, Address.SIZE), Address.SIZE))
    except ValueError:
        return ZERO_ADDRESS


def hex_to_hash(text: str) -> Hash:
    """Parse hex text into a hash; malformed digits give the zero hash."""
    try:
        return Hash(_fixed_from_hex(complete_hex(text, Hash.SIZE), Hash.SIZE))
    except ValueError:
        return ZERO_HASH


def _right_aligned(data: bytes, size: int) -> bytes:
    tail = bytes(data)[-size:] if data else b""
    return tail.rjust(size, b"\x00")


def bytes_to_address(data: bytes) -> Address:
    """Use the last 20 bytes of ``data``, left-padded with zeros."""
    return Address(_right_aligned(data, Address.SIZE))


def bytes_to_hash(data: bytes) -> Hash:
    """Use the last 32 bytes of ``data``, left-padded with zeros."""
    return Hash(_right_aligned(data, Hash.SIZE))


class BlockNumber(int):
    """A block height, or one of the tags latest, earliest and pending."""

    LATEST: ClassVar[BlockNumber]
    EARLIEST: ClassVar[BlockNumber]
    PENDING: ClassVar[BlockNumber]

    _TAGS: ClassVar[dict[int, str]] = {-1: "latest", -2: "earliest", -3: "pending"}

    def __str__(self) -> str:
        value = int(self)
        if value in self._TAGS:
            return self._TAGS[value]
        if value < 0:
            raise ValueError("internal. blocknumber is negative")
        return f"0x{value:x}"

    def __repr__(self) -> str:
        return f"BlockNumber({int(self)})"

    def location(self) -> str:
        return str(self)


BlockNumber.LATEST = BlockNumber(-1)
BlockNumber.EARLIEST = BlockNumber(-2)
BlockNumber.PENDING = BlockNumber(-3)

LATEST = BlockNumber.LATEST
EARLIEST = BlockNumber.EARLIEST
PENDING = BlockNumber.PENDING

BlockNumberOrHash = Union[BlockNumber, Hash]


def encode_block(*args: int) -> BlockNumber:
    """Return the single block given, or ``latest`` when not exactly one is given."""
    if len(args) != 1:
        return LATEST
    return BlockNumber(args[0])


class TransactionType(IntEnum):
    LEGACY = 0
    ACCESS_LIST = 1
    DYNAMIC_FEE = 2


@dataclass
class AccessEntry:
    address: Address = ZERO_ADDRESS
    storage: list[Hash] = field(default_factory=list)

    def copy(self) -> AccessEntry:
        return AccessEntry(address=self.address, storage=list(self.storage))


AccessList = list[AccessEntry]


@dataclass
class Transaction:
    type: TransactionType = TransactionType.LEGACY
    hash: Hash = ZERO_HASH
    from_: Address = ZERO_ADDRESS
    to: Optional[Address] = None
    input: bytes = b""
    gas_price: int = 0
    gas: int = 0
    value: Optional[int] = None
    nonce: int = 0
    v: bytes = b""
    r: bytes = b""
    s: bytes = b""
    block_hash: Hash = ZERO_HASH
    block_number: int = 0
    txn_index: int = 0
    chain_id: Optional[int] = None
    access_list: AccessList = field(default_factory=list)
    max_priority_fee_per_gas: Optional[int] = None
    max_fee_per_gas: Optional[int] = None

    def copy(self) -> Transaction:
        return dataclasses.replace(
            self, access_list=[entry.copy() for entry in self.access_list]
        )


@dataclass
class Block:
    number: int = 0
    hash: Hash = ZERO_HASH
    parent_hash: Hash = ZERO_HASH
    sha3_uncles: Hash = ZERO_HASH
    transactions_root: Hash = ZERO_HASH
    state_root: Hash = ZERO_HASH
    receipts_root: Hash = ZERO_HASH
    miner: Address = ZERO_ADDRESS
    difficulty: Optional[int] = None
    extra_data: bytes = b""
    gas_limit: int = 0
    gas_used: int = 0
    timestamp: int = 0
    mix_hash: Hash = ZERO_HASH
    nonce: bytes = bytes(8)
    transactions: list[Transaction] = field(default_factory=list)
    transactions_hashes: list[Hash] = field(default_factory=list)
    uncles: list[Hash] = field(default_factory=list)
    base_fee: Optional[int] = None

    def copy(self) -> Block:
        return dataclasses.replace(
            self,
            transactions=[txn.copy() for txn in self.transactions],
            transactions_hashes=list(self.transactions_hashes),
            uncles=list(self.uncles),
        )


@dataclass
class CallMsg:
    from_: Address = ZERO_ADDRESS
    to: Optional[Address] = None
    data: bytes = b""
    gas_price: int = 0
    gas: Optional[int] = None
    value: Optional[int] = None


@dataclass
class LogFilter:
    address: list[Address] = field(default_factory=list)
    topics: list[list[Optional[Hash]]] = field(default_factory=list)
    block_hash: Optional[Hash] = None
    from_: Optional[BlockNumber] = None
    to: Optional[BlockNumber] = None

    def set_from_uint64(self, num: int) -> None:
        self.from_ = BlockNumber(num)

    def set_to_uint64(self, num: int) -> None:
        self.to = BlockNumber(num)

    def set_to(self, block: int) -> None:
        self.to = BlockNumber(block)


@dataclass
class Log:
    removed: bool = False
    log_index: int = 0
    transaction_index: int = 0
    transaction_hash: Hash = ZERO_HASH
    block_hash: Hash = ZERO_HASH
    block_number: int = 0
    address: Address = ZERO_ADDRESS
    topics: list[Hash] = field(default_factory=list)
    data: bytes = b""

    def copy(self) -> Log:
        return dataclasses.replace(self, topics=list(self.topics))


@dataclass
class Receipt:
    transaction_hash: Hash = ZERO_HASH
    transaction_index: int = 0
    contract_address: Address = ZERO_ADDRESS
    block_hash: Hash = ZERO_HASH
    from_: Address = ZERO_ADDRESS
    block_number: int = 0
    gas_used: int = 0
    cumulative_gas_used: int = 0
    logs_bloom: bytes = b""
    logs: list[Log] = field(default_factory=list)
    status: int = 0
    to: Optional[Address] = None

    def copy(self) -> Receipt:
        return dataclasses.replace(self, logs=[log.copy() for log in self.logs])


@dataclass
class OverrideAccount:
    nonce: Optional[int] = None
    code: Optional[bytes] = None
    balance: Optional[int] = None
    state: Optional[dict[Hash, Hash]] = None
    state_diff: Optional[dict[Hash, Hash]] = None


StateOverride = dict[Address, OverrideAccount]