"""EIP-712 typed structured data: type encoding, message building and hashing."""

from __future__ import annotations

import dataclasses
import re
import types as _pytypes
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, Optional, TypeVar, Union, get_args, get_origin

from .encoding import decode_to_hex
from .keccak import keccak256
from .structs import Address

T = TypeVar("T")

_INT_TYPE = re.compile(r"(u?)int([0-9]*)")
_BYTES_TYPE = re.compile(r"bytes([0-9]+)")


@dataclass(frozen=True)
class _Length:
    size: int


Uint8 = Annotated[int, "uint8"]
Uint16 = Annotated[int, "uint16"]
Uint32 = Annotated[int, "uint32"]
Uint64 = Annotated[int, "uint64"]
Uint256 = Annotated[int, "uint256"]


def fixed_bytes(size: int) -> Any:
    """Annotation for a byte string of exactly ``size`` bytes."""
    return Annotated[bytes, _Length(size)]


def fixed_array(elem: Any, size: int) -> Any:
    """Annotation for a list holding exactly ``size`` elements of ``elem``."""
    return Annotated[list[elem], _Length(size)]


@dataclass
class EIP712Type:
    """A named member of an EIP-712 struct type."""

    name: str
    type: str


TypeMap = dict[str, list[EIP712Type]]


def _field_name(f: dataclasses.Field) -> str:
    return f.metadata.get("eip712") or f.name


def _field_type(f: dataclasses.Field) -> Any:
    """Return the declared type of a field; string annotations are not resolved."""
    if isinstance(f.type, str):
        raise TypeError(
            f"field '{f.name}' has a string annotation {f.type!r}; "
            "message types must be declared with evaluated annotations"
        )
    return f.type


def _strip_optional(tp: Any) -> Any:
    if get_origin(tp) in (Union, _pytypes.UnionType):
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _decode_type(tp: Any, result: TypeMap) -> str:
    if tp is Address:
        return "address"
    origin = get_origin(tp)
    if origin is Annotated:
        base, *meta = get_args(tp)
        for item in meta:
            if isinstance(item, str):
                return item
            if isinstance(item, _Length):
                if base is bytes:
                    return f"[{item.size}]byte"
                if get_origin(base) is list:
                    return f"{_decode_type(get_args(base)[0], result)}[{item.size}]"
        return _decode_type(base, result)
    stripped = _strip_optional(tp)
    if stripped is not tp:
        return _decode_type(stripped, result)
    if origin is list:
        return _decode_type(get_args(tp)[0], result) + "[]"
    if tp is bytes:
        return "bytes"
    if tp is str:
        return "string"
    if tp is int:
        return "uint256"
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _decode_struct(tp, result)
    raise TypeError(f"type {tp!r} not found")


def _decode_struct(cls: Any, result: TypeMap) -> str:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"struct expected but found {cls!r}")
    members = [
        EIP712Type(name=_field_name(f), type=_decode_type(_field_type(f), result))
        for f in dataclasses.fields(cls)
    ]
    result[cls.__name__] = members
    return cls.__name__


def _is_fixed_array(tp: Any) -> bool:
    tp = _strip_optional(tp)
    if get_origin(tp) is not Annotated:
        return False
    base, *meta = get_args(tp)
    return base is not bytes and any(isinstance(item, _Length) for item in meta)


def _element_to_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _struct_to_map(value)
    return value


def _struct_to_map(obj: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        name = _field_name(f)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            result[name] = _struct_to_map(value)
        elif isinstance(value, (list, tuple)):
            items = [_element_to_value(item) for item in value]
            result[name] = tuple(items) if _is_fixed_array(_field_type(f)) else items
        else:
            result[name] = value
    return result


def get_dependencies(primary: str, types: TypeMap) -> list[str]:
    """Return ``primary`` followed by the sorted struct types it references."""
    visited: set[str] = set()
    pending = deque([primary])
    deps: list[str] = []
    while pending:
        current = pending.popleft()
        for member in types.get(current, []):
            base = member.type.split("[", 1)[0]
            if base in types and base not in visited:
                deps.append(base)
                pending.append(base)
                visited.add(base)
    return [primary, *sorted(deps)]


def encode_type(primary: str, types: TypeMap) -> str:
    """Return the EIP-712 type string of ``primary`` and its dependencies."""
    return "".join(
        f"{dep}({','.join(f'{m.type} {m.name}' for m in types.get(dep, []))})"
        for dep in get_dependencies(primary, types)
    )


def _decode_hex_string(text: str) -> bytes:
    if not text.startswith("0x"):
        raise ValueError("0x prefix not found")
    return bytes.fromhex(text[2:])


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return decode_to_hex(value)
    raise TypeError(f"cannot use {value!r} as bytes")


def _encode_basic(typ: str, value: Any) -> bytes:
    match = _INT_TYPE.fullmatch(typ)
    if match:
        bits = int(match.group(2) or 256)
        if bits == 0 or bits > 256 or bits % 8:
            raise ValueError(f"invalid type {typ}")
        if isinstance(value, str):
            value = int(value, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"integer expected for {typ}, got {value!r}")
        if match.group(1):
            low, high = 0, 1 << bits
        else:
            low, high = -(1 << (bits - 1)), 1 << (bits - 1)
        if not low <= value < high:
            raise ValueError(f"value {value} out of range for {typ}")
        return (value % (1 << 256)).to_bytes(32, "big")
    if typ == "address":
        raw = _as_bytes(value)
        if len(raw) != 20:
            raise ValueError(f"invalid address {value!r}")
        return raw.rjust(32, b"\x00")
    if typ == "bool":
        if not isinstance(value, bool):
            raise TypeError(f"bool expected, got {value!r}")
        return int(value).to_bytes(32, "big")
    match = _BYTES_TYPE.fullmatch(typ)
    if match:
        size = int(match.group(1))
        if not 1 <= size <= 32:
            raise ValueError(f"invalid type {typ}")
        raw = _as_bytes(value)
        if len(raw) > size:
            raise ValueError(f"value too long for {typ}")
        return raw.ljust(32, b"\x00")
    raise ValueError(f"unsupported type {typ}")


def _encode_item(typ: str, types: TypeMap, value: Any) -> bytes:
    if typ.endswith("]"):
        sub_type = typ[: typ.rindex("[")]
        return keccak256(b"".join(_encode_item(sub_type, types, item) for item in value))
    if typ in types:
        if not isinstance(value, Mapping):
            raise TypeError(f"struct {typ} expects a mapping, got {value!r}")
        return hash_struct(typ, types, value)
    if typ == "string":
        if not isinstance(value, str):
            raise TypeError("string type not found")
        return keccak256(value.encode("utf-8"))
    if typ == "bytes":
        if isinstance(value, str):
            return keccak256(_decode_hex_string(value))
        if isinstance(value, (bytes, bytearray, memoryview)):
            return keccak256(bytes(value))
        raise TypeError(f"bytes expected, got {value!r}")
    return _encode_basic(typ, value)


def encode_data(primary: str, types: TypeMap, data: Mapping[str, Any]) -> bytes:
    """Encode the members of ``data`` in the order ``primary`` declares them."""
    parts = []
    for member in types.get(primary, []):
        if member.name not in data:
            raise ValueError(f"field '{member.name}' not found")
        parts.append(_encode_item(member.type, types, data[member.name]))
    return b"".join(parts)


def hash_struct(primary: str, types: TypeMap, data: Mapping[str, Any]) -> bytes:
    """Return keccak256(typeHash || encodeData) of a struct value."""
    type_hash = keccak256(encode_type(primary, types).encode("utf-8"))
    return keccak256(type_hash + encode_data(primary, types, data))


@dataclass
class EIP712Domain:
    """The domain separator fields; empty fields are left out of the hash."""

    name: str = ""
    version: str = ""
    verifying_contract: str = ""
    chain_id: Optional[int] = None
    salt: bytes = b""

    def _objs(self) -> tuple[list[EIP712Type], dict[str, Any]]:
        members: list[EIP712Type] = []
        data: dict[str, Any] = {}

        def add(name: str, typ: str, value: Any) -> None:
            members.append(EIP712Type(name=name, type=typ))
            data[name] = value

        if self.name:
            add("name", "string", self.name)
        if self.version:
            add("version", "string", self.version)
        if self.chain_id is not None:
            add("chainId", "uint256", self.chain_id)
        if self.verifying_contract:
            add("verifyingContract", "address", self.verifying_contract)
        if self.salt:
            add("salt", "bytes32", self.salt)
        return members, data

    def hash_struct(self) -> bytes:
        members, data = self._objs()
        return hash_struct("EIP712Domain", {"EIP712Domain": members}, data)


@dataclass
class EIP712TypedData:
    """A typed message together with its types and domain."""

    types: TypeMap
    primary_type: str
    domain: EIP712Domain
    message: dict[str, Any] = field(default_factory=dict)

    def hash(self) -> bytes:
        """Return the EIP-712 signing digest."""
        domain_hash = self.domain.hash_struct()
        message_hash = hash_struct(self.primary_type, self.types, self.message)
        return keccak256(b"\x19\x01" + domain_hash + message_hash)


class EIP712MessageBuilder(Generic[T]):
    """Derives EIP-712 types from a dataclass and builds typed messages from it."""

    def __init__(self, message_type: type[T], domain: EIP712Domain) -> None:
        self.types: TypeMap = {}
        self.primary_type = _decode_struct(message_type, self.types)
        self.domain = domain

    def get_encoded_type(self) -> str:
        return encode_type(self.primary_type, self.types)

    def build(self, obj: T) -> EIP712TypedData:
        return EIP712TypedData(
            types=self.types,
            primary_type=self.primary_type,
            domain=self.domain,
            message=_struct_to_map(obj),
        )