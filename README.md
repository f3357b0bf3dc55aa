# ethgo

A toolkit for working with Ethereum values from Python. It includes:

- Keccak-256 hashing (`ethgo.keccak`)
- Address, hash, block, transaction, receipt and log types, with checksummed address output (`ethgo.structs`)
- Hex encoding helpers for JSON-RPC style values (`ethgo.encoding`)
- Encryption and decryption of v3 and v4 keystores, using scrypt or pbkdf2 with AES-128-CTR (`ethgo.keystore`)
- EIP-712 typed-data type encoding and hashing (`ethgo.eip712`)
- A wrapper around the `solc` Solidity compiler (`ethgo.compiler`)
- A small command line tool (`ethgo.cli`)

## Installation

```
pip install .
```

To install the test suite's requirements as well:

```
pip install ".[test]"
```

## Usage

### Hashes and addresses

```python
from ethgo.keccak import keccak256
from ethgo.structs import BlockNumber, hex_to_address, hex_to_hash

digest = keccak256(b"hello")
addr = hex_to_address("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
print(addr)                      # 0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed
print(hex_to_hash("1"))          # 0x000...0001 (32 bytes)
print(BlockNumber.LATEST)        # latest
print(BlockNumber(16))           # 0x10
```

`Address` and `Hash` are `bytes` subclasses of fixed length (20 and 32 bytes). `hex_to_address` and `hex_to_hash` left-pad short input and keep the last digits of long input. `Block`, `Transaction`, `Receipt` and `Log` are dataclasses, and each has a `copy()` method.

### Hex encodings

```python
from ethgo.encoding import decode_arg_uint64, encode_arg_uint64, encode_to_hex

encode_arg_uint64(255)      # "0xff"
decode_arg_uint64("0x")     # 0
encode_to_hex(b"\x01\x02")  # "0x0102"
```

### Keystores

```python
from ethgo.keystore import decrypt_v3, encrypt_v3

password = "password"
blob = encrypt_v3(b"\x01\x02", password)
assert decrypt_v3(blob, password) == b"\x01\x02"
```

`encrypt_v3` accepts optional scrypt N and P values after the password. `encrypt_v4` and `decrypt_v4` handle the EIP-2335 format. Both apply `normalize_password` to the password first, which performs NFKD normalisation and removes control characters. A wrong password raises `ValueError`.

### EIP-712

```python
from dataclasses import dataclass, field

from ethgo.eip712 import EIP712Domain, EIP712MessageBuilder, Uint64
from ethgo.structs import Address


@dataclass
class Mail:
    amount: Uint64 = field(default=0, metadata={"eip712": "amount"})
    to: Address = Address()


builder = EIP712MessageBuilder(Mail, EIP712Domain(name="app"))
print(builder.get_encoded_type())   # Mail(uint64 amount,address to)
digest = builder.build(Mail(amount=1)).hash()
```

Message types are dataclasses. A field's `eip712` metadata entry renames it. `fixed_bytes(n)` and `fixed_array(elem, n)` annotate fixed-size members. Plain `int` maps to `uint256`.

### Solidity compiler

`ethgo.compiler.Solidity(path)` runs a local `solc` binary. Its `compile_code(code)` and `compile(*files)` methods parse the combined JSON output into `Output`, `Artifact` and `Source` objects. `download_solidity(version, dst, rename_dst)` downloads the static Linux `solc` release into the directory `dst`.

## Command line

```
ethgo version
```

This prints the installed version. `ethgo --help` lists the available commands.

## Limitations

The package does not include a node client. It has no JSON-RPC client, no HTTP, WebSocket or IPC transport, no subscriptions and no Etherscan client. It defines the value types that such a client would exchange (`Block`, `Transaction`, `Receipt`, `Log`, `CallMsg`, `LogFilter`), but it does not send them anywhere. The only command line subcommand is `version`.