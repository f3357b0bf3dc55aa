import pytest

from ethgo.structs import (
    EARLIEST,
    LATEST,
    PENDING,
    ZERO_ADDRESS,
    ZERO_HASH,
    AccessEntry,
    Address,
    Block,
    BlockNumber,
    Hash,
    Log,
    LogFilter,
    Network,
    Receipt,
    Transaction,
    TransactionType,
    bytes_to_address,
    bytes_to_hash,
    complete_hex,
    encode_block,
    hex_to_address,
    hex_to_hash,
)


def _address(first: int) -> Address:
    return Address(bytes([first]) + bytes(19))


def _hash(first: int) -> Hash:
    return Hash(bytes([first]) + bytes(31))


@pytest.mark.parametrize(
    "src, dst",
    [
        (
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        ),
        (
            "0xfb6916095ca1df60bb79ce92ce3ea74c37c5d359",
            "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
        ),
        (
            "0xdbf03b407c01e7cd3cbea99509d93f8dddc8c6fb",
            "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
        ),
        (
            "0xd1220a0cf47c7b9be7a2e6ba89f429762e7b9adb",
            "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
        ),
    ],
)
def test_address_checksum(src, dst):
    assert str(hex_to_address(src)) == dst


def test_address_hex_to_string():
    expected = "0x0000000000000000000000000000000000000001"
    assert str(hex_to_address("0x1")) == expected
    assert str(hex_to_address("00000000000000000000000000000000000000001")) == expected
    assert str(hex_to_address("0000000000000000000000000000000000000001")) == expected


def test_hash_hex_to_string():
    assert str(hex_to_hash("1")) == (
        "0x0000000000000000000000000000000000000000000000000000000000000001"
    )


def test_hash_location_is_string():
    h = hex_to_hash("0xab")
    assert h.location() == str(h)


def test_hex_to_address_invalid_gives_zero():
    assert hex_to_address("0xzz") == ZERO_ADDRESS
    assert hex_to_hash("0xzz") == ZERO_HASH


def test_checksum_parses_back():
    addr = hex_to_address("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
    assert hex_to_address(str(addr)) == addr


def test_address_wrong_length():
    with pytest.raises(ValueError):
        Address(b"\x01")
    with pytest.raises(ValueError):
        Hash(bytes(20))


def test_zero_values():
    assert Address() == bytes(20)
    assert Hash() == bytes(32)


def test_bytes_to_address_pads_and_truncates():
    assert bytes_to_address(b"\x01") == Address(bytes(19) + b"\x01")
    long = bytes(range(1, 26))
    assert bytes_to_address(long) == Address(long[-20:])
    assert bytes_to_address(b"") == ZERO_ADDRESS


def test_bytes_to_hash_pads_and_truncates():
    assert bytes_to_hash(b"\x02") == Hash(bytes(31) + b"\x02")
    long = bytes(range(40))
    assert bytes_to_hash(long) == Hash(long[-32:])


def test_address_is_its_own_address():
    addr = _address(1)
    assert addr.address() is addr


def test_address_cannot_sign():
    with pytest.raises(TypeError):
        _address(1).sign(b"\x00" * 32)


def test_complete_hex():
    assert complete_hex("0x1", 2) == "0x0001"
    assert complete_hex("123456", 2) == "0x3456"


def test_block_number_tags():
    assert str(BlockNumber(-1)) == "latest"
    assert BlockNumber(-2).location() == "earliest"
    assert BlockNumber(-3).location() == "pending"
    assert (LATEST, EARLIEST, PENDING) == (BlockNumber(-1), BlockNumber(-2), BlockNumber(-3))
    assert BlockNumber.LATEST == -1


def test_block_number_hex():
    assert str(BlockNumber(16)) == "0x10"
    assert BlockNumber(0).location() == "0x0"


def test_block_number_negative_fails():
    with pytest.raises(ValueError):
        str(BlockNumber(-10))


def test_encode_block():
    assert encode_block() == LATEST
    assert encode_block(5) == BlockNumber(5)
    assert encode_block(1, 2) == LATEST


def test_network_ids():
    assert Network.MAINNET == 1
    assert Network(5) is Network.GOERLI


def test_block_copy():
    b = Block(difficulty=1, transactions=[], extra_data=b"\x01\x02")
    b1 = b.copy()
    assert b1 == b
    assert b1.transactions is not b.transactions


def test_transaction_copy():
    txn = Transaction(
        gas_price=10,
        input=b"\x01\x02",
        v=b"\x01\x02",
        r=b"\x01\x02",
        s=b"\x01\x02",
        access_list=[AccessEntry(address=_address(1), storage=[_hash(1)])],
    )
    txn1 = txn.copy()
    assert txn1 == txn
    txn1.access_list[0].storage.append(_hash(2))
    assert txn.access_list[0].storage == [_hash(1)]
    assert txn.type is TransactionType.LEGACY


def test_receipt_copy():
    r = Receipt(
        logs_bloom=b"\x01\x02",
        logs=[Log(log_index=1, topics=[_hash(1)])],
        gas_used=10,
    )
    rr = r.copy()
    assert rr == r
    rr.logs[0].topics.append(_hash(2))
    assert r.logs[0].topics == [_hash(1)]


def test_log_copy():
    log = Log(data=b"\x01\x02", block_hash=_hash(1))
    copied = log.copy()
    assert copied == log
    assert copied.topics is not log.topics


def test_log_filter_setters():
    f = LogFilter()
    f.set_from_uint64(3)
    f.set_to_uint64(9)
    assert (f.from_, f.to) == (BlockNumber(3), BlockNumber(9))
    f.set_to(LATEST)
    assert str(f.to) == "latest"