import struct

import pytest

from blockirc.block.hashing import Hash256
from blockirc.block.hexcodec import to_hex
from blockirc.block.transaction import (
    OutPoint,
    Transaction,
    TransactionInput,
    TransactionOutput,
)


def test_defaults():
    tx = Transaction()
    assert tx.version == 1
    assert tx.timestamp == 0
    assert tx.inputs == []
    assert tx.outputs == []


def test_digest_is_32_bytes_and_stable():
    tx = Transaction()
    tx.add_output(10)
    assert len(tx.digest()) == 32
    assert tx.digest() == tx.digest()


def test_add_output_changes_digest():
    tx = Transaction()
    before = tx.digest()
    tx.add_output(5)
    assert tx.outputs == [TransactionOutput(5)]
    assert tx.digest() != before


def test_output_order_matters():
    first = Transaction()
    first.add_output(1)
    first.add_output(2)
    second = Transaction()
    second.add_output(2)
    second.add_output(1)
    assert first.digest() != second.digest()


def test_timestamp_changes_digest():
    tx = Transaction()
    other = Transaction(timestamp=42)
    assert tx.digest() != other.digest()


def test_inputs_change_digest():
    tx = Transaction()
    with_input = Transaction(inputs=[TransactionInput(OutPoint(bytes(32), 3))])
    assert tx.digest() != with_input.digest()


def test_outpoint_feed_writes_hash_then_little_endian_index():
    point = OutPoint(bytes(range(32)), 7)
    fed = Hash256()
    point.feed(fed)
    manual = Hash256()
    manual.write(bytes(range(32)))
    manual.write((7).to_bytes(4, "little"))
    assert fed.finalize() == manual.finalize()


def test_input_feed_matches_outpoint_feed():
    point = OutPoint(bytes(32), 9)
    via_input = Hash256()
    TransactionInput(point).feed(via_input)
    via_point = Hash256()
    point.feed(via_point)
    assert via_input.finalize() == via_point.finalize()


def test_output_feed_writes_u64_little_endian():
    fed = Hash256()
    TransactionOutput(300).feed(fed)
    manual = Hash256()
    manual.write((300).to_bytes(8, "little"))
    assert fed.finalize() == manual.finalize()


def test_output_str():
    assert str(TransactionOutput(7)) == "    amount: 7\n"


def test_transaction_str_layout():
    tx = Transaction(timestamp=12)
    tx.add_output(5)
    expected = (
        f"  tx _hash:    {to_hex(tx.digest())}\n"
        "  version:     1\n"
        "  timestamp:   12\n"
        "  inputs:\n"
        "  outputs:\n"
        "    amount: 5\n"
        "\n"
    )
    assert str(tx) == expected


def test_out_of_range_amount_is_rejected():
    tx = Transaction()
    tx.add_output(2**64)
    with pytest.raises(struct.error):
        tx.digest()