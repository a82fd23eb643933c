import pytest

from blockirc.block.block import Block
from blockirc.block.cli import main
from blockirc.block.hexcodec import to_hex


def _doc(block):
    return (
        "---\n"
        f"version: {block.version}\n"
        f"timestamp: {block.timestamp}\n"
        f"previous: {to_hex(block.previous)}\n"
        f"merkle_root: {to_hex(block.merkle_root)}\n"
    )


def test_prints_chain(tmp_path, capsys):
    genesis = Block(timestamp=1)
    second = Block(timestamp=2, previous=genesis.digest())
    path = tmp_path / "chain.yaml"
    path.write_text(_doc(genesis) + _doc(second), encoding="utf-8")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == (
        f"00000000: {to_hex(genesis.digest())}\n"
        f"00000001: {to_hex(second.digest())}\n"
        "\n"
    )


def test_broken_link_reports_and_prints_prefix(tmp_path, capsys):
    genesis = Block(timestamp=1)
    bad = Block(timestamp=2, previous=b"\x05" * 32)
    path = tmp_path / "chain.yaml"
    path.write_text(_doc(genesis) + _doc(bad), encoding="utf-8")
    assert main([str(path)]) == 0
    captured = capsys.readouterr()
    assert captured.err.startswith("read_chain: append expected previous")
    assert captured.out == f"00000000: {to_hex(genesis.digest())}\n\n"


def test_missing_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / "absent.yaml")]) == 1
    assert "absent.yaml" in capsys.readouterr().err


def test_malformed_block_fails(tmp_path, capsys):
    path = tmp_path / "chain.yaml"
    path.write_text("---\nversion: 1\n", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "missing field" in capsys.readouterr().err


def test_requires_argument():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2