"""Command that reads a block chain file and prints its block hashes."""

from __future__ import annotations

import argparse
import sys

from blockirc.block.block import BlockFormatError
from blockirc.block.chain import BlockChain, ChainError


def main(argv: list[str] | None = None) -> int:
    """Read the chain file named on the command line and print it."""
    parser = argparse.ArgumentParser(description="Print the blocks of a chain file.")
    parser.add_argument("chain_file", help="YAML file of ---separated blocks")
    args = parser.parse_args(argv)

    chain = BlockChain()
    try:
        chain.read_chain(args.chain_file)
    except ChainError as exc:
        print(f"read_chain: {exc}", file=sys.stderr)
    except (OSError, BlockFormatError) as exc:
        print(f"{args.chain_file}: {exc}", file=sys.stderr)
        return 1
    print(chain)
    return 0


if __name__ == "__main__":
    sys.exit(main())