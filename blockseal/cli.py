#!/usr/bin/env python3
"""
BlockSeal Command Line Interface

Usage:
    blockseal sign --data <text> [--key <key>]
    blockseal verify --data <text> --signature <sig> [--key <key>]
    blockseal hash --file <block.json>
    blockseal inspect --file <chain.json> [--key <key>] [--lenient]
    blockseal demo

The key defaults to the BLOCKSEAL_SECRET_KEY environment variable.
"""

import argparse
import json
import os
import sys

EXIT_OK = 0
EXIT_TAMPERED = 1
EXIT_ERROR = 2


def load_json(path: str):
    """Load JSON from file."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def resolve_key(args) -> str:
    if args.key is not None:
        return args.key
    return os.getenv("BLOCKSEAL_SECRET_KEY", "")


def cmd_sign(args):
    """Sign data and print the resulting block."""
    from blockseal import Verifier

    verifier = Verifier(resolve_key(args))
    block = verifier.create_block(args.data)
    print(json.dumps(block.to_dict(), indent=2))
    return EXIT_OK


def cmd_verify(args):
    """Verify a data/signature pair."""
    from blockseal import Verifier

    verifier = Verifier(resolve_key(args))
    if verifier.verify_data(args.data, args.signature):
        print("✓ VALID")
        return EXIT_OK
    print("✗ TAMPERED")
    return EXIT_TAMPERED


def cmd_hash(args):
    """Compute the content hash of a block file."""
    from blockseal import Block, hash_block

    block = Block.from_dict(load_json(args.file))
    print(f"block_hash: {hash_block(block)}")
    return EXIT_OK


def cmd_inspect(args):
    """Classify a chain of blocks stored as a JSON array."""
    from blockseal import Block, SerializationError, Status, Verifier, summarize

    raw = load_json(args.file)
    if not isinstance(raw, list):
        raise SerializationError("Serialization error: chain file must hold a JSON array")
    chain = [Block.from_dict(item) for item in raw]

    verifier = Verifier(resolve_key(args))
    classified = verifier.information(chain, strict=not args.lenient, max_workers=args.workers)
    summary = summarize(classified)

    if args.json:
        print(json.dumps({
            "information": [c.to_dict() for c in classified],
            "summary": summary.to_dict(),
        }, indent=2))
    else:
        marks = {Status.RECOVERED: "★", Status.VALID: "✓", Status.TAMPERED: "✗"}
        for item in classified:
            print(f"{marks[item.status]} {item.status.value:<9} {item.block.data}")
        print(f"\n{summary.total} block(s): {summary.recovered} recovered, "
              f"{summary.valid} valid, {summary.tampered} tampered", file=sys.stderr)

    return EXIT_OK if summary.tampered == 0 else EXIT_TAMPERED


def cmd_demo(args):
    """Run a demonstration of tamper recovery."""
    from dataclasses import replace
    from blockseal import Verifier

    verifier = Verifier("demo-key")
    chain = [verifier.create_block(f"data{i}") for i in range(1, 6)]

    print("=" * 60)
    print("BlockSeal Demonstration")
    print("=" * 60)

    scenarios = [
        ("Scenario 1: untouched chain", chain),
        ("Scenario 2: newest block rewritten", chain[:-1] + [replace(chain[-1], data="tampered5")]),
        ("Scenario 3: every block rewritten", [replace(b, data=f"tampered{i}") for i, b in enumerate(chain, 1)]),
    ]

    for title, blocks in scenarios:
        print("\n" + "-" * 60)
        print(title)
        print("-" * 60)
        for item in verifier.information(blocks):
            print(f"  {item.block.data:<10} {item.status.value}")

    print("\n" + "=" * 60)
    print("Demonstration complete.")
    print("=" * 60)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockseal",
        description="BlockSeal tamper classification CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  blockseal demo                          Run demonstration
  blockseal sign -d "hello" -k secret
  blockseal verify -d "hello" -s <sig> -k secret
  blockseal hash -f block.json
  blockseal inspect -f chain.json -k secret
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    sign_parser = subparsers.add_parser("sign", help="Sign data into a block")
    sign_parser.add_argument("-d", "--data", required=True, help="Data payload")
    sign_parser.add_argument("-k", "--key", help="Secret key (default: $BLOCKSEAL_SECRET_KEY)")

    verify_parser = subparsers.add_parser("verify", help="Verify a signature")
    verify_parser.add_argument("-d", "--data", required=True, help="Data payload")
    verify_parser.add_argument("-s", "--signature", required=True, help="Base64 signature")
    verify_parser.add_argument("-k", "--key", help="Secret key (default: $BLOCKSEAL_SECRET_KEY)")

    hash_parser = subparsers.add_parser("hash", help="Compute block hash")
    hash_parser.add_argument("-f", "--file", required=True, help="Block JSON file")

    inspect_parser = subparsers.add_parser("inspect", help="Classify a chain of blocks")
    inspect_parser.add_argument("-f", "--file", required=True, help="Chain JSON file (array of blocks)")
    inspect_parser.add_argument("-k", "--key", help="Secret key (default: $BLOCKSEAL_SECRET_KEY)")
    inspect_parser.add_argument("-w", "--workers", type=int, help="Parallel verification threads")
    inspect_parser.add_argument("--lenient", action="store_true", help="Treat malformed signatures as tampered")
    inspect_parser.add_argument("--json", action="store_true", help="Emit JSON output")

    subparsers.add_parser("demo", help="Run demonstration")

    return parser


def main(argv=None) -> int:
    from blockseal import BlockSealError

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "sign": cmd_sign,
        "verify": cmd_verify,
        "hash": cmd_hash,
        "inspect": cmd_inspect,
        "demo": cmd_demo,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        return handler(args)
    except BlockSealError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR
    except FileNotFoundError as e:
        print(f"ERROR: File not found - {e.filename}", file=sys.stderr)
        return EXIT_ERROR
    except json.JSONDecodeError as e:
        print(f"ERROR: JSON parse error - {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
