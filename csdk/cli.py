"""
CSDK CLI - Command-line tools for stored data.

Usage:
    csdk inspect <envelope_file>      Summarize a stored envelope
    csdk inspect <file> --records     Also print every record
"""

import argparse
import json
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="CSDK - Creature SDK tools",
        prog="csdk",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a stored envelope")
    inspect_parser.add_argument("envelope_file", help="Path to envelope JSON file")
    inspect_parser.add_argument("--records", action="store_true", help="Print every record")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "inspect":
        return cmd_inspect(args)

    parser.print_help()
    return 1


def cmd_inspect(args) -> int:
    """Summarize a stored envelope."""
    from .data.storage import EnvelopeFormatError, load_envelope_file

    try:
        envelope = load_envelope_file(args.envelope_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.envelope_file}")
        return 1
    except EnvelopeFormatError as e:
        print(f"Error: {e}")
        for error in e.errors:
            print(f"  - {error}")
        return 1

    root = envelope.serialized_object
    print(f"References: {len(envelope.referencing_array)}")
    print(f"Root type: {type(root).__name__}")
    if isinstance(root, (list, dict)):
        print(f"Root size: {len(root)}")

    if args.records:
        for index, record in enumerate(envelope.referencing_array):
            print(f"[{index}] {json.dumps(record)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
