"""Main CLI entry point for bitlayout."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the bitlayout CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="bitlayout",
        description="bitlayout: Bitfield Layout Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bitlayout --analyze registers.py                 Show field placement of each layout
  bitlayout --analyze registers.py --decode 8401   Decode bytes with each layout
  bitlayout --version                              Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze layout classes and show where each field lives",
    )

    parser.add_argument(
        "--decode",
        metavar="HEX",
        type=str,
        help="Hex bytes to decode with every analyzed layout",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log field binding and buffer sealing",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"bitlayout {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.decode is not None and not args.analyze:
        print("Error: --decode requires --analyze FILE", file=sys.stderr)
        return 1

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        data = None
        if args.decode is not None:
            try:
                data = bytes.fromhex(args.decode)
            except ValueError as e:
                print(f"Error: invalid hex bytes: {e}", file=sys.stderr)
                return 1

        try:
            analyze_file(file_path, data)
            return 0
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
