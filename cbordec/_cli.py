"""cbordec command-line interface.

Usage:
    cbordec decode --input data.cbor
    echo a26161016162820203 | cbordec decode --hex
    cbordec decode --hex --format json --input dump.hex
    python3 -m cbordec version

Each top-level item is printed on its own line.
"""

from __future__ import annotations

import argparse
import binascii
import logging
import os
import sys
from typing import List, Optional

from . import (
    MAX_DEPTH,
    CborError,
    __version__,
    decode_all,
    diagnostic,
    item_to_json,
)

log = logging.getLogger("cbordec")


def _default_max_depth() -> int:
    raw = os.environ.get("CBORDEC_MAX_DEPTH")
    if not raw:
        return MAX_DEPTH
    try:
        return int(raw)
    except ValueError:
        log.warning("ignoring non-integer CBORDEC_MAX_DEPTH=%r", raw)
        return MAX_DEPTH


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbordec",
        description="cbordec — decode RFC 8949 CBOR",
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log decoder progress to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode CBOR items and print them")
    dec_p.add_argument("--input", "-i", metavar="FILE",
                       help="Read from FILE instead of stdin")
    dec_p.add_argument("--hex", action="store_true",
                       help="Input is hex text (whitespace ignored)")
    dec_p.add_argument("--format", "-f", choices=("diag", "json"), default="diag",
                       help="Output diagnostic notation (default) or JSON")
    dec_p.add_argument("--strict", action="store_true",
                       help="Fail on a bad item instead of printing the items before it")
    dec_p.add_argument("--max-depth", type=int, default=_default_max_depth(),
                       metavar="N", help="Maximum nesting depth (default %(default)s)")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read raw bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("cbordec: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _cmd_decode(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    if args.hex:
        raw = binascii.unhexlify(b"".join(raw.split()))
    log.debug("read %d byte(s)", len(raw))

    items = decode_all(raw, max_depth=args.max_depth, strict=args.strict)
    for item in items:
        if args.format == "json":
            print(item_to_json(item))
        else:
            print(diagnostic(item))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s: %(levelname)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"cbordec {__version__}")
        return

    try:
        if args.command == "decode":
            _cmd_decode(args)
    except CborError as e:
        print(f"cbordec: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except (binascii.Error, ValueError) as e:
        print(f"cbordec: bad hex input: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
