#!/usr/bin/env python3
"""
OpString command-line interface

Usage:
    opstring encode A:a,a,b B:a,b,c,c           Build a sequence from operations
    opstring decode AaabBabcc --ops AB          Show the records in a sequence
    opstring run AaabBabcc --op A=circle --value a=30 ...
                                                Execute with tracing callbacks
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap

from opstring import OpString, __version__
from opstring.symbols import char_for_code


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.DIM = C.RED = C.GREEN = C.YELLOW = C.CYAN = C.RESET = ""


def header(text: str) -> str:
    return f"\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}\n{C.BOLD}  {text}{C.RESET}\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}"


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


def dim(text: str) -> str:
    return f"{C.DIM}{text}{C.RESET}"


def show_code(code: int) -> str:
    char = char_for_code(code)
    shown = char if char.isprintable() else "?"
    return f"{shown!r}({code})"


# ============================================================================
# Argument parsing helpers
# ============================================================================

def parse_value(raw: str):
    """JSON scalars become typed values; anything else stays a string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def split_pairs(items: list[str], flag: str) -> list[tuple[str, str]]:
    pairs = []
    for item in items or []:
        symbol, sep, rest = item.partition("=")
        if not sep:
            raise SystemExit(f"{flag} expects SYMBOL=VALUE, got {item!r}")
        pairs.append((symbol, rest))
    return pairs


def make_tracer(name: str):
    def trace(*args):
        print(f"> {name}({', '.join(str(a) for a in args)})")
    return trace


# ============================================================================
# Commands
# ============================================================================

def cmd_encode(args) -> int:
    """Append each OP:V1,V2 item and print the resulting sequence."""
    ops = OpString({"max_sequence_length": args.max_length} if args.max_length else None)

    for item in args.operations:
        symbol, _, raw_values = item.partition(":")
        values = raw_values.split(",") if raw_values else []
        if ops.append(symbol, values) is None:
            print(fail(f"Could not append {item!r}"))
            return 1

    print(ops.get_sequence())
    return 0


def cmd_decode(args) -> int:
    """Decode a sequence against the given operation/value characters."""
    ops = OpString()
    for char in args.ops:
        ops.register_operation(char, make_tracer(char))
    for char in args.values:
        ops.register_value(char, char)

    known = set(ops.get_values())
    if not ops.set_sequence(args.sequence):
        return 1

    if args.json:
        print(json.dumps([r.as_dict() for r in ops.get_sequence_data()], indent=2))
        return 0

    print(header(f"DECODE: {args.sequence!r}"))
    records = ops.get_sequence_data()
    if records:
        print(ok(f"{len(records)} operation(s)"))
    else:
        print(fail("No operations found"))
    for record in records:
        values = ", ".join(show_code(v) for v in record.values)
        print(f"    [{record.id:3d}] {C.BOLD}{show_code(record.operation)}{C.RESET}  {values}")

    adopted = [code for code in ops.get_values() if code not in known]
    if adopted:
        print(f"\n  {C.YELLOW}Registered as None:{C.RESET} "
              f"{', '.join(show_code(c) for c in adopted)}")

    if args.verbose:
        print(dim(f"\n  Round trip: {ops.get_sequence()!r}"))
    return 0


def cmd_run(args) -> int:
    """Execute a sequence with tracing callbacks."""
    config = {
        "operations": {s: make_tracer(name) for s, name in split_pairs(args.op, "--op")},
        "values": {s: parse_value(v) for s, v in split_pairs(args.value, "--value")},
        "strict_mode": args.strict,
        "ignore_warnings": args.ignore_warnings,
    }
    if args.max_length is not None:
        config["max_sequence_length"] = args.max_length

    ops = OpString(config)
    if not ops.set_sequence(args.sequence):
        print(fail("Sequence refused"))

    result = ops.execute()

    if args.verbose:
        print(dim(result.summary()))
    return 0 if result.success else 1


# ============================================================================
# Entry point
# ============================================================================

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="opstring",
        description="Encode, decode and run OpString operation sequences.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
        examples:
          opstring encode A:a,a,b B:a,b,c,c
          opstring decode 'Ba?c' --ops AB --values abc
          opstring run AaabBabcc --op A=circle --op B=rect \\
              --value a=30 --value b=20 --value c=55
          opstring run BabccBabccBabcc --op B=rect --max-length 10 --strict
        """),
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    # encode
    p = sub.add_parser("encode", aliases=["enc"], help="Build a sequence string")
    p.add_argument("operations", nargs="+", help="Operations as OP or OP:V1,V2,...")
    p.add_argument("--max-length", type=int, help="Maximum sequence length")

    # decode
    p = sub.add_parser("decode", aliases=["dec"], help="Show the records in a sequence")
    p.add_argument("sequence", help="Sequence string")
    p.add_argument("--ops", default="", help="Characters that are operations")
    p.add_argument("--values", default="", help="Characters that are values")
    p.add_argument("-v", "--verbose", action="store_true", help="Show the re-encoded sequence")
    p.add_argument("--json", action="store_true", help="Print the records as JSON")

    # run
    p = sub.add_parser("run", help="Execute a sequence with tracing callbacks")
    p.add_argument("sequence", help="Sequence string")
    p.add_argument("--op", action="append", metavar="SYMBOL=NAME", help="Operation to trace")
    p.add_argument("--value", action="append", metavar="SYMBOL=VALUE", help="Value mapping")
    p.add_argument("--max-length", type=int, help="Maximum sequence length")
    p.add_argument("--strict", action="store_true", help="Refuse out-of-policy input")
    p.add_argument("--ignore-warnings", action="store_true", help="Silence lenient warnings")
    p.add_argument("-v", "--verbose", action="store_true", help="Show an execution summary")

    args = parser.parse_args(argv)

    if args.no_color:
        C.off()

    logging.basicConfig(level=logging.WARNING, format="%(message)s")

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "encode": cmd_encode, "enc": cmd_encode,
        "decode": cmd_decode, "dec": cmd_decode,
        "run": cmd_run,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
