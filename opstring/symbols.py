"""
OpString Symbol Resolver

A Symbol is what callers hand us: a single character or an integer code.
Everything inside OpString works on Codes, integers in [0, 65535] that
match one UTF-16 code unit.

Classification quirk: a string made only of digits is an INTEGER symbol.
"5" means code 5, never the character '5' (code 53).
"""

from __future__ import annotations

import re
import struct
from enum import Enum, auto
from typing import Any, Iterable

MIN_CODE = 0
MAX_CODE = 65535

_DIGITS = re.compile(r"\d+", re.ASCII)


class SymbolKind(Enum):
    INVALID = auto()
    INTEGER = auto()
    STRING_CHAR = auto()


def classify(symbol: Any) -> SymbolKind:
    """Classify a user-supplied symbol."""
    if isinstance(symbol, bool):
        return SymbolKind.INVALID
    if isinstance(symbol, int):
        return SymbolKind.INTEGER
    if isinstance(symbol, str):
        if _DIGITS.fullmatch(symbol):
            return SymbolKind.INTEGER
        return SymbolKind.STRING_CHAR
    return SymbolKind.INVALID


def resolve_to_code(symbol: Any) -> Any:
    """Normalize a symbol to its code.

    STRING_CHAR symbols resolve to their first code unit. INVALID symbols
    are returned unchanged, as are digit strings too long to be a code;
    callers validate before trusting the result.
    """
    kind = classify(symbol)
    if kind is SymbolKind.STRING_CHAR:
        units = to_code_units(symbol)
        return units[0] if units else symbol
    if kind is SymbolKind.INTEGER:
        if isinstance(symbol, int):
            return symbol
        digits = symbol.lstrip("0") or "0"
        return int(digits) if len(digits) <= len(str(MAX_CODE)) else symbol
    return symbol


def to_code_units(text: str) -> list[int]:
    """Split text into UTF-16 code units (astral characters become pairs)."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return list(struct.unpack(f"<{len(raw) // 2}H", raw))


def from_code_units(codes: Iterable[int]) -> str:
    """Join UTF-16 code units back into a str, re-pairing surrogates."""
    codes = list(codes)
    raw = struct.pack(f"<{len(codes)}H", *codes)
    return raw.decode("utf-16-le", "surrogatepass")


def describe(value: Any) -> str:
    """repr() for log messages, bounded for huge integers and long strings."""
    if isinstance(value, int) and not isinstance(value, bool) and value.bit_length() > 64:
        return f"<integer of {value.bit_length()} bits>"
    if isinstance(value, str) and len(value) > 64:
        return f"{value[:32]!r}... ({len(value)} characters)"
    return repr(value)

def unit_length(text: str) -> int:
    """Length of text in UTF-16 code units."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def char_for_code(code: int) -> str:
    return from_code_units([code])
