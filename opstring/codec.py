"""
OpString Codec

Sequence Model <-> string.

encode is total: every record becomes its operation code unit followed
by its argument code units.

decode walks the code units of a string left to right:

    unit is an operation   -> start a new record
    unit is anything else  -> argument of the current record
                              (unknown units are registered as None values)
    no record started yet  -> unit dropped

Example, with operations {A, B} and values {a, b, c}:

    "xAaab?Bc"  ->  A(a, a, b, ?)  B(c)      'x' dropped, '?' registered
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from opstring.registry import SymbolRole, SymbolTable
from opstring.symbols import from_code_units, to_code_units

if TYPE_CHECKING:
    from opstring.sequence import OperationRecord

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """Parsed (operation, values) pairs plus the codes decoding registered."""
    operations: list[tuple[int, tuple[int, ...]]] = field(default_factory=list)
    registered: list[int] = field(default_factory=list)
    dropped: int = 0

    def __len__(self) -> int:
        return len(self.operations)


def encode(records: Iterable[OperationRecord]) -> str:
    units: list[int] = []
    for record in records:
        units.append(record.operation)
        units.extend(record.values)
    return from_code_units(units)


def decode(text: str, table: SymbolTable, register_unknown: bool = True) -> DecodeResult:
    """Parse `text` against the current registries.

    With register_unknown=False the value registry is left untouched and
    unknown argument units are still kept as arguments.
    """
    result = DecodeResult()
    current_op = None
    current_values: list[int] = []

    for code in to_code_units(text):
        entry = table.lookup(code)

        if entry.is_operation:
            if current_op is not None:
                result.operations.append((current_op, tuple(current_values)))
            current_op = code
            current_values = []
            continue

        if current_op is None:
            result.dropped += 1
            continue

        if entry.role is SymbolRole.UNKNOWN and register_unknown:
            table.adopt_unknown(code)
            result.registered.append(code)
        current_values.append(code)

    if current_op is not None:
        result.operations.append((current_op, tuple(current_values)))

    if result.dropped:
        logger.debug("Dropped %d leading unit(s) with no operation", result.dropped)
    return result
