"""
OpString Executor

Invokes registered callbacks for a sequence, in order.

Two entry points share one loop:
1. execute(records): the instance's own Sequence Model, using each
   record's pre-resolved argument codes
2. run(text): a caller-supplied string, parsed on the fly and not stored

For every operation:
- no callback registered -> skipped, no error
- otherwise each argument code is resolved through the value registry
  (unmapped codes become None) and the callback is called synchronously

Callbacks are trusted. If one raises, the exception propagates to the
caller and the remaining operations are not run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from opstring.codec import decode
from opstring.registry import SymbolTable
from opstring.sequence import OperationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Call:
    """One callback invocation."""
    operation: int
    args: tuple[Any, ...]
    id: Optional[int] = None

    def __repr__(self) -> str:
        rendered = ", ".join(repr(a) for a in self.args)
        return f"<Call {self.operation}({rendered})>"


@dataclass
class ExecutionResult:
    """What an execute() did."""
    success: bool
    calls: list[Call] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    def summary(self) -> str:
        lines = [
            f"OpString Execution {'SUCCESS' if self.success else 'REFUSED'}",
            f"  Calls:   {len(self.calls)}",
            f"  Skipped: {len(self.skipped)}",
        ]
        if self.skipped:
            lines.append(f"  Skipped codes: {sorted(set(self.skipped))}")
        return "\n".join(lines)

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        return (
            f"<ExecutionResult: {'OK' if self.success else 'REFUSED'} "
            f"calls={len(self.calls)} skipped={len(self.skipped)}>"
        )


class Executor:

    def __init__(self, table: SymbolTable) -> None:
        self._table = table

    def execute(self, records: Iterable[OperationRecord]) -> ExecutionResult:
        """Execute records from a Sequence Model."""
        return self._interpret(
            (record.id, record.operation, record.values) for record in records
        )

    def run(self, text: str) -> ExecutionResult:
        """Parse and execute `text` without storing it."""
        parsed = decode(text, self._table, register_unknown=False)
        return self._interpret((None, op, values) for op, values in parsed.operations)

    def _interpret(self, steps) -> ExecutionResult:
        result = ExecutionResult(success=True)
        values = self._table.values

        for op_id, operation, codes in steps:
            callback = self._table.operations.callback(operation)
            if callback is None:
                logger.debug("No operation registered for %d, skipping", operation)
                result.skipped.append(operation)
                continue
            args = tuple(values.resolve(code) for code in codes)
            callback(*args)
            result.calls.append(Call(operation, args, op_id))

        return result
