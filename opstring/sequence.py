"""
OpString Sequence Model

The ordered list of OperationRecords is the source of truth. The string
form is a projection recomputed by codec.encode after every mutation.

Ids start at 1 and only ever grow. A removed id is never handed out
again, not even after a full replace.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from opstring.codec import encode


@dataclass(frozen=True)
class OperationRecord:
    """One operation in the sequence with its argument codes."""
    id: int
    operation: int
    values: tuple[int, ...] = field(default_factory=tuple)

    @property
    def width(self) -> int:
        """Number of code units this record occupies in the sequence."""
        return 1 + len(self.values)

    def as_dict(self) -> dict:
        return {"id": self.id, "operation": self.operation, "values": list(self.values)}

    def __repr__(self) -> str:
        return f"<Op#{self.id} {self.operation} {list(self.values)}>"


class SequenceModel:

    def __init__(self) -> None:
        self._records: list[OperationRecord] = []
        self._next_id = 1
        self._sequence = ""
        self._length = 0

    @property
    def records(self) -> list[OperationRecord]:
        return list(self._records)

    @property
    def sequence(self) -> str:
        return self._sequence

    @property
    def length(self) -> int:
        """Sequence length in code units."""
        return self._length

    @property
    def next_id(self) -> int:
        return self._next_id

    def _create(self, operation: int, values: Iterable[int]) -> OperationRecord:
        record = OperationRecord(self._next_id, operation, tuple(values))
        self._next_id += 1
        return record

    def append(self, operation: int, values: Iterable[int] = ()) -> OperationRecord:
        record = self._create(operation, values)
        self._records.append(record)
        self._refresh()
        return record

    def insert(self, index: int, operation: int, values: Iterable[int] = ()) -> OperationRecord:
        """Insert at `index`; an index past the end appends."""
        record = self._create(operation, values)
        self._records.insert(index, record)
        self._refresh()
        return record

    def remove(self, op_id: int) -> bool:
        position = self.index(op_id)
        if position is None:
            return False
        del self._records[position]
        self._refresh()
        return True

    def index(self, op_id: int) -> Optional[int]:
        for position, record in enumerate(self._records):
            if record.id == op_id:
                return position
        return None

    def replace(self, operations: Iterable[tuple[int, Iterable[int]]]) -> None:
        """Drop every record and rebuild from (operation, values) pairs."""
        self._records = [self._create(op, values) for op, values in operations]
        self._refresh()

    def _refresh(self) -> None:
        self._sequence = encode(self._records)
        self._length = sum(r.width for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"<SequenceModel: {len(self._records)} ops, next_id={self._next_id}>"
