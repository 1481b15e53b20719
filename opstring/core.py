"""
OpString Core

OpString owns the registries, the Sequence Model and the error policy,
and is the only public entry point. Every method validates first,
reports through ErrorPolicy, and signals failure through its return
value. Nothing here raises for bad input.

Usage:
    ops = OpString({
        "operations": {"A": circle, "B": rect},
        "values": {"a": 30, "b": 20, "c": 55},
        "sequence": "AaabBabcc",
    })
    ops.execute()              # circle(30, 30, 20); rect(30, 20, 55, 55)

    op_id = ops.append("A", ["a", "a", "b"])
    ops.get_sequence()         # "AaabBabccAaab"
    ops.remove(op_id)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from opstring import __version__
from opstring.codec import decode
from opstring.config import OpStringConfig
from opstring.executor import ExecutionResult, Executor
from opstring.registry import LabelRegistry, OperationRegistry, SymbolTable, ValueRegistry
from opstring.sequence import OperationRecord, SequenceModel
from opstring.symbols import char_for_code, describe, resolve_to_code, unit_length
from opstring.validation import (
    MISSING,
    ErrorPolicy,
    check_callback,
    check_flag,
    check_found,
    check_id,
    check_index,
    check_label,
    check_length,
    check_mapping,
    check_max_length,
    check_not_empty,
    check_sequence,
    check_symbol,
    check_symbols,
    check_value_provided,
    first_failure,
)

logger = logging.getLogger(__name__)

Symbol = Union[str, int]


class OpString:
    """Operation sequence codec and executor."""

    version = __version__

    def __init__(self, config: Union[OpStringConfig, Mapping, None] = None) -> None:
        self._operations = OperationRegistry()
        self._values = ValueRegistry()
        self._labels = LabelRegistry()
        self._table = SymbolTable(self._operations, self._values)
        self._model = SequenceModel()
        self._executor = Executor(self._table)
        self._max_sequence_length: Optional[int] = None
        self._policy = ErrorPolicy()

        if config is not None:
            self._configure(config)

    def _configure(self, config: Union[OpStringConfig, Mapping]) -> None:
        """Apply construction-time config; malformed fields keep their defaults."""
        action = "configure OpString"
        problems = []
        if isinstance(config, Mapping):
            config, problems = OpStringConfig.from_mapping(config)
        elif not isinstance(config, OpStringConfig):
            self._policy.allows(check_mapping(config, "config"), action)
            return

        # Policy flags first so every later report follows them.
        if self._policy.allows(check_flag(config.strict_mode, "strict_mode"), action):
            self._policy.strict_mode = config.strict_mode
        if self._policy.allows(check_flag(config.ignore_warnings, "ignore_warnings"), action):
            self._policy.ignore_warnings = config.ignore_warnings

        for problem in problems:
            self._policy.allows(problem, action)

        if config.max_sequence_length is not None:
            self.set_max_sequence_length(config.max_sequence_length)
        if config.operations is not None:
            self.register_operations(config.operations)
        if config.values is not None:
            self.register_values(config.values)
        if config.labels is not None:
            self.register_labels(config.labels)
        if config.sequence is not None:
            self.set_sequence(config.sequence)

    @property
    def strict_mode(self) -> bool:
        return self._policy.strict_mode

    @property
    def ignore_warnings(self) -> bool:
        return self._policy.ignore_warnings

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def register_operation(self, symbol: Symbol, callback: Callable[..., Any]) -> bool:
        check = first_failure(check_symbol(symbol), check_callback(callback))
        if not self._policy.allows(check, f"register the operation {describe(symbol)}"):
            return False
        self._operations.register(resolve_to_code(symbol), callback)
        return True

    def register_operations(self, operations: Mapping) -> bool:
        """Register each entry in order; True only if all of them succeeded."""
        if not self._policy.allows(check_mapping(operations, "operations"), "register operations"):
            return False
        results = [self.register_operation(s, fn) for s, fn in operations.items()]
        return all(results)

    def set_operations(self, operations: Mapping) -> bool:
        if not self._policy.allows(check_mapping(operations, "operations"), "set operations"):
            return False
        self._operations.clear()
        return self.register_operations(operations)

    def get_operations(self) -> dict[int, Callable[..., Any]]:
        return self._operations.entries

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def register_value(self, symbol: Symbol, value: Any = MISSING) -> bool:
        """Map a symbol to a value. None is a legal value; omitting it is not."""
        check = first_failure(check_symbol(symbol), check_value_provided(value))
        if not self._policy.allows(check, f"register the value {describe(symbol)}"):
            return False
        self._values.register(resolve_to_code(symbol), value)
        return True

    def register_values(self, values: Mapping) -> bool:
        if not self._policy.allows(check_mapping(values, "values"), "register values"):
            return False
        results = [self.register_value(s, v) for s, v in values.items()]
        return all(results)

    def set_values(self, values: Mapping) -> bool:
        if not self._policy.allows(check_mapping(values, "values"), "set values"):
            return False
        self._values.clear()
        return self.register_values(values)

    def get_values(self) -> dict[int, Any]:
        return self._values.entries

    def get_char_code_for_value(self, value: Any) -> Optional[int]:
        return self._values.code_for(value)

    def get_char_for_value(self, value: Any) -> Optional[str]:
        code = self._values.code_for(value)
        return None if code is None else char_for_code(code)

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------

    def register_label(self, label: str, symbol: Symbol) -> bool:
        check = first_failure(check_label(label), check_symbol(symbol))
        if not self._policy.allows(check, f"register the label {describe(label)}"):
            return False
        self._labels.register(label, resolve_to_code(symbol))
        return True

    def register_labels(self, labels: Mapping) -> bool:
        if not self._policy.allows(check_mapping(labels, "labels"), "register labels"):
            return False
        results = [self.register_label(label, s) for label, s in labels.items()]
        return all(results)

    def set_labels(self, labels: Mapping) -> bool:
        if not self._policy.allows(check_mapping(labels, "labels"), "set labels"):
            return False
        self._labels.clear()
        return self.register_labels(labels)

    def get_labels(self) -> dict[str, int]:
        return self._labels.entries

    def get_char_code_for_label(self, label: str) -> Optional[int]:
        if not self._policy.allows(check_label(label), f"look up the label {describe(label)}"):
            return None
        return self._labels.code_for(label)

    def get_char_for_label(self, label: str) -> Optional[str]:
        code = self.get_char_code_for_label(label)
        return None if code is None else char_for_code(code)

    # ------------------------------------------------------------------
    # Sequence Model
    # ------------------------------------------------------------------

    def append(self, operation: Symbol, values: Optional[list] = None) -> Optional[int]:
        """Add an operation at the end. Returns its id, or None if refused."""
        return self._add("append", None, operation, values)

    def insert(self, index: int, operation: Symbol, values: Optional[list] = None) -> Optional[int]:
        """Add an operation at `index`. An index past the end appends."""
        action = f"insert the operation {describe(operation)} at index {describe(index)}"
        if not self._policy.allows(check_index(index), action):
            return None
        return self._add("insert", index, operation, values)

    def prepend(self, operation: Symbol, values: Optional[list] = None) -> Optional[int]:
        return self._add("prepend", 0, operation, values)

    def _add(self, verb: str, index: Optional[int], operation: Symbol,
             values: Optional[list]) -> Optional[int]:
        if values is None:
            values = []
        action = f"{verb} the operation {describe(operation)}"
        check = first_failure(check_symbol(operation), check_symbols(values))
        if not self._policy.allows(check, action):
            return None

        op_code = resolve_to_code(operation)
        codes = [resolve_to_code(v) for v in values]

        projected = self._model.length + 1 + len(codes)
        if not self._policy.allows(
            check_length(projected, self._max_sequence_length), action
        ):
            return None

        if index is None:
            record = self._model.append(op_code, codes)
        else:
            record = self._model.insert(index, op_code, codes)
        return record.id

    def remove(self, op_id: int) -> bool:
        action = f"remove the operation with id {describe(op_id)}"
        if not self._policy.allows(check_id(op_id), action):
            return False
        found = self._model.index(op_id) is not None
        if not self._policy.allows(check_found(found, op_id), action):
            return False
        return self._model.remove(op_id)

    def index(self, op_id: int) -> Optional[int]:
        """Current position of the operation with `op_id`, or None."""
        action = f"find the index of the operation with id {describe(op_id)}"
        if not self._policy.allows(check_id(op_id), action):
            return None
        position = self._model.index(op_id)
        self._policy.allows(check_found(position is not None, op_id), action)
        return position

    def get_next_id(self) -> int:
        return self._model.next_id

    # ------------------------------------------------------------------
    # Sequence string
    # ------------------------------------------------------------------

    def set_sequence(self, sequence: str) -> bool:
        """Replace the whole Sequence Model by decoding `sequence`.

        Units that are neither operations nor values are registered as
        None values while decoding.
        """
        action = f"set the sequence to {describe(sequence)}"
        if not self._policy.allows(check_sequence(sequence), action):
            return False
        length_check = check_length(unit_length(sequence), self._max_sequence_length)
        if not self._policy.allows(length_check, action, degrade=True):
            return False

        parsed = decode(sequence, self._table)
        if parsed.registered:
            logger.debug("Decoding registered unknown symbols %s", parsed.registered)
        self._model.replace(parsed.operations)
        return True

    def get_sequence(self) -> str:
        return self._model.sequence

    def get_sequence_data(self) -> list[OperationRecord]:
        return self._model.records

    def set_max_sequence_length(self, max_sequence_length: Optional[int]) -> bool:
        """Set the length limit in characters; None removes it."""
        action = f"set 'max_sequence_length' to {describe(max_sequence_length)}"
        if not self._policy.allows(check_max_length(max_sequence_length), action):
            return False
        self._max_sequence_length = max_sequence_length
        return True

    def get_max_sequence_length(self) -> Optional[int]:
        return self._max_sequence_length

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, sequence: Optional[str] = None) -> ExecutionResult:
        """Execute the instance's sequence, or `sequence` when given.

        A given sequence is parsed on the fly and not stored.
        """
        if sequence is None:
            text, length = self._model.sequence, self._model.length
        else:
            if not self._policy.allows(check_sequence(sequence), f"execute {describe(sequence)}"):
                return ExecutionResult(success=False)
            text, length = sequence, unit_length(sequence)

        if not self._policy.allows(check_not_empty(text), "execute the sequence"):
            return ExecutionResult(success=False)

        action = f"execute the sequence {describe(text)}"
        length_check = check_length(length, self._max_sequence_length)
        if not self._policy.allows(length_check, action, degrade=True):
            return ExecutionResult(success=False)

        if sequence is None:
            return self._executor.execute(self._model.records)
        return self._executor.run(sequence)

    def __repr__(self) -> str:
        mode = "strict" if self.strict_mode else "lenient"
        return (
            f"<OpString: {len(self._model)} ops, {len(self._operations)} operations, "
            f"{len(self._values)} values, {len(self._labels)} labels, {mode}>"
        )
