"""
OpString Validation & Error Policy

Detecting a problem and reporting it are separate steps:

1. Checks (check_* functions) inspect an argument and return a Check.
   They never raise.
2. ErrorPolicy turns a failed Check into a log record and decides whether
   the requested action still goes ahead.

Policy matrix:

    mode      degradable action          non-degradable action
    lenient   WARNING, proceed           WARNING, abort
    strict    ERROR, abort               ERROR, abort

Lenient warnings are dropped when ignore_warnings is set. Strict mode
always reports, whatever ignore_warnings says.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from opstring.symbols import (
    MAX_CODE,
    MIN_CODE,
    SymbolKind,
    classify,
    describe,
    unit_length,
)


class _Missing:
    """Marker for an argument the caller did not supply."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


class ErrorKind(Enum):
    TYPE = "TypeError"
    SYNTAX = "SyntaxError"
    RANGE = "RangeError"
    REFERENCE = "ReferenceError"


@dataclass(frozen=True)
class Check:
    """Outcome of a single validation."""
    ok: bool
    kind: Optional[ErrorKind] = None
    reason: str = ""

    def __bool__(self) -> bool:
        return self.ok


PASSED = Check(ok=True)


def _fail(kind: ErrorKind, reason: str) -> Check:
    return Check(ok=False, kind=kind, reason=reason)


def first_failure(*checks: Check) -> Check:
    """Return the first failed check, or PASSED."""
    for check in checks:
        if not check.ok:
            return check
    return PASSED


# ============================================================================
# Checks
# ============================================================================
def check_symbol(symbol: Any) -> Check:
    kind = classify(symbol)
    if kind is SymbolKind.INVALID:
        return _fail(
            ErrorKind.TYPE,
            f"The symbol {describe(symbol)} must be a string or an integer.",
        )
    if kind is SymbolKind.STRING_CHAR:
        if unit_length(symbol) != 1:
            return _fail(
                ErrorKind.SYNTAX,
                f"The string symbol {describe(symbol)} must consist of a single character.",
            )
        return PASSED
    # Overlong digit strings never reach int(), which caps conversions.
    if isinstance(symbol, str):
        digits = symbol.lstrip("0") or "0"
        in_range = len(digits) <= len(str(MAX_CODE)) and int(digits) <= MAX_CODE
    else:
        in_range = MIN_CODE <= symbol <= MAX_CODE
    if not in_range:
        return _fail(
            ErrorKind.RANGE,
            f"The numeric symbol {describe(symbol)} must be an integer within the "
            f"range of {MIN_CODE} and {MAX_CODE}.",
        )
    return PASSED


def check_symbols(symbols: Any) -> Check:
    if not isinstance(symbols, (list, tuple)):
        return _fail(
            ErrorKind.TYPE,
            f"The values {describe(symbols)} must be a list or a tuple of symbols.",
        )
    return first_failure(*(check_symbol(s) for s in symbols))


def check_callback(callback: Any) -> Check:
    if not callable(callback):
        return _fail(ErrorKind.TYPE, f"The operation {callback!r} must be callable.")
    return PASSED


def check_value_provided(value: Any) -> Check:
    if value is MISSING:
        return _fail(ErrorKind.TYPE, "No value was provided.")
    return PASSED


def check_label(label: Any) -> Check:
    if not isinstance(label, str):
        return _fail(ErrorKind.TYPE, f"The label {describe(label)} must be a string.")
    return PASSED


def check_mapping(value: Any, name: str) -> Check:
    if not isinstance(value, Mapping):
        return _fail(ErrorKind.TYPE, f"The '{name}' argument must be a mapping.")
    return PASSED


def check_flag(value: Any, name: str) -> Check:
    if not isinstance(value, bool):
        return _fail(ErrorKind.TYPE, f"The '{name}' option must be a boolean.")
    return PASSED


def check_sequence(sequence: Any) -> Check:
    if not isinstance(sequence, str):
        return _fail(ErrorKind.TYPE, f"The sequence {describe(sequence)} must be a string.")
    return PASSED


def check_not_empty(sequence: str) -> Check:
    if sequence == "":
        return _fail(ErrorKind.SYNTAX, "The sequence is empty.")
    return PASSED


def check_length(length: int, limit: Optional[int]) -> Check:
    if limit is not None and length > limit:
        return _fail(
            ErrorKind.RANGE,
            f"The sequence of {length} characters exceeds the configured "
            f"'max_sequence_length' of {limit} characters.",
        )
    return PASSED


def check_max_length(limit: Any) -> Check:
    if limit is None:
        return PASSED
    if isinstance(limit, bool) or not isinstance(limit, int):
        return _fail(
            ErrorKind.TYPE,
            f"The 'max_sequence_length' {describe(limit)} must be a positive integer.",
        )
    if limit <= 0:
        return _fail(
            ErrorKind.RANGE,
            f"The 'max_sequence_length' {describe(limit)} must be a positive integer.",
        )
    return PASSED


def check_id(op_id: Any) -> Check:
    if isinstance(op_id, bool) or not isinstance(op_id, int):
        return _fail(ErrorKind.TYPE, f"The operation id {describe(op_id)} must be an integer.")
    return PASSED


def check_found(found: bool, op_id: int) -> Check:
    if not found:
        return _fail(ErrorKind.REFERENCE, f"No operation with id {describe(op_id)} was found.")
    return PASSED


def check_index(index: Any) -> Check:
    if isinstance(index, bool) or not isinstance(index, int):
        return _fail(ErrorKind.TYPE, f"The index {describe(index)} must be an integer.")
    if index < 0:
        return _fail(ErrorKind.RANGE, f"The index {describe(index)} must not be negative.")
    return PASSED


# ============================================================================
# Reporting
# ============================================================================

class ErrorPolicy:
    """Reports failed checks and decides whether an action proceeds."""

    PREFIX = "[OpString]"

    def __init__(
        self,
        strict_mode: bool = False,
        ignore_warnings: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.strict_mode = strict_mode
        self.ignore_warnings = ignore_warnings
        self._logger = logger or logging.getLogger("opstring")

    def allows(self, check: Check, action: str, *, degrade: bool = False) -> bool:
        """Report `check` if it failed; return whether `action` may go ahead.

        `action` is an infinitive phrase, e.g. "set the sequence to 'Aab'".
        `degrade` marks actions that lenient mode still performs.
        """
        if check.ok:
            return True
        if self.strict_mode:
            self._emit(logging.ERROR, check.kind, f"Cannot {action}. {check.reason}")
            return False
        if degrade:
            self.warn(check.kind, f"Continuing to {action} despite: {check.reason}")
            return True
        self.warn(check.kind, f"Unable to {action}. {check.reason}")
        return False

    def warn(self, kind: Optional[ErrorKind], message: str) -> None:
        if self.strict_mode:
            self._emit(logging.ERROR, kind, message)
        elif not self.ignore_warnings:
            self._emit(logging.WARNING, kind, message)

    def _emit(self, level: int, kind: Optional[ErrorKind], message: str) -> None:
        label = kind.value if kind else "Error"
        self._logger.log(level, "%s %s: %s", self.PREFIX, label, message)
