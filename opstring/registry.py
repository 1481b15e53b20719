"""
OpString Registries

Three plain key-value stores owned by one OpString instance:

- OperationRegistry: code -> callback
- ValueRegistry:     code -> any value (None marks a symbol first met while decoding)
- LabelRegistry:     label -> code

Operations and values share the 0..65535 code space. SymbolTable is the
one place where a code is classified against both stores, and operation
membership always wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Registry:
    """Insert-or-replace store exposing its live dict."""

    kind = "entry"

    def __init__(self) -> None:
        self._entries: dict = {}

    @property
    def entries(self) -> dict:
        return self._entries

    def register(self, key: Any, target: Any) -> None:
        if key in self._entries:
            logger.debug("Replacing %s %r", self.kind, key)
        self._entries[key] = target

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {len(self._entries)} {self.kind}(s)>"


class OperationRegistry(Registry):
    kind = "operation"

    def callback(self, code: int) -> Optional[Callable[..., Any]]:
        return self._entries.get(code)


class ValueRegistry(Registry):
    kind = "value"

    def resolve(self, code: int) -> Any:
        """Value registered for `code`; None when the code is unmapped.

        Membership is tested explicitly, so falsy values (0, "", False)
        are returned as registered.
        """
        if code in self._entries:
            return self._entries[code]
        return None

    def code_for(self, value: Any) -> Optional[int]:
        """First code (in insertion order) mapped to `value`."""
        for code, registered in self._entries.items():
            if registered is value or registered == value:
                return code
        return None


class LabelRegistry(Registry):
    kind = "label"

    def code_for(self, label: str) -> Optional[int]:
        return self._entries.get(label)


# ============================================================================
# Shared code space
# ============================================================================

class SymbolRole(Enum):
    OPERATION = auto()
    VALUE = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class Lookup:
    """What a code means right now."""
    role: SymbolRole
    code: int
    target: Any = None

    @property
    def is_operation(self) -> bool:
        return self.role is SymbolRole.OPERATION


class SymbolTable:
    """Classifies codes against the operation and value registries."""

    def __init__(self, operations: OperationRegistry, values: ValueRegistry) -> None:
        self.operations = operations
        self.values = values

    def lookup(self, code: int) -> Lookup:
        if code in self.operations:
            return Lookup(SymbolRole.OPERATION, code, self.operations.callback(code))
        if code in self.values:
            return Lookup(SymbolRole.VALUE, code, self.values.resolve(code))
        return Lookup(SymbolRole.UNKNOWN, code)

    def adopt_unknown(self, code: int) -> None:
        """Register an unknown code as a value mapped to None."""
        logger.debug("Registering unknown symbol %d as a None value", code)
        self.values.register(code, None)
