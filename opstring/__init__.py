"""
OpString - operation sequences as compact strings.

Operations and values are mapped to single characters (or 16-bit codes).
A sequence string such as "AaabBabcc" stores operation A with arguments
a, a, b followed by operation B with arguments a, b, c, c, and executing
it calls the registered callbacks with the registered values.
"""

__version__ = "0.1.0"

from opstring.symbols import SymbolKind, classify, resolve_to_code
from opstring.validation import Check, ErrorKind, ErrorPolicy, MISSING
from opstring.registry import (
    LabelRegistry,
    Lookup,
    OperationRegistry,
    SymbolRole,
    SymbolTable,
    ValueRegistry,
)
from opstring.sequence import OperationRecord, SequenceModel
from opstring.codec import DecodeResult, decode, encode
from opstring.executor import Call, ExecutionResult, Executor
from opstring.config import OpStringConfig
from opstring.core import OpString

__all__ = [
    "OpString",
    "OpStringConfig",
    "OperationRecord",
    "SequenceModel",
    "DecodeResult",
    "decode",
    "encode",
    "Executor",
    "ExecutionResult",
    "Call",
    "OperationRegistry",
    "ValueRegistry",
    "LabelRegistry",
    "SymbolTable",
    "SymbolRole",
    "Lookup",
    "SymbolKind",
    "classify",
    "resolve_to_code",
    "Check",
    "ErrorKind",
    "ErrorPolicy",
    "MISSING",
]
