"""
OpString Configuration

Every field is optional. Unknown keys in a mapping are reported, never
silently ignored. Field values are validated by OpString itself so that a
malformed field can fall back to its default without aborting construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Optional

from opstring.symbols import describe
from opstring.validation import Check, ErrorKind


@dataclass
class OpStringConfig:
    sequence: Optional[str] = None
    operations: Optional[Mapping] = None
    values: Optional[Mapping] = None
    labels: Optional[Mapping] = None
    max_sequence_length: Optional[int] = None
    ignore_warnings: bool = False
    strict_mode: bool = False

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> tuple[OpStringConfig, list[Check]]:
        """Build a config from a mapping, reporting unrecognized keys."""
        allowed = cls.keys()
        known = {}
        problems = []
        for key, value in mapping.items():
            if key in allowed:
                known[key] = value
            else:
                problems.append(Check(
                    ok=False,
                    kind=ErrorKind.TYPE,
                    reason=f"Unknown configuration key {describe(key)}. "
                           f"Allowed keys: {', '.join(allowed)}.",
                ))
        return cls(**known), problems
