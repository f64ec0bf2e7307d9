"""
core/types.py - Core Type Definitions and Data Structures
============================================================================
Type definitions shared by the header mapper, content extractor and
table orchestrator.

Design Principles:
- Immutable where possible
- Label matchers are a tagged variant, not runtime type sniffing
- Serializable results for logging/debugging

Author: tabletext
Version: 1.0.0
============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any, Callable, Dict, Hashable, List, Mapping, Optional, Union
)


# ============================================================================
# TYPE ALIASES
# ============================================================================

Key = Hashable
Record = Dict[Any, Any]
HeaderMap = Dict[Any, int]

# (element or None, record, key) -> None; mutates record in place
ColumnParser = Callable[[Any, Record, Any], None]

# (record, raw row children, header map) -> keep row?
RowFilter = Callable[[Record, List[Any], HeaderMap], bool]


# ============================================================================
# LABEL MATCHERS
# ============================================================================

class MatchKind(Enum):
    """How a dictionary entry is compared against a cleaned label."""
    LITERAL = "literal"     # Exact string equality
    PATTERN = "pattern"     # Regex search anywhere in the label

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LabelMatcher:
    """
    One entry of a label dictionary.

    Build with ``LabelMatcher.literal("my text")`` or
    ``LabelMatcher.pattern(r"number\\s+abc")``; plain strings and compiled
    regexes are accepted anywhere a matcher is expected and coerced with
    ``LabelMatcher.coerce``.
    """
    kind: MatchKind
    value: Union[str, re.Pattern]

    @classmethod
    def literal(cls, text: str) -> 'LabelMatcher':
        return cls(MatchKind.LITERAL, text)

    @classmethod
    def pattern(cls, regex: Union[str, re.Pattern], flags: int = 0) -> 'LabelMatcher':
        if isinstance(regex, str):
            regex = re.compile(regex, flags)
        return cls(MatchKind.PATTERN, regex)

    @classmethod
    def coerce(cls, value: Any) -> 'LabelMatcher':
        """Turn a dictionary value into a matcher."""
        if isinstance(value, LabelMatcher):
            return value
        if isinstance(value, re.Pattern):
            return cls.pattern(value)
        if isinstance(value, str):
            return cls.literal(value)
        raise TypeError(
            f"Label matcher must be a str, compiled regex or LabelMatcher, "
            f"got {type(value).__name__}"
        )

    def matches(self, label: Optional[str]) -> bool:
        """Check a cleaned label against this matcher."""
        if label is None:
            return False
        if self.kind is MatchKind.PATTERN:
            return self.value.search(label) is not None
        return label == self.value

    def __str__(self) -> str:
        if self.kind is MatchKind.PATTERN:
            return f"/{self.value.pattern}/"
        return repr(self.value)


def compile_dictionary(dictionary: Mapping[Any, Any]) -> Dict[Any, LabelMatcher]:
    """Coerce every value of a key -> label dictionary into a matcher."""
    return {key: LabelMatcher.coerce(value) for key, value in dictionary.items()}


# ============================================================================
# RESULTS
# ============================================================================

@dataclass
class TableResult:
    """Header map and parsed rows of a horizontal table."""
    header_map: HeaderMap = field(default_factory=dict)
    data: Optional[List[Record]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.data) if self.data else 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'header_map': dict(self.header_map),
            'data': None if self.data is None else [dict(row) for row in self.data],
        }
