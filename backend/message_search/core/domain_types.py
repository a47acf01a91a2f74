"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - GroupId, LabelId, OrganizationId wrap ints; never pass raw strings past parsing
    - Filter keys encoded as a str Enum; plain strings hash and compare equal to members,
      so a filter spec decoded from JSON dispatches without conversion

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GroupId = NewType("GroupId", int)
LabelId = NewType("LabelId", int)
OrganizationId = NewType("OrganizationId", int)


# ─── Enums ───────────────────────────────────────────────────────

class FilterKey(str, Enum):
    """Recognized filter specification keys."""
    INCLUDE_GROUPS = "include_groups"
    INCLUDE_LABELS = "include_labels"
    DATE_RANGE = "date_range"
    DATE_EXPRESSION = "date_expression"


# ─── Parsing ─────────────────────────────────────────────────────

def parse_maybe_integer(value: object) -> int | None:
    """Parse an int or a base-10 integer string. Returns None when it is neither.

    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return None
    return None
