"""Search Term Normalization: clean raw search-box text before it becomes a predicate.

Invariants:
    - None and "" are returned as-is (same object)
    - Output is lowercase, single-spaced, trimmed, free of control characters
    - Control characters (C0, DEL and C1) become a space before whitespace is
      collapsed, so they separate words: a tab or U+009B between "a" and "b" gives "a b"
    - Idempotent: normalize(normalize(x)) == normalize(x)
"""

import re

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(term: str | None) -> str | None:
    """Lowercase, turn control characters into spaces, collapse whitespace."""
    if not term:
        return term
    term = term.lower()
    term = _CONTROL_CHARS.sub(" ", term)
    term = _WHITESPACE_RUN.sub(" ", term)
    return term.strip()
