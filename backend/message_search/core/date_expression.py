"""Relative Date Expressions: resolve {{ ... }} placeholders to ISO calendar dates.

Invariants:
    - evaluate() never raises; a placeholder it cannot resolve is left verbatim,
      which downstream date parsing then treats as "no bound"
    - Text outside placeholders passes through untouched, so a literal
      "2024-01-01" evaluates to itself
    - The clock is injected; two evaluators with the same clock agree

Examples (clock at 2026-10-18):
    "{{ today }}"          -> "2026-10-18"
    "{{ 7 days ago }}"     -> "2026-10-11"
    "{{ 1 month ago }}"    -> "2026-09-18"
    "{{ in 2 weeks }}"     -> "2026-11-01"

Design Decisions:
    - dateparser resolves the placeholder body: it already knows relative phrases,
      weekday names and month arithmetic (Mar 31 - 1 month = Feb 29)
    - languages pinned to English so parsing does not depend on language detection
"""

import logging
import re
from datetime import date, datetime, time, timezone
from typing import Callable

import dateparser

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{\{(.*?)\}\}")


def resolve_placeholder(body: str, today: date) -> date | None:
    """Resolve one placeholder body relative to today. None when it does not parse."""
    text = body.strip()
    if not text:
        return None
    try:
        parsed = dateparser.parse(
            text,
            languages=["en"],
            settings={
                "RELATIVE_BASE": datetime.combine(today, time.min),
                "PREFER_DATES_FROM": "past",
                "RETURN_AS_TIMEZONE_AWARE": False,
            },
        )
    except Exception as e:
        logger.debug(f"dateparser failed on {text!r}: {e}")
        return None
    return parsed.date() if parsed else None


class RelativeDateEvaluator:
    """DateExpressionEvaluator backed by dateparser."""

    def __init__(self, today: Callable[[], date] | None = None):
        self._today = today or (lambda: datetime.now(timezone.utc).date())

    def evaluate(self, expression: str) -> str:
        today = self._today()

        def substitute(match: re.Match) -> str:
            resolved = resolve_placeholder(match.group(1), today)
            return resolved.isoformat() if resolved else match.group(0)

        return _PLACEHOLDER.sub(substitute, expression)
