"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Collaborators consumed by core are synchronous and side-effect-free
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - FlowLabelRepository is async because it does IO, but core never awaits it:
      the shell awaits it first and hands core a LabelStore over the result
"""

from typing import Protocol, Sequence


class LabelStore(Protocol):
    """Resolves flow label ids to names. Unknown ids are omitted, never an error."""
    def lookup_label_names(self, label_ids: Sequence[object]) -> list[str]: ...


class DateExpressionEvaluator(Protocol):
    """Resolves a templated date expression to a literal date string.

    Failures come back as an unparsable string, not as an exception.
    """
    def evaluate(self, expression: str) -> str: ...


class FlowLabelRepository(Protocol):
    """Contract for flow label persistence (implemented by shell)."""
    async def get_names_by_ids(
        self, label_ids: Sequence[int], organization_id: int | None = None,
    ) -> dict[int, str]: ...
