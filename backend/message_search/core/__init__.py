"""Core Layer: pure query composition, no IO, no async, no sessions.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - ORM models are imported only for column metadata; core never executes a statement
    - All functions are pure and deterministic given their injected collaborators

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
    - Collaborators (label store, date evaluator) injected as Protocols, never globals
"""
