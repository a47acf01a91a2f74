"""Infrastructure Layer: database access and cross-cutting concerns.

Invariants:
    - All SQLAlchemy failures mapped to DatabaseError before leaving this layer
    - Async IO lives here; core/ receives only pre-loaded, synchronous collaborators
"""
