"""Services Layer: async orchestration around the pure search core.

Invariants:
    - IO (label lookup, statement execution) happens here, before and after core runs
    - Core receives only synchronous, pre-loaded collaborators
"""
