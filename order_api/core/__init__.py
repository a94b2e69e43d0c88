"""Core Layer — domain types, errors, results and pure helpers. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs (clocks and randomness injectable)

Design Decisions:
    - Functional core separated from the imperative shell (services + infrastructure)
"""
