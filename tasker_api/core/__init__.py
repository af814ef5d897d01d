"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Authorization, lifecycle stages, query parsing and payment rules are pure

Design Decisions:
    - Functional core separated from imperative shell (impureim sandwich)
"""
