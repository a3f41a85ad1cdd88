"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
    - Only repository_protocols.py declares async signatures (contracts, not code)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
