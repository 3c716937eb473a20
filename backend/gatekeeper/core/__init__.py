"""Core Layer: pure admission logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All check functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
