"""Services Layer: the imperative shell around the pure admission checks.

Invariants:
    - Services own every await and every collaborator call
    - Decision logic stays in core/enforce_admission

Design Decisions:
    - Collaborators injected through constructors (ADR: testable with fakes)
"""
