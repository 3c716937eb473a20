"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (remote callers)
    - Each schema converts to the frozen domain types in core/ via to_domain()

Design Decisions:
    - Separate from core types: schemas are API contracts, core types are decisions (ADR: DDD boundary)
"""
