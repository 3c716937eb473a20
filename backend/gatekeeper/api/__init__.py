"""API Layer: FastAPI routes, route guard dependency, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to the admission gate service (ADR: impureim sandwich)
"""
