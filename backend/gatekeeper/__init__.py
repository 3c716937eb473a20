"""Gatekeeper: request admission gate for API handlers.

Layers (dependency arrows point inward):
    core/            pure decision logic and value objects
    services/        async gate that talks to the token verifier and clock
    infrastructure/  concrete verifier, clock, logging
    api/ schemas/    FastAPI surface
"""
