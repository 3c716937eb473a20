"""Capability Protocols: contracts for the gate's two external collaborators.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - TokenVerifier.verify may suspend; Clock.now never does
    - The clock must be the same time authority that stamps issued_at

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Injected through AdmissionGate's constructor, never module-level singletons
"""

from typing import Protocol

from gatekeeper.core.domain_types import DecodedIdentity


class TokenVerifier(Protocol):
    """Decodes an opaque bearer token. Raises (InvalidTokenError) on any failure."""
    async def verify(self, token: str) -> DecodedIdentity: ...


class Clock(Protocol):
    """Trusted server time in whole epoch seconds."""
    def now(self) -> int: ...
