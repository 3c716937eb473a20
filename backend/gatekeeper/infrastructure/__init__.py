"""Infrastructure Layer: concrete collaborators (token verifier, clock) and logging.

Invariants:
    - Implements core/capability_protocols structurally, never by inheritance
    - Library errors mapped to core/errors before leaving this package
"""
