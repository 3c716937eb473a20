"""Admission Gate: decides whether a call may proceed before business logic runs.

Invariants:
    - Order: method → access branch (token presence → verify → freshness → level)
      → params → body → accept; each step short-circuits on rejection
    - Verifier awaited at most once, only for private APIs with a token present
    - Clock read at most once, only after the verifier succeeded
    - Every outcome is a Verdict: the verifier's failure is the ONLY caught error
    - Stateless: one instance may serve any number of concurrent calls

Design Decisions:
    - Impureim sandwich: pure checks from core/, IO (verify, now) in between
    - No retries, no timeout: both belong to the verifier or the caller
    - CancelledError is a BaseException and passes through untouched
    - No logging here: the HTTP adapter logs verdicts (ADR: no side effects in the gate)
"""

from gatekeeper.core import verdicts
from gatekeeper.core.capability_protocols import Clock, TokenVerifier
from gatekeeper.core.domain_types import (
    AccessSpec,
    DecodedIdentity,
    FieldRequirement,
    MethodSpec,
    PrivateAccess,
)
from gatekeeper.core.enforce_admission import (
    check_method,
    check_token_present,
    validate_fields,
    validate_identity,
)
from gatekeeper.core.verdicts import Verdict


class AdmissionGate:
    """Evaluates method, identity, parameters and body of one call."""

    def __init__(self, verifier: TokenVerifier, clock: Clock):
        self.verifier = verifier
        self.clock = clock

    async def evaluate(
        self,
        method: MethodSpec,
        access: AccessSpec,
        params: FieldRequirement,
        body: FieldRequirement,
    ) -> Verdict:
        rejection = check_method(method)
        if rejection is not None:
            return rejection

        if isinstance(access, PrivateAccess):
            rejection = await self._check_private(access)
            if rejection is not None:
                return rejection

        return validate_fields(params, body) or verdicts.accepted()

    async def _check_private(self, access: PrivateAccess) -> Verdict | None:
        rejection = check_token_present(access)
        if rejection is not None:
            return rejection

        identity = await self._verify(access.token)
        if identity is None:
            return verdicts.invalid_token()

        return validate_identity(identity, access, self.clock.now())

    async def _verify(self, token: str) -> DecodedIdentity | None:
        """Single translated failure: anything the verifier raises → None."""
        try:
            return await self.verifier.verify(token)
        except Exception:
            return None
