"""Route Dependencies: wire the admission gate in front of FastAPI handlers.

Invariants:
    - The gate is built once per process from settings (lru_cache), overridable in tests
    - require_admission(policy) reads method, bearer token, path+query params and
      JSON body, then evaluates; a rejection raises AdmissionRejectedError and the
      handler never runs
    - The body is read only when the policy requires body fields
    - A body that is not a JSON object counts as "no fields supplied"

Design Decisions:
    - Policies reuse the core types: PrivateAccess is validated at route-definition
      time, and the per-request token is swapped in with dataclasses.replace
    - HTTPBearer(auto_error=False): a missing header must reach the gate as token=None
      so the caller gets subcode 2, not FastAPI's own 403
"""

import logging
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gatekeeper.config import get_settings
from gatekeeper.core.domain_types import (
    AccessSpec,
    FieldRequirement,
    HttpMethod,
    MethodSpec,
    NotRequired,
    PrivateAccess,
    PublicAccess,
    Required,
    as_http_method,
)
from gatekeeper.core.errors import AdmissionRejectedError, ErrorContext
from gatekeeper.core.verdicts import Verdict
from gatekeeper.infrastructure.clock import SystemClock
from gatekeeper.infrastructure.token_verifier import JWTTokenVerifier
from gatekeeper.services.admission_gate import AdmissionGate

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_admission_gate() -> AdmissionGate:
    return AdmissionGate(
        verifier=JWTTokenVerifier.from_settings(get_settings()),
        clock=SystemClock(),
    )


@dataclass(frozen=True)
class AdmissionPolicy:
    """What a route demands. params/body None means not required."""
    method: HttpMethod
    access: AccessSpec = field(default_factory=PublicAccess)
    params: tuple[str, ...] | None = None
    body: tuple[str, ...] | None = None

    def __post_init__(self):
        object.__setattr__(self, "method", as_http_method(self.method))


def _access_for(policy: AdmissionPolicy, token: str | None) -> AccessSpec:
    if isinstance(policy.access, PrivateAccess):
        return replace(policy.access, token=token)
    return policy.access


def _requirement(names: tuple[str, ...] | None, supplied: dict[str, Any]) -> FieldRequirement:
    if names is None:
        return NotRequired()
    return Required.from_mapping(names, supplied)


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON", extra={"path": request.url.path})
        return {}
    return payload if isinstance(payload, dict) else {}


def require_admission(policy: AdmissionPolicy):
    """Build a FastAPI dependency enforcing `policy`. Returns the accepting Verdict."""

    async def admit(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
        gate: AdmissionGate = Depends(get_admission_gate),
    ) -> Verdict:
        token = credentials.credentials if credentials else None
        supplied_params = {**request.query_params, **request.path_params}
        supplied_body = (
            await _read_json_object(request) if policy.body is not None else {}
        )

        verdict = await gate.evaluate(
            MethodSpec(expected=policy.method, observed=request.method),
            _access_for(policy, token),
            _requirement(policy.params, supplied_params),
            _requirement(policy.body, supplied_body),
        )
        if not verdict.accepted:
            raise AdmissionRejectedError(
                verdict,
                ErrorContext(path=request.url.path, method=request.method),
            )
        logger.debug(
            "Admission accepted",
            extra={
                "path": request.url.path,
                "method": request.method,
                "verdict_status": verdict.status,
                "verdict_subcode": verdict.subcode,
            },
        )
        return verdict

    return admit
