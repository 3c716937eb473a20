"""Admission Routes: remote evaluation and the published verdict taxonomy.

Invariants:
    - POST /evaluate always answers HTTP 200; the verdict's own status is in the body
    - GET /taxonomy lists every (status, subcode) the gate can ever return
    - Routes never decide anything themselves (delegate to AdmissionGate)

Design Decisions:
    - HTTP 200 for evaluate: the caller asked "would this call pass?", and that
      question was answered successfully even when the answer is "no"
"""

from fastapi import APIRouter, Depends

from gatekeeper.api.dependencies import get_admission_gate
from gatekeeper.core.verdicts import VerdictKind
from gatekeeper.schemas.admission import AdmissionRequest, VerdictResponse
from gatekeeper.services.admission_gate import AdmissionGate

router = APIRouter(prefix="/api/v1/admission", tags=["admission"])


@router.post("/evaluate", response_model=VerdictResponse)
async def evaluate_admission(
    body: AdmissionRequest,
    gate: AdmissionGate = Depends(get_admission_gate),
):
    """Evaluate a fully described call against its declared policy."""
    verdict = await gate.evaluate(*body.to_domain())
    return VerdictResponse.from_verdict(verdict)


@router.get("/taxonomy")
async def verdict_taxonomy():
    """Stable (status, subcode) keys consumers may switch on."""
    return [
        {"kind": kind.name, "status": kind.status, "subcode": kind.subcode}
        for kind in VerdictKind
    ]
