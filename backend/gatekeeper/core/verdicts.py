"""Verdicts: the fixed-shape outcome of every admission evaluation.

Invariants:
    - (status, subcode) is always a member of VerdictKind: no ad-hoc pairs
    - Exactly one accepting key: (201, 0); exactly one 401 key: (401, 0)
    - Verdicts are built only through the factories below
    - description is display text; consumers key on (status, subcode)

Design Decisions:
    - Enum of (status, subcode) tuples: the whole taxonomy is enumerable up front,
      callers can switch on VerdictKind instead of pattern-matching text
    - Two code tags (accept vs reject) kept stable for downstream log parsers
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

ACCEPT_CODE = "x19f-S/S/securityLayer"
REJECT_CODE = "x1f-S/S/securityLayer"


class VerdictKind(Enum):
    """Every (status, subcode) pair the gate can produce."""
    ACCEPTED = (201, 0)
    METHOD_MISMATCH = (400, 1)
    MISSING_TOKEN = (400, 2)
    INVALID_TOKEN = (400, 3)
    TOKEN_EXPIRED = (400, 4)
    PARAMS_MISSING = (400, 5)
    BODY_MISSING = (400, 6)
    INSUFFICIENT_LEVEL = (401, 0)

    @property
    def status(self) -> int:
        return self.value[0]

    @property
    def subcode(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class Verdict:
    """Accept/reject outcome returned by the gate in place of raising."""
    status: int
    code: str
    subcode: int
    description: str

    @property
    def kind(self) -> VerdictKind:
        return VerdictKind((self.status, self.subcode))

    @property
    def accepted(self) -> bool:
        return self.kind is VerdictKind.ACCEPTED

    def to_response(self) -> dict:
        """Wire envelope consumed by HTTP callers."""
        return {
            "status": self.status,
            "code": self.code,
            "subcode": self.subcode,
            "devDescription": self.description,
        }


def _build(kind: VerdictKind, description: str) -> Verdict:
    code = ACCEPT_CODE if kind is VerdictKind.ACCEPTED else REJECT_CODE
    return Verdict(
        status=kind.status, code=code,
        subcode=kind.subcode, description=description,
    )


# ─── Factories ───────────────────────────────────────────────────

def accepted() -> Verdict:
    return _build(
        VerdictKind.ACCEPTED,
        "API has successfully passed all defined security guidelines.",
    )


def method_mismatch() -> Verdict:
    return _build(
        VerdictKind.METHOD_MISMATCH,
        "API was not called by the previously defined method",
    )


def missing_token() -> Verdict:
    return _build(VerdictKind.MISSING_TOKEN, "API does not contain TOKEN header")


def invalid_token() -> Verdict:
    return _build(VerdictKind.INVALID_TOKEN, "User TOKEN is invalid.")


def token_expired(seconds_over: int) -> Verdict:
    return _build(
        VerdictKind.TOKEN_EXPIRED,
        f"User's TOKEN expired {seconds_over} seconds ago.",
    )


def insufficient_level(level: int, allowed_levels: Iterable[int]) -> Verdict:
    allowed = ",".join(str(lvl) for lvl in sorted(allowed_levels))
    return _build(
        VerdictKind.INSUFFICIENT_LEVEL,
        (
            "The user's LEVEL does not appear in the LEVELS allowed by the API. "
            f"User LEVEL: {level}. User required: {allowed}"
        ),
    )


def params_missing() -> Verdict:
    return _build(
        VerdictKind.PARAMS_MISSING,
        "The PARAMETERS of the user call do not contain the PARAMETERS defined by the API.",
    )


def body_missing() -> Verdict:
    return _build(
        VerdictKind.BODY_MISSING,
        "The BODY of the user call does not contain the BODY defined by the API.",
    )
