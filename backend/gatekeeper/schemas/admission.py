"""Admission Schemas: wire shape of a remote admission evaluation.

Invariants:
    - access and params/body are discriminated on `kind`
    - allowed_levels: 1..5, at least one; max_age_seconds >= 0
    - A supplied field sent without `value` is the same as value null (absent)

Design Decisions:
    - Discriminated unions mirror the core sum types one-to-one
    - to_domain() is the only way a schema reaches the gate
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from gatekeeper.core.domain_types import (
    AccessSpec,
    FieldRequirement,
    HttpMethod,
    MethodSpec,
    NotRequired,
    PrivateAccess,
    PublicAccess,
    Required,
    SuppliedField,
)
from gatekeeper.core.verdicts import Verdict

Level = Annotated[int, Field(ge=1, le=5)]


class MethodIn(BaseModel):
    """Declared method and the method the caller used."""
    expected: HttpMethod
    observed: str

    def to_domain(self) -> MethodSpec:
        return MethodSpec(expected=self.expected, observed=self.observed)


# --- Access --------------------------------------------------------------------

class PublicAccessIn(BaseModel):
    kind: Literal["public"] = "public"

    def to_domain(self) -> PublicAccess:
        return PublicAccess()


class PrivateAccessIn(BaseModel):
    kind: Literal["private"] = "private"
    max_age_seconds: int = Field(ge=0)
    allowed_levels: list[Level] = Field(min_length=1)
    token: str | None = None

    def to_domain(self) -> PrivateAccess:
        return PrivateAccess(
            max_age_seconds=self.max_age_seconds,
            allowed_levels=frozenset(self.allowed_levels),
            token=self.token,
        )


AccessIn = Annotated[PublicAccessIn | PrivateAccessIn, Field(discriminator="kind")]


# --- Fields --------------------------------------------------------------------

class SuppliedFieldIn(BaseModel):
    name: str
    value: Any = None


class NotRequiredIn(BaseModel):
    kind: Literal["not_required"] = "not_required"

    def to_domain(self) -> NotRequired:
        return NotRequired()


class RequiredIn(BaseModel):
    kind: Literal["required"] = "required"
    expected_names: list[str]
    supplied_fields: list[SuppliedFieldIn] = Field(default_factory=list)

    def to_domain(self) -> Required:
        return Required(
            expected_names=tuple(self.expected_names),
            supplied_fields=tuple(
                SuppliedField(name=f.name, value=f.value)
                for f in self.supplied_fields
            ),
        )


FieldsIn = Annotated[NotRequiredIn | RequiredIn, Field(discriminator="kind")]


# --- Request / Response --------------------------------------------------------

class AdmissionRequest(BaseModel):
    """One call described in full, evaluated as-is by the gate."""
    method: MethodIn
    access: AccessIn
    params: FieldsIn = Field(default_factory=NotRequiredIn)
    body: FieldsIn = Field(default_factory=NotRequiredIn)

    def to_domain(
        self,
    ) -> tuple[MethodSpec, AccessSpec, FieldRequirement, FieldRequirement]:
        return (
            self.method.to_domain(),
            self.access.to_domain(),
            self.params.to_domain(),
            self.body.to_domain(),
        )


class VerdictResponse(BaseModel):
    """Verdict as returned to remote callers."""
    status: int
    code: str
    subcode: int
    description: str
    accepted: bool

    @classmethod
    def from_verdict(cls, verdict: Verdict) -> "VerdictResponse":
        return cls(
            status=verdict.status,
            code=verdict.code,
            subcode=verdict.subcode,
            description=verdict.description,
            accepted=verdict.accepted,
        )
