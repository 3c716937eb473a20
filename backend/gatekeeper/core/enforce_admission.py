"""Admission Enforcement: pure checks behind every admission verdict.

Invariants:
    - All functions are PURE: no IO, no async, no clock reads, no side effects
    - Return a rejecting Verdict on violation, None on success
    - validate_* helpers chain checks with `or`: first rejection wins
    - Field checks follow expected_names order; only the first miss is reported
    - A field is missing when no entry carries its name OR its value is None;
      "", 0, False and empty containers are present

Design Decisions:
    - Pure functions over gate methods: testable without fakes (ADR: functional core)
    - Return Verdicts (not exceptions): the gate's contract is "always a value",
      keeping the rejection path identical to the success path
"""

from gatekeeper.core import verdicts
from gatekeeper.core.domain_types import (
    DecodedIdentity,
    FieldRequirement,
    MethodSpec,
    PrivateAccess,
    Required,
)
from gatekeeper.core.verdicts import Verdict


def check_method(method: MethodSpec) -> Verdict | None:
    """Rule 1: caller must use the declared method, before any identity work."""
    if not method.matches:
        return verdicts.method_mismatch()
    return None


def check_token_present(access: PrivateAccess) -> Verdict | None:
    """Rule 2a: private APIs need a token. Only None counts as absent."""
    if access.token is None:
        return verdicts.missing_token()
    return None


def seconds_over_limit(
    identity: DecodedIdentity, max_age_seconds: int, now: int,
) -> int:
    """How far past max_age the token is. <= 0 means still fresh."""
    elapsed = now - identity.issued_at
    return elapsed - max_age_seconds


def check_freshness(
    identity: DecodedIdentity, max_age_seconds: int, now: int,
) -> Verdict | None:
    """Rule 2c: elapsed > max_age rejects; elapsed == max_age is still fresh."""
    over = seconds_over_limit(identity, max_age_seconds, now)
    if over > 0:
        return verdicts.token_expired(over)
    return None


def check_privilege_level(
    identity: DecodedIdentity, allowed_levels: frozenset[int],
) -> Verdict | None:
    """Rule 2d: decoded level must be one of the allowed levels (401)."""
    if identity.privilege_level not in allowed_levels:
        return verdicts.insufficient_level(
            identity.privilege_level, allowed_levels,
        )
    return None


def first_missing_field(requirement: FieldRequirement) -> str | None:
    """Name of the first expected field that is absent or None, else None."""
    if not isinstance(requirement, Required):
        return None
    for name in requirement.expected_names:
        item = requirement.lookup(name)
        if item is None or item.value is None:
            return name
    return None


def check_params(params: FieldRequirement) -> Verdict | None:
    """Rule 3: every required query/path parameter present and non-null."""
    if first_missing_field(params) is not None:
        return verdicts.params_missing()
    return None


def check_body(body: FieldRequirement) -> Verdict | None:
    """Rule 4: every required body field present and non-null."""
    if first_missing_field(body) is not None:
        return verdicts.body_missing()
    return None


def validate_identity(
    identity: DecodedIdentity, access: PrivateAccess, now: int,
) -> Verdict | None:
    """Chain freshness then privilege level. Returns first rejection or None."""
    return (
        check_freshness(identity, access.max_age_seconds, now)
        or check_privilege_level(identity, access.allowed_levels)
    )


def validate_fields(
    params: FieldRequirement, body: FieldRequirement,
) -> Verdict | None:
    """Chain parameter then body checks. Returns first rejection or None."""
    return check_params(params) or check_body(body)
