"""Admission Schemas: boundary validation and conversion to core types.

Tests:
    - discriminated unions pick the right variant from `kind`
    - allowed_levels bounded 1..5 and non-empty; max_age_seconds >= 0
    - supplied field without value converts to value None
"""

import pytest
from pydantic import ValidationError

from gatekeeper.core.domain_types import (
    HttpMethod, NotRequired, PrivateAccess, PublicAccess, Required,
)
from gatekeeper.schemas.admission import AdmissionRequest, VerdictResponse
from gatekeeper.core import verdicts


def test_public_request_defaults_fields_to_not_required():
    req = AdmissionRequest.model_validate({
        "method": {"expected": "GET", "observed": "GET"},
        "access": {"kind": "public"},
    })
    method, access, params, body = req.to_domain()
    assert method.expected is HttpMethod.GET
    assert isinstance(access, PublicAccess)
    assert isinstance(params, NotRequired)
    assert isinstance(body, NotRequired)


def test_private_request_converts_to_private_access():
    req = AdmissionRequest.model_validate({
        "method": {"expected": "POST", "observed": "POST"},
        "access": {
            "kind": "private", "max_age_seconds": 10,
            "allowed_levels": [4, 2], "token": "abc",
        },
        "body": {
            "kind": "required",
            "expected_names": ["uid"],
            "supplied_fields": [{"name": "uid"}],
        },
    })
    _, access, _, body = req.to_domain()
    assert access == PrivateAccess(10, frozenset({2, 4}), "abc")
    assert isinstance(body, Required)
    assert body.lookup("uid").value is None


@pytest.mark.parametrize("access", [
    {"kind": "private", "max_age_seconds": -1, "allowed_levels": [1]},
    {"kind": "private", "max_age_seconds": 1, "allowed_levels": []},
    {"kind": "private", "max_age_seconds": 1, "allowed_levels": [6]},
    {"kind": "secret"},
])
def test_invalid_access_rejected(access):
    with pytest.raises(ValidationError):
        AdmissionRequest.model_validate({
            "method": {"expected": "GET", "observed": "GET"},
            "access": access,
        })


def test_unknown_expected_method_rejected():
    with pytest.raises(ValidationError):
        AdmissionRequest.model_validate({
            "method": {"expected": "OPTIONS", "observed": "OPTIONS"},
            "access": {"kind": "public"},
        })


def test_verdict_response_from_verdict():
    resp = VerdictResponse.from_verdict(verdicts.insufficient_level(2, {4}))
    assert (resp.status, resp.subcode, resp.accepted) == (401, 0, False)
