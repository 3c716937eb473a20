"""Domain Types: verifies value objects and their definition-time checks.

Tests:
    - MethodSpec matching is exact and case-sensitive; plain strings coerced
    - PrivateAccess rejects negative max age and levels outside 1..5
    - Required coerces lists to tuples; lookup finds the first entry by name
"""

import dataclasses

import pytest

from gatekeeper.core.domain_types import (
    HttpMethod, MethodSpec, PrivateAccess, Required, SuppliedField,
)
from gatekeeper.core.errors import PolicyDefinitionError


def test_http_method_has_five_members():
    assert {m.value for m in HttpMethod} == {"GET", "POST", "PUT", "PATCH", "DELETE"}


def test_method_spec_matches_exactly():
    assert MethodSpec(HttpMethod.POST, "POST").matches
    assert not MethodSpec(HttpMethod.POST, "post").matches
    assert not MethodSpec(HttpMethod.PUT, "PATCH").matches


def test_private_access_coerces_levels_to_frozenset():
    access = PrivateAccess(max_age_seconds=10, allowed_levels=[4, 2])
    assert access.allowed_levels == frozenset({2, 4})
    assert access.token is None


def test_private_access_rejects_negative_max_age():
    with pytest.raises(PolicyDefinitionError) as exc:
        PrivateAccess(max_age_seconds=-1, allowed_levels=[1])
    assert exc.value.field == "max_age_seconds"


@pytest.mark.parametrize("levels", [[], [0], [6], [1, 9]])
def test_private_access_rejects_invalid_levels(levels):
    with pytest.raises(PolicyDefinitionError):
        PrivateAccess(max_age_seconds=0, allowed_levels=levels)


def test_value_objects_are_frozen():
    access = PrivateAccess(max_age_seconds=10, allowed_levels=[4])
    with pytest.raises(dataclasses.FrozenInstanceError):
        access.token = "stolen"


def test_required_coerces_sequences_to_tuples():
    req = Required(["uid"], [SuppliedField("uid", "a1")])
    assert req.expected_names == ("uid",)
    assert req.supplied_fields == (SuppliedField("uid", "a1"),)


def test_required_lookup_returns_first_entry_with_name():
    req = Required(
        ["uid"],
        [SuppliedField("uid", None), SuppliedField("uid", "later")],
    )
    assert req.lookup("uid").value is None
    assert req.lookup("center") is None


def test_required_from_mapping():
    req = Required.from_mapping(["uid"], {"uid": "a1", "extra": 0})
    assert req.lookup("uid").value == "a1"
    assert req.lookup("extra").value == 0


def test_method_spec_coerces_plain_string():
    spec = MethodSpec("GET", "GET")
    assert spec.expected is HttpMethod.GET
    assert spec.matches


def test_method_spec_rejects_unknown_method():
    with pytest.raises(PolicyDefinitionError) as exc:
        MethodSpec("FETCH", "GET")
    assert exc.value.field == "expected"


def test_required_from_mapping_accepts_any_iterable():
    req = Required.from_mapping(iter(["uid", "center"]), {"uid": "a1"})
    assert req.expected_names == ("uid", "center")
