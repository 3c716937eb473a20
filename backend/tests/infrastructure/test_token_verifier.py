"""JWT Token Verifier: real PyJWT tokens decoded into DecodedIdentity.

Tests cover:
    - valid token → issued_at / privilege_level from iat / lvl
    - wrong secret, wrong algorithm, garbage → InvalidTokenError
    - missing or non-integer level claim → InvalidTokenError
    - custom claim names and issuer/audience checks
    - from_settings wiring
"""

import time

import jwt
import pytest

from gatekeeper.config import Settings
from gatekeeper.core.errors import InvalidTokenError
from gatekeeper.infrastructure.token_verifier import JWTTokenVerifier
from tests.fakes import TEST_SECRET


def _token(claims: dict, key: str = TEST_SECRET, algorithm: str = "HS256") -> str:
    return jwt.encode(claims, key, algorithm=algorithm)


@pytest.fixture
def verifier():
    return JWTTokenVerifier(key=TEST_SECRET, algorithms=["HS256"])


async def test_valid_token_decodes_identity(verifier):
    iat = int(time.time()) - 5
    identity = await verifier.verify(_token({"iat": iat, "lvl": 4}))
    assert identity.issued_at == iat
    assert identity.privilege_level == 4


async def test_wrong_secret_rejected(verifier):
    token = _token(
        {"iat": int(time.time()), "lvl": 4},
        key="another-secret-key-that-is-also-32-bytes",
    )
    with pytest.raises(InvalidTokenError):
        await verifier.verify(token)


async def test_algorithm_not_in_allow_list_rejected(verifier):
    token = _token({"iat": int(time.time()), "lvl": 4}, algorithm="HS512")
    with pytest.raises(InvalidTokenError):
        await verifier.verify(token)


async def test_garbage_rejected(verifier):
    with pytest.raises(InvalidTokenError) as exc:
        await verifier.verify("not-a-jwt")
    assert exc.value.code == "INVALID_TOKEN"


async def test_missing_level_claim_rejected(verifier):
    with pytest.raises(InvalidTokenError) as exc:
        await verifier.verify(_token({"iat": int(time.time())}))
    assert "lvl" in exc.value.reason


@pytest.mark.parametrize("level", ["4", 4.0, True])
async def test_non_integer_level_rejected(verifier, level):
    with pytest.raises(InvalidTokenError):
        await verifier.verify(_token({"iat": int(time.time()), "lvl": level}))


async def test_missing_issued_at_rejected(verifier):
    with pytest.raises(InvalidTokenError):
        await verifier.verify(_token({"lvl": 4}))


async def test_custom_claim_names():
    verifier = JWTTokenVerifier(
        key=TEST_SECRET, algorithms=["HS256"],
        issued_at_claim="auth_time", level_claim="tier",
    )
    now = int(time.time())
    identity = await verifier.verify(_token({"auth_time": now, "tier": 2}))
    assert (identity.issued_at, identity.privilege_level) == (now, 2)


async def test_issuer_and_audience_enforced():
    verifier = JWTTokenVerifier(
        key=TEST_SECRET, algorithms=["HS256"],
        issuer="https://issuer.test", audience="gatekeeper",
    )
    claims = {"iat": int(time.time()), "lvl": 3}
    ok = _token({**claims, "iss": "https://issuer.test", "aud": "gatekeeper"})
    assert (await verifier.verify(ok)).privilege_level == 3

    wrong_aud = _token({**claims, "iss": "https://issuer.test", "aud": "other"})
    with pytest.raises(InvalidTokenError):
        await verifier.verify(wrong_aud)


def test_from_settings():
    settings = Settings(
        token_secret=TEST_SECRET,
        token_algorithms=["hs384"],
        token_level_claim="tier",
        token_leeway_seconds=5,
    )
    verifier = JWTTokenVerifier.from_settings(settings)
    assert verifier.key == TEST_SECRET
    assert verifier.algorithms == ["HS384"]
    assert verifier.level_claim == "tier"
    assert verifier.leeway_seconds == 5
