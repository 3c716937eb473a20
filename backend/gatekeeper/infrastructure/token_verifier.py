"""JWT Token Verifier: decodes bearer tokens into DecodedIdentity with PyJWT.

Invariants:
    - Signature, algorithm allow-list, issuer and audience checked by PyJWT
    - issued-at and privilege level claims must both be present integers
    - Every failure surfaces as InvalidTokenError (core/errors.py)
    - Freshness policy is NOT decided here: the gate recomputes it from issued_at

Design Decisions:
    - Algorithms pinned from settings, never taken from the token header
    - bool rejected as a level even though it subclasses int
"""

import logging

import jwt

from gatekeeper.config import Settings
from gatekeeper.core.domain_types import DecodedIdentity, EpochSeconds, PrivilegeLevel
from gatekeeper.core.errors import InvalidTokenError

logger = logging.getLogger(__name__)


def _int_claim(claims: dict, name: str) -> int:
    value = claims.get(name)
    if value is None:
        raise InvalidTokenError(f"missing claim '{name}'")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTokenError(f"claim '{name}' is not an integer")
    return value


class JWTTokenVerifier:
    """TokenVerifier backed by a shared-secret (or public-key) JWT."""

    def __init__(
        self,
        key: str,
        algorithms: list[str],
        issuer: str | None = None,
        audience: str | None = None,
        leeway_seconds: int = 0,
        issued_at_claim: str = "iat",
        level_claim: str = "lvl",
    ):
        self.key = key
        self.algorithms = list(algorithms)
        self.issuer = issuer
        self.audience = audience
        self.leeway_seconds = leeway_seconds
        self.issued_at_claim = issued_at_claim
        self.level_claim = level_claim

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTTokenVerifier":
        return cls(
            key=settings.token_secret,
            algorithms=settings.token_algorithms,
            issuer=settings.token_issuer,
            audience=settings.token_audience,
            leeway_seconds=settings.token_leeway_seconds,
            issued_at_claim=settings.token_issued_at_claim,
            level_claim=settings.token_level_claim,
        )

    async def verify(self, token: str) -> DecodedIdentity:
        claims = self._decode(token)
        return DecodedIdentity(
            issued_at=EpochSeconds(_int_claim(claims, self.issued_at_claim)),
            privilege_level=PrivilegeLevel(_int_claim(claims, self.level_claim)),
        )

    def _decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self.key,
                algorithms=self.algorithms,
                issuer=self.issuer,
                audience=self.audience,
                leeway=self.leeway_seconds,
            )
        except jwt.PyJWTError as e:
            logger.info(
                "Token verification failed: %s", type(e).__name__,
                extra={"error_code": "INVALID_TOKEN"},
            )
            raise InvalidTokenError(str(e)) from e
