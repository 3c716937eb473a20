"""Collaborator fakes: deterministic clock and verifier for gate tests."""

from gatekeeper.core.domain_types import DecodedIdentity, EpochSeconds, PrivilegeLevel

TEST_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"
NOW = 1_700_000_000


class FakeClock:
    """Clock frozen at a fixed instant; counts reads."""

    def __init__(self, now: int = NOW):
        self._now = now
        self.reads = 0

    def now(self) -> int:
        self.reads += 1
        return self._now


class FakeVerifier:
    """Verifier returning a fixed identity (or raising); records tokens seen."""

    def __init__(
        self,
        identity: DecodedIdentity | None = None,
        error: Exception | None = None,
    ):
        self.identity = identity
        self.error = error
        self.calls: list[str] = []

    async def verify(self, token: str) -> DecodedIdentity:
        self.calls.append(token)
        if self.error is not None:
            raise self.error
        return self.identity


def make_identity(age_seconds: int = 0, level: int = 4, now: int = NOW) -> DecodedIdentity:
    """Identity issued `age_seconds` before `now`."""
    return DecodedIdentity(
        issued_at=EpochSeconds(now - age_seconds),
        privilege_level=PrivilegeLevel(level),
    )
