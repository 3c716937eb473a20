"""Domain Types: immutable value objects the admission gate consumes.

Invariants:
    - Every object is frozen and request-scoped; nothing survives one evaluation
    - AccessSpec and FieldRequirement are sum types; a PrivateAccess without
      levels cannot be constructed
    - Privilege levels are drawn from 1..5; max age is never negative
    - Method comparison is exact and case-sensitive; expected is always an HttpMethod

Design Decisions:
    - Frozen dataclasses over pydantic in core: zero framework coupling, pydantic
      lives in schemas/ at the HTTP boundary (ADR: DDD boundary)
    - Sequences coerced to tuples / frozensets in __post_init__ so callers may pass lists
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType

from gatekeeper.core.errors import PolicyDefinitionError


# ─── Value Types ─────────────────────────────────────────────────

EpochSeconds = NewType("EpochSeconds", int)
PrivilegeLevel = NewType("PrivilegeLevel", int)   # 1–5

VALID_LEVELS: frozenset[int] = frozenset({1, 2, 3, 4, 5})


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Methods an API may be declared with."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def as_http_method(value: str, field_name: str = "method") -> HttpMethod:
    """Coerce a declared method; unknown names fail at definition time."""
    try:
        return HttpMethod(value)
    except ValueError:
        raise PolicyDefinitionError(
            f"{field_name} must be one of {[m.value for m in HttpMethod]}, got {value!r}",
            field_name,
        ) from None


# ─── Method ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class MethodSpec:
    """Declared method vs the method the caller actually used."""
    expected: HttpMethod
    observed: str

    def __post_init__(self):
        object.__setattr__(self, "expected", as_http_method(self.expected, "expected"))

    @property
    def matches(self) -> bool:
        return self.observed == self.expected.value


# ─── Access ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class PublicAccess:
    """API callable without a token."""


@dataclass(frozen=True)
class PrivateAccess:
    """API that requires a fresh token carrying one of the allowed levels."""
    max_age_seconds: int
    allowed_levels: frozenset[int]
    token: str | None = None

    def __post_init__(self):
        if self.max_age_seconds < 0:
            raise PolicyDefinitionError(
                f"max_age_seconds must be >= 0, got {self.max_age_seconds}",
                "max_age_seconds",
            )
        levels = frozenset(self.allowed_levels)
        if not levels:
            raise PolicyDefinitionError(
                "allowed_levels must name at least one level", "allowed_levels",
            )
        if not levels <= VALID_LEVELS:
            raise PolicyDefinitionError(
                f"allowed_levels must be drawn from 1..5, got {sorted(levels)}",
                "allowed_levels",
            )
        object.__setattr__(self, "allowed_levels", levels)


AccessSpec = PublicAccess | PrivateAccess


# ─── Fields (parameters and body) ────────────────────────────────

@dataclass(frozen=True)
class SuppliedField:
    """One name/value pair the caller sent. value None means absent."""
    name: str
    value: Any = None


@dataclass(frozen=True)
class NotRequired:
    """No fields are demanded."""


@dataclass(frozen=True)
class Required:
    """Names that must be present and non-null, checked in declaration order."""
    expected_names: tuple[str, ...]
    supplied_fields: tuple[SuppliedField, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "expected_names", tuple(self.expected_names))
        object.__setattr__(self, "supplied_fields", tuple(self.supplied_fields))

    def lookup(self, name: str) -> SuppliedField | None:
        """First supplied entry with this name, or None."""
        return next(
            (item for item in self.supplied_fields if item.name == name), None,
        )

    @classmethod
    def from_mapping(
        cls, expected_names: Iterable[str], supplied: dict[str, Any],
    ) -> "Required":
        """Build from a plain name→value mapping (query string, JSON object)."""
        return cls(
            expected_names=tuple(expected_names),
            supplied_fields=tuple(
                SuppliedField(name=name, value=value)
                for name, value in supplied.items()
            ),
        )


FieldRequirement = NotRequired | Required


# ─── Identity ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DecodedIdentity:
    """Claims extracted by the token verifier."""
    issued_at: EpochSeconds
    privilege_level: PrivilegeLevel
