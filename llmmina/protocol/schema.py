"""Shared protocol types: versions, agent identifiers and hash aliases."""

from dataclasses import dataclass, field
from enum import Enum

DeterministicHash = bytes
"""A 32-byte SHA-256 digest."""

CanonicalTimestamp = int
"""Unix timestamp in milliseconds."""

_U16_MAX = 0xFFFF


@dataclass(frozen=True, order=True)
class SemVer:
    """Semantic version carried by every receipt, config and API response."""

    major: int = 0
    minor: int = 1
    patch: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            part = getattr(self, name)
            if isinstance(part, bool) or not isinstance(part, int):
                raise ValueError(f"SemVer {name} must be an integer")
            if not 0 <= part <= _U16_MAX:
                raise ValueError(f"SemVer {name} out of range: {part}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def current(cls) -> "SemVer":
        """The protocol version this code speaks."""
        return cls(0, 1, 0)


class AgentId(Enum):
    """Identifies which agent produced a receipt or log entry."""

    CORE_RUNTIME = "core_runtime"
    SOLANA_QUERY = "solana_query"
    PROOF_PROVENANCE = "proof_provenance"

    def as_str(self) -> str:
        return self.value


@dataclass(frozen=True)
class ApiVersion:
    """Value of the API version header sent with every HTTP response."""

    semver: SemVer = field(default_factory=SemVer.current)

    @classmethod
    def current(cls) -> "ApiVersion":
        return cls(SemVer.current())