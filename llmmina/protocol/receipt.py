"""Canonical receipts shared by all agents, with deterministic hashing."""

import dataclasses
import hashlib
import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from .schema import AgentId, SemVer

_HASH_LEN = 32


class ReceiptType(Enum):
    EXECUTION = "Execution"
    QUERY_RESULT = "QueryResult"
    PROOF = "Proof"
    ANCHOR = "Anchor"
    AUDIT = "Audit"


def hash_json_canonical(value: Any) -> bytes:
    """SHA-256 over JSON with sorted keys, one element per line and no indent."""
    text = json.dumps(
        value, indent=0, sort_keys=True, ensure_ascii=False, allow_nan=False
    )
    return hashlib.sha256(text.encode("utf-8")).digest()


def merkle_root_from_hashes(hashes: Iterable[bytes]) -> bytes:
    """Merkle root of 32-byte hashes; an odd last node is paired with itself."""
    level = [bytes(h) for h in hashes]
    if any(len(h) != _HASH_LEN for h in level):
        raise ValueError("every hash must be 32 bytes long")
    if not level:
        return bytes(_HASH_LEN)
    while len(level) > 1:
        lefts = level[0::2]
        rights = level[1::2]
        if len(rights) < len(lefts):
            rights.append(lefts[-1])
        level = [hashlib.sha256(left + right).digest() for left, right in zip(lefts, rights)]
    return level[0]


@dataclass(frozen=True)
class CanonicalReceipt:
    """Single output format for every agent's work."""

    version: SemVer
    timestamp: int
    source: AgentId
    receipt_type: ReceiptType
    payload_hash: bytes
    description: str
    payload: Any
    merkle_root: bytes | None = None
    signature: bytes | None = None

    @classmethod
    def create(
        cls,
        source: AgentId,
        receipt_type: ReceiptType,
        description: str,
        payload: Any,
    ) -> "CanonicalReceipt":
        """Build a receipt, hashing the payload deterministically."""
        return cls(
            version=SemVer.current(),
            timestamp=time.time_ns() // 1_000_000,
            source=source,
            receipt_type=receipt_type,
            payload_hash=hash_json_canonical(payload),
            description=str(description),
            payload=payload,
        )

    def with_merkle_root(self, root: bytes) -> "CanonicalReceipt":
        root = bytes(root)
        if len(root) != _HASH_LEN:
            raise ValueError("merkle root must be 32 bytes long")
        return dataclasses.replace(self, merkle_root=root)

    def with_signature(self, sig: bytes) -> "CanonicalReceipt":
        return dataclasses.replace(self, signature=bytes(sig))

    def verify_integrity(self) -> bool:
        """True when the stored hash still matches the payload."""
        return hash_json_canonical(self.payload) == self.payload_hash

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": dataclasses.asdict(self.version),
            "timestamp": self.timestamp,
            "source": self.source.value,
            "receipt_type": self.receipt_type.value,
            "payload_hash": list(self.payload_hash),
            "merkle_root": None if self.merkle_root is None else list(self.merkle_root),
            "signature": None if self.signature is None else list(self.signature),
            "description": self.description,
            "payload": self.payload,
        }


_ = field  # dataclass field helper kept available for subclasses