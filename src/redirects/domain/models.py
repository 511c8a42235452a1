from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RedirectRule:
    source_pattern: str
    destination: str
    permanent: bool = True


@dataclass(frozen=True)
class ResolvedCanonical:
    original_path: str
    final_path: str
    hops: int
    resolved: bool = True
    chain: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_path": self.original_path,
            "final_path": self.final_path,
            "hops": self.hops,
            "resolved": self.resolved,
            "chain": list(self.chain),
        }


@dataclass(frozen=True)
class CanonicalValidation:
    url: str
    is_valid: bool
    should_be: str | None = None
    issue: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"url": self.url, "is_valid": self.is_valid}
        if self.should_be is not None:
            payload["should_be"] = self.should_be
        if self.issue is not None:
            payload["issue"] = self.issue
        return payload
