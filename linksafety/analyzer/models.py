"""Scoring result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RiskLevel(str, Enum):
    """Discrete risk level of a scored link."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_string(cls, value: str | None) -> "RiskLevel":
        """Convert a stored level to the enum, defaulting to HIGH."""
        if not value:
            return cls.HIGH
        mapping = {level.value.lower(): level for level in cls}
        return mapping.get(str(value).lower(), cls.HIGH)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RiskResult:
    """Outcome of scoring one URL."""

    url: str
    hostname: str
    score: int
    level: RiskLevel
    reasons: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Plain record used by the last-check store and ``--json`` output."""
        return {
            "url": self.url,
            "hostname": self.hostname,
            "score": self.score,
            "level": self.level.value,
            "reasons": list(self.reasons),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RiskResult":
        try:
            return cls(
                url=str(data["url"]),
                hostname=str(data["hostname"]),
                score=int(data["score"]),
                level=RiskLevel.from_string(data.get("level")),
                reasons=tuple(str(r) for r in data.get("reasons") or []),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid risk result record: {exc}") from exc
