"""Rule-based building blocks for link scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from ..constants import DetectorId
from ..utils.urls import StructuredURL

if TYPE_CHECKING:
    from ..config import ScoringConfig


@dataclass(frozen=True)
class Finding:
    """One detector's contribution to the score."""

    detector: DetectorId
    weight: int
    reason: str


class UrlRule(Protocol):
    """Interface for detection rules."""

    name: DetectorId

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:  # pragma: no cover - interface
        ...
