"""Link analysis modules for LinkSafety."""

from .models import RiskLevel, RiskResult
from .rules import Finding, UrlRule
from .scorer import RiskScorer, score_url

__all__ = [
    "RiskLevel",
    "RiskResult",
    "Finding",
    "UrlRule",
    "RiskScorer",
    "score_url",
]
