"""LinkSafety: heuristic phishing/unsafe-link risk scoring."""

from .analyzer import RiskLevel, RiskResult, RiskScorer, score_url
from .config import ConfigurationError, ScoringConfig, load_config, validate_config

__all__ = [
    "RiskLevel",
    "RiskResult",
    "RiskScorer",
    "score_url",
    "ConfigurationError",
    "ScoringConfig",
    "load_config",
    "validate_config",
]
