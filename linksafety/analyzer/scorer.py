"""Link risk scorer."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Sequence

from ..config import ConfigurationError, ScoringConfig, validate_config
from ..constants import INVALID_HOSTNAME, INVALID_URL_REASON
from ..utils.urls import ParseFailure, parse_url
from .detector_rules import DEFAULT_RULES
from .models import RiskLevel, RiskResult
from .rules import Finding, UrlRule

logger = logging.getLogger(__name__)


class RiskScorer:
    """Scores URLs for phishing/unsafe-link risk.

    The scorer holds nothing but its (immutable) configuration and rules, so a
    single instance can be shared between threads.
    """

    def __init__(
        self,
        config: ScoringConfig | None = None,
        rules: Sequence[UrlRule] | None = None,
    ):
        self.config = config or ScoringConfig()
        errors = validate_config(self.config)
        if errors:
            raise ConfigurationError("; ".join(errors))
        self.rules: tuple[UrlRule, ...] = tuple(rules if rules is not None else DEFAULT_RULES)

    def level_for(self, score: int) -> RiskLevel:
        """Map a clamped score to its risk level."""
        if score >= self.config.high_threshold:
            return RiskLevel.HIGH
        if score >= self.config.medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def score(self, raw: str) -> RiskResult:
        """Score a raw URL string. Never raises for bad input."""
        parsed = parse_url(raw)
        if isinstance(parsed, ParseFailure):
            logger.debug("Unparseable URL %r: %s", raw, parsed.detail)
            return invalid_result(raw)

        findings: list[Finding] = []
        for rule in self.rules:
            finding = rule.apply(parsed, self.config)
            if finding is not None:
                findings.append(finding)

        total = sum(f.weight for f in findings)
        score = max(0, min(100, total))
        level = self.level_for(score)

        logger.debug(
            "Scored %s: %d (%s) via %s",
            parsed.host or raw,
            score,
            level,
            ", ".join(str(f.detector) for f in findings) or "no findings",
        )

        return RiskResult(
            url=raw,
            hostname=parsed.host,
            score=score,
            level=level,
            reasons=tuple(f.reason for f in findings),
        )


def invalid_result(raw: Optional[str]) -> RiskResult:
    """Fixed maximal-risk result for input that is not a URL."""
    return RiskResult(
        url=raw or INVALID_HOSTNAME,
        hostname=INVALID_HOSTNAME,
        score=100,
        level=RiskLevel.HIGH,
        reasons=(INVALID_URL_REASON,),
    )


@lru_cache(maxsize=1)
def default_scorer() -> RiskScorer:
    """Shared scorer built from the built-in defaults."""
    return RiskScorer(ScoringConfig())


def score_url(raw: str, config: ScoringConfig | None = None) -> RiskResult:
    """Score ``raw`` with ``config`` (or the built-in defaults)."""
    scorer = RiskScorer(config) if config is not None else default_scorer()
    return scorer.score(raw)
