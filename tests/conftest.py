"""Global pytest configuration."""

from __future__ import annotations

import pytest

from linksafety.analyzer import RiskScorer
from linksafety.config import ScoringConfig

ENV_VARS = (
    "LINKSAFETY_CONFIG_DIR",
    "LINKSAFETY_DATA_DIR",
    "LINKSAFETY_HIGH_THRESHOLD",
    "LINKSAFETY_MEDIUM_THRESHOLD",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's shell/.env settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> ScoringConfig:
    """Built-in default configuration."""
    return ScoringConfig()


@pytest.fixture
def scorer(config) -> RiskScorer:
    """Create a risk scorer with the default configuration."""
    return RiskScorer(config)
