"""Tests for link risk scoring."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from linksafety import ConfigurationError, RiskLevel, RiskScorer, ScoringConfig, score_url
from linksafety.analyzer.detector_rules import ProtocolRule
from linksafety.constants import DEFAULT_WEIGHTS, DetectorId

TYPOSQUAT_REASON = "Domain looks like a high-value brand (possible typosquatting)"

SAMPLE_URLS = [
    "https://www.google.com/",
    "https://goggle.com/",
    "http://192.168.1.1/login",
    "https://a.b.c.d.example.com/",
    "https://bit.ly/3xYz",
    "http://xn--80ak6aa92e.com:8080/",
    "https://example.com/" + "p" * 120,
    "mailto:someone@example.com",
]


def make_many_signals_url() -> str:
    path = "/" + "x" * 81
    query = "&".join(f"k{i}={'v' * 15}" for i in range(9))
    return f"http://a.b.paypa1.com:8080{path}?{query}"


class TestRiskScorer:
    """Test scoring of well-known examples."""

    def test_exact_brand_is_clean(self, scorer):
        result = scorer.score("https://www.google.com/")
        assert TYPOSQUAT_REASON not in result.reasons
        assert result.score == 0
        assert result.level == RiskLevel.LOW
        assert result.hostname == "www.google.com"

    def test_typosquat(self, scorer):
        result = scorer.score("https://goggle.com/")
        assert result.reasons == (TYPOSQUAT_REASON,)
        assert result.score == 60
        assert result.level == RiskLevel.MEDIUM

    def test_http_ip_host(self, scorer):
        result = scorer.score("http://192.168.1.1/login")
        assert result.reasons == (
            "Not HTTPS (connection not encrypted)",
            "IP address used instead of domain",
        )
        assert result.score == 85
        assert result.level == RiskLevel.HIGH
        assert result.hostname == "192.168.1.1"

    @pytest.mark.parametrize(
        "raw, hostname",
        [
            ("http://2130706433/login", "127.0.0.1"),
            ("http://0x7f.0.0.1/login", "127.0.0.1"),
            ("http://0300.0250.1.1/login", "192.168.1.1"),
            ("http://192.168.1.1./login", "192.168.1.1"),
        ],
    )
    def test_http_ip_host_shorthand(self, scorer, raw, hostname):
        result = scorer.score(raw)
        assert result.reasons == (
            "Not HTTPS (connection not encrypted)",
            "IP address used instead of domain",
        )
        assert result.score == 85
        assert result.level == RiskLevel.HIGH
        assert result.hostname == hostname

    def test_percent_encoded_host(self, scorer):
        result = scorer.score("http://%67oogle.com/")
        assert result.hostname == "google.com"
        assert result.reasons == ("Not HTTPS (connection not encrypted)",)
        assert result.score == 40

    def test_many_subdomains(self, scorer):
        result = scorer.score("https://a.b.c.d.example.com/")
        assert "Many subdomains (possible cloaking)" in result.reasons
        assert result.score == 15
        assert result.level == RiskLevel.LOW

    def test_homograph_and_brand(self, scorer):
        result = scorer.score("https://gоogle.com/")  # Cyrillic о
        assert result.reasons == (
            "Non-ASCII or punycode in domain (possible homograph)",
            TYPOSQUAT_REASON,
        )
        assert result.score == 100
        assert result.level == RiskLevel.HIGH

    def test_long_query_without_many_params(self, scorer):
        result = scorer.score("https://example.com/?q=" + "a" * 130)
        assert "Very long query string" in result.reasons
        assert "Many query parameters" not in result.reasons

    def test_many_params_without_long_query(self, scorer):
        query = "&".join(f"p{i}=1" for i in range(9))
        result = scorer.score(f"https://example.com/?{query}")
        assert "Many query parameters" in result.reasons
        assert "Very long query string" not in result.reasons
        assert result.score == 10

    def test_reasons_follow_evaluation_order(self, scorer):
        result = scorer.score(make_many_signals_url())
        assert result.reasons == (
            "Not HTTPS (connection not encrypted)",
            "Many subdomains (possible cloaking)",
            "Unusual port (8080)",
            "Very long path (possible obfuscation)",
            "Many query parameters",
            "Very long query string",
            TYPOSQUAT_REASON,
        )

    def test_score_is_clamped(self, scorer):
        result = scorer.score(make_many_signals_url())
        assert result.score == 100
        assert result.level == RiskLevel.HIGH

    def test_url_is_echoed(self, scorer):
        raw = "https://Example.com/Path"
        result = scorer.score(raw)
        assert result.url == raw
        assert result.hostname == "example.com"


class TestInvalidInput:
    """Unparseable input is maximal risk, never an error."""

    @pytest.mark.parametrize("raw", ["", "not a url", "ht!tp://x", "http://", "http://example.com:99999/"])
    def test_invalid_result(self, scorer, raw):
        result = scorer.score(raw)
        assert result.score == 100
        assert result.level == RiskLevel.HIGH
        assert result.hostname == "(invalid)"
        assert result.reasons == ("Invalid or malformed URL",)

    def test_invalid_url_echo(self, scorer):
        assert scorer.score("").url == "(invalid)"
        assert scorer.score("not a url").url == "not a url"

    def test_rules_not_invoked_for_invalid_input(self):
        class ExplodingRule:
            name = DetectorId.NOT_HTTPS

            def apply(self, url, config):
                raise AssertionError("rule should not run")

        scorer = RiskScorer(rules=[ExplodingRule()])
        assert scorer.score("not a url").score == 100


class TestProperties:
    """Invariants that hold for every input."""

    @pytest.mark.parametrize("raw", SAMPLE_URLS)
    def test_score_range_and_level(self, scorer, raw):
        result = scorer.score(raw)
        assert 0 <= result.score <= 100
        assert result.level == scorer.level_for(result.score)

    @pytest.mark.parametrize("raw", SAMPLE_URLS + ["", "not a url"])
    def test_idempotent(self, raw):
        assert score_url(raw) == score_url(raw)

    def test_level_thresholds(self, scorer):
        assert scorer.level_for(0) == RiskLevel.LOW
        assert scorer.level_for(39) == RiskLevel.LOW
        assert scorer.level_for(40) == RiskLevel.MEDIUM
        assert scorer.level_for(74) == RiskLevel.MEDIUM
        assert scorer.level_for(75) == RiskLevel.HIGH
        assert scorer.level_for(100) == RiskLevel.HIGH

    def test_concurrent_scoring(self, scorer):
        expected = [scorer.score(raw) for raw in SAMPLE_URLS]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(scorer.score, SAMPLE_URLS * 5))
        assert results == expected * 5


class TestConfiguration:
    """Scoring behavior under custom configuration."""

    def test_custom_thresholds(self):
        scorer = RiskScorer(ScoringConfig(high_threshold=90, medium_threshold=50))
        result = scorer.score("http://192.168.1.1/login")
        assert result.score == 85
        assert result.level == RiskLevel.MEDIUM

    def test_custom_weights(self):
        weights = dict(DEFAULT_WEIGHTS)
        weights[DetectorId.NOT_HTTPS] = 5
        result = score_url("http://example.com/", ScoringConfig(weights=weights))
        assert result.score == 5
        assert result.level == RiskLevel.LOW

    def test_string_weight_keys(self):
        weights = {d.value.lower(): w for d, w in DEFAULT_WEIGHTS.items()}
        result = score_url("http://example.com/", ScoringConfig(weights=weights))
        assert result.score == 40

    def test_custom_brands(self):
        config = ScoringConfig(brands=["example.com"])
        assert score_url("https://exampel.com/", config).score == 0
        assert score_url("https://exampe.com/", config).score == 60
        assert score_url("https://goggle.com/", config).score == 0

    def test_custom_rules(self):
        scorer = RiskScorer(rules=[ProtocolRule()])
        result = scorer.score("http://192.168.1.1/login")
        assert result.score == 40
        assert result.reasons == ("Not HTTPS (connection not encrypted)",)

    def test_missing_weight_is_fatal(self):
        weights = dict(DEFAULT_WEIGHTS)
        del weights[DetectorId.LONG_QUERY]
        with pytest.raises(ConfigurationError, match="LONG_QUERY"):
            RiskScorer(ScoringConfig(weights=weights))

    def test_inverted_thresholds_are_fatal(self):
        with pytest.raises(ConfigurationError, match="medium <= high"):
            RiskScorer(ScoringConfig(high_threshold=30, medium_threshold=60))

    def test_empty_brand_list_is_fatal(self):
        with pytest.raises(ConfigurationError, match="Brand list"):
            RiskScorer(ScoringConfig(brands=[]))

    def test_invalid_config_rejected_by_score_url(self):
        with pytest.raises(ConfigurationError):
            score_url("https://example.com/", ScoringConfig(weights={}))
