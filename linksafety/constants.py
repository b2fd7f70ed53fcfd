"""Centralized constants for LinkSafety.

This module contains the detector identifiers and the built-in heuristic
tables shared by the scorer, the config loader and the tests.
"""

from enum import Enum


class DetectorId(str, Enum):
    """Identifier (and weight-table key) of each detector."""

    NOT_HTTPS = "NOT_HTTPS"
    IP_HOST = "IP_HOST"
    PUNYCODE = "PUNYCODE"
    SHORTENER = "SHORTENER"
    MANY_SUBDOMAINS = "MANY_SUBDOMAINS"
    UNUSUAL_PORT = "UNUSUAL_PORT"
    LONG_PATH = "LONG_PATH"
    MANY_PARAMS = "MANY_PARAMS"
    LONG_QUERY = "LONG_QUERY"
    LOOKS_LIKE_BRAND = "LOOKS_LIKE_BRAND"

    @classmethod
    def from_string(cls, value: str | None) -> "DetectorId | None":
        """Resolve a config key ("long_query", "LONG_QUERY") to an id."""
        if not value:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


DEFAULT_WEIGHTS: dict[DetectorId, int] = {
    DetectorId.NOT_HTTPS: 40,
    DetectorId.IP_HOST: 45,
    DetectorId.PUNYCODE: 40,
    DetectorId.SHORTENER: 20,
    DetectorId.MANY_SUBDOMAINS: 15,
    DetectorId.UNUSUAL_PORT: 15,
    DetectorId.LONG_PATH: 10,
    DetectorId.MANY_PARAMS: 10,
    DetectorId.LONG_QUERY: 8,
    DetectorId.LOOKS_LIKE_BRAND: 60,
}

DEFAULT_HIGH_THRESHOLD = 75
DEFAULT_MEDIUM_THRESHOLD = 40

# Limits for the lexical checks (a check fires when the value exceeds the limit,
# except subdomains which fire at >= the limit)
DEFAULT_SUBDOMAIN_LIMIT = 2
DEFAULT_LONG_PATH_LENGTH = 80
DEFAULT_MANY_PARAMS_COUNT = 8
DEFAULT_LONG_QUERY_LENGTH = 120
DEFAULT_BRAND_DISTANCE = 1

DEFAULT_PORTS: dict[str, int] = {
    "https": 443,
    "http": 80,
}

# Order matters: the brand scan stops at the first exact or near match.
DEFAULT_BRANDS: tuple[str, ...] = (
    "google.com",
    "gmail.com",
    "microsoft.com",
    "outlook.com",
    "live.com",
    "office.com",
    "paypal.com",
    "amazon.com",
    "apple.com",
    "facebook.com",
    "instagram.com",
    "linkedin.com",
    "netflix.com",
    "adobe.com",
    "bankofamerica.com",
    "chase.com",
    "wellsfargo.com",
    "hsbc.com",
    "stripe.com",
    "dropbox.com",
    "slack.com",
    "zoom.us",
    "spotify.com",
    "twitter.com",
    "github.com",
    "gitlab.com",
    "steamcommunity.com",
)

# Popular shorteners (not exhaustive)
DEFAULT_SHORTENERS: frozenset[str] = frozenset(
    {
        "bit.ly",
        "t.co",
        "tinyurl.com",
        "tiny.cc",
        "ow.ly",
        "buff.ly",
        "adf.ly",
        "rebrand.ly",
        "rb.gy",
        "is.gd",
        "cutt.ly",
        "shorte.st",
        "soo.gd",
        "trib.al",
        "vcf.me",
        "youtu.be",
        "lnkd.in",
        "t.ly",
        "s.id",
        "shorturl.at",
        "short.cm",
        "mcaf.ee",
        "urlzs.com",
    }
)

INVALID_HOSTNAME = "(invalid)"
INVALID_URL_REASON = "Invalid or malformed URL"

REGISTRABLE_MODE_LAST_LABELS = "last_labels"
REGISTRABLE_MODE_PUBLIC_SUFFIX = "public_suffix"
REGISTRABLE_MODES = (REGISTRABLE_MODE_LAST_LABELS, REGISTRABLE_MODE_PUBLIC_SUFFIX)
