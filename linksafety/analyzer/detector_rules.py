"""Detector rule implementations.

Each rule inspects a parsed URL on its own and returns at most one Finding.
``DEFAULT_RULES`` fixes the evaluation order, which is also the order of the
reasons in the final result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..constants import DetectorId
from ..utils.domain_similarity import looks_like_brand, registrable_domain
from ..utils.urls import StructuredURL, has_unicode_host, is_ipv4_literal
from .rules import Finding

if TYPE_CHECKING:
    from ..config import ScoringConfig


class ProtocolRule:
    name = DetectorId.NOT_HTTPS

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if url.scheme == "https":
            return None
        return Finding(self.name, config.weight(self.name), "Not HTTPS (connection not encrypted)")


class IpHostRule:
    name = DetectorId.IP_HOST

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if not is_ipv4_literal(url.host):
            return None
        return Finding(self.name, config.weight(self.name), "IP address used instead of domain")


class HomographRule:
    name = DetectorId.PUNYCODE

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if not has_unicode_host(url.host):
            return None
        return Finding(
            self.name,
            config.weight(self.name),
            "Non-ASCII or punycode in domain (possible homograph)",
        )


class ShortenerRule:
    name = DetectorId.SHORTENER

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if url.host not in config.shorteners:
            return None
        return Finding(self.name, config.weight(self.name), "URL shortener (destination hidden)")


class SubdomainDepthRule:
    name = DetectorId.MANY_SUBDOMAINS

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        # Address octets are not labels
        if is_ipv4_literal(url.host):
            return None
        sub_count = max(0, len(url.labels) - 2)
        if sub_count < config.subdomain_limit:
            return None
        return Finding(self.name, config.weight(self.name), "Many subdomains (possible cloaking)")


class UnusualPortRule:
    name = DetectorId.UNUSUAL_PORT

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if url.port is None:
            return None
        if config.default_ports.get(url.scheme) == url.port:
            return None
        return Finding(self.name, config.weight(self.name), f"Unusual port ({url.port})")


class LongPathRule:
    name = DetectorId.LONG_PATH

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if len(url.path) <= config.long_path_length:
            return None
        return Finding(self.name, config.weight(self.name), "Very long path (possible obfuscation)")


class ManyParamsRule:
    name = DetectorId.MANY_PARAMS

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        # Repeated keys count once per occurrence
        if len(url.query) <= config.many_params_count:
            return None
        return Finding(self.name, config.weight(self.name), "Many query parameters")


class LongQueryRule:
    name = DetectorId.LONG_QUERY

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        if len(url.query_string) <= config.long_query_length:
            return None
        return Finding(self.name, config.weight(self.name), "Very long query string")


class BrandSimilarityRule:
    """Flags registrable domains one edit away from a high-value brand."""

    name = DetectorId.LOOKS_LIKE_BRAND

    def apply(self, url: StructuredURL, config: "ScoringConfig") -> Optional[Finding]:
        candidate = registrable_domain(url.host, config.registrable_domain_mode)
        if looks_like_brand(candidate, config.brands, config.brand_distance) is None:
            return None
        return Finding(
            self.name,
            config.weight(self.name),
            "Domain looks like a high-value brand (possible typosquatting)",
        )


DEFAULT_RULES = (
    ProtocolRule(),
    IpHostRule(),
    HomographRule(),
    ShortenerRule(),
    SubdomainDepthRule(),
    UnusualPortRule(),
    LongPathRule(),
    ManyParamsRule(),
    LongQueryRule(),
    BrandSimilarityRule(),
)
