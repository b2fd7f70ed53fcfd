"""URL parsing and normalization.

``parse_url`` never raises: malformed input comes back as a ``ParseFailure``
value so the scorer can treat it as a (maximal risk) result instead of an
error.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import parse_qsl, unquote, urlencode, urlsplit

import idna

# Schemes whose URLs are meaningless without a host ("http://" alone fails).
HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})

# WHATWG forbidden domain code points, checked after percent-decoding the host.
FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|\x7f")

IPV4_LITERAL_RE = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")
NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")
PUNYCODE_PREFIX = "xn--"


@dataclass(frozen=True)
class StructuredURL:
    """A URL that parsed successfully."""

    scheme: str
    host: str
    port: Optional[int]
    path: str
    query: tuple[tuple[str, str], ...] = ()
    raw_query: str = ""

    @property
    def labels(self) -> list[str]:
        """Non-empty dot-separated host labels."""
        return [label for label in self.host.split(".") if label]

    @property
    def query_string(self) -> str:
        """Query re-serialized from the parsed pairs (form encoding)."""
        return urlencode(self.query)


@dataclass(frozen=True)
class ParseFailure:
    """Input that could not be parsed as a URL."""

    raw: str
    detail: str


ParsedURL = Union[StructuredURL, ParseFailure]


def is_ipv4_literal(host: str) -> bool:
    """Dotted-decimal IPv4 shape check (octet ranges are not validated)."""
    return bool(IPV4_LITERAL_RE.match(host or ""))


def has_unicode_host(host: str) -> bool:
    """True for hosts with non-ASCII code points or a leading punycode label."""
    host = host or ""
    return bool(NON_ASCII_RE.search(host)) or host.startswith(PUNYCODE_PREFIX)


def _has_forbidden_host_char(host: str) -> bool:
    return any(ch in FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 for ch in host)


def _parse_ipv4_number(part: str) -> Optional[int]:
    """One IPv4 part in decimal, 0x hex or leading-zero octal notation."""
    if part[:2] in ("0x", "0X"):
        digits, base = part[2:], 16
        if not digits:
            return 0
    elif len(part) > 1 and part.startswith("0"):
        digits, base = part[1:], 8
    else:
        digits, base = part, 10
    if not digits.isascii() or not digits.isalnum():
        return None
    try:
        return int(digits, base)
    except ValueError:
        return None


def canonical_ipv4(host: str) -> Optional[str]:
    """Dotted-decimal form of a host browsers would read as an IPv4 address.

    Accepts the WHATWG shorthand forms: one to four parts, each decimal, hex
    or octal, with one trailing dot ("2130706433", "0x7f.0.0.1",
    "0300.0250.1.1", "192.168.1.1."). Returns None for anything else,
    including out-of-range values.
    """
    parts = host.split(".")
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()
    if not 1 <= len(parts) <= 4 or "" in parts:
        return None

    numbers = [_parse_ipv4_number(part) for part in parts]
    if any(n is None for n in numbers):
        return None
    if any(n > 255 for n in numbers[:-1]):
        return None
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        return None

    value = numbers[-1]
    for index, number in enumerate(numbers[:-1]):
        value += number * 256 ** (3 - index)
    return str(ipaddress.IPv4Address(value))


def _normalize_host(host: str) -> str:
    """Percent-decode, lowercase and UTS #46 map a registered-name host.

    Hosts that spell an IPv4 address come back in dotted-decimal form.
    """
    if not host or ":" in host:
        # empty, or an IPv6 literal (urlsplit already validated the brackets)
        return host
    host = unquote(host, errors="strict")
    host = idna.uts46_remap(host, std3_rules=False, transitional=False)
    return canonical_ipv4(host) or host


def parse_url(raw: str) -> ParsedURL:
    """Parse ``raw`` into a ``StructuredURL`` or return a ``ParseFailure``."""
    value = (raw or "").strip()
    if not value:
        return ParseFailure(raw=raw or "", detail="empty input")

    try:
        parts = urlsplit(value)
        scheme = parts.scheme.lower()
        if scheme in HOST_REQUIRED_SCHEMES and "\\" in value:
            # Browsers treat backslashes as path separators for web schemes
            parts = urlsplit(value.replace("\\", "/"))
        if not scheme:
            return ParseFailure(raw=value, detail="missing scheme")

        host = parts.hostname or ""
        port = parts.port
    except ValueError as exc:
        return ParseFailure(raw=value, detail=str(exc) or "invalid URL")

    if scheme in HOST_REQUIRED_SCHEMES and not host:
        return ParseFailure(raw=value, detail=f"{scheme} URL without host")

    ipv6 = ":" in host
    try:
        host = _normalize_host(host)
    except (idna.IDNAError, UnicodeError) as exc:
        return ParseFailure(raw=value, detail=f"invalid host: {exc}")

    if not ipv6 and _has_forbidden_host_char(host):
        return ParseFailure(raw=value, detail="forbidden character in host")

    return StructuredURL(
        scheme=scheme,
        host=host,
        port=port,
        path=parts.path,
        query=tuple(parse_qsl(parts.query, keep_blank_values=True)),
        raw_query=parts.query,
    )
