"""Registrable-domain and brand look-alike helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

import tldextract
from rapidfuzz.distance import Levenshtein

from ..constants import REGISTRABLE_MODE_LAST_LABELS, REGISTRABLE_MODE_PUBLIC_SUFFIX


@lru_cache(maxsize=1)
def _offline_extractor() -> tldextract.TLDExtract:
    # Bundled public suffix snapshot only; never fetch the live list.
    return tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


def registrable_domain(host: str, mode: str = REGISTRABLE_MODE_LAST_LABELS) -> str:
    """Approximate the organization-owned part of ``host``.

    The default takes the last two non-empty labels ("accounts.google.com"
    -> "google.com"); shorter hosts return whatever labels exist. The
    ``public_suffix`` mode asks the bundled public suffix list instead, so
    "login.bbc.co.uk" -> "bbc.co.uk".
    """
    labels = [label for label in (host or "").lower().split(".") if label]
    if mode == REGISTRABLE_MODE_PUBLIC_SUFFIX and labels:
        extracted = _offline_extractor()(".".join(labels))
        if extracted.domain and extracted.suffix:
            return f"{extracted.domain}.{extracted.suffix}"
    return ".".join(labels[-2:])


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance over code points."""
    return Levenshtein.distance(a, b)


def looks_like_brand(candidate: str, brands: Iterable[str], max_distance: int = 1) -> str | None:
    """Return the brand ``candidate`` imitates, or None.

    Brands are scanned in order; an exact match means the candidate *is* the
    brand and stops the scan without a match.
    """
    target = (candidate or "").lower()
    for brand in brands:
        if target == brand:
            return None
        if Levenshtein.distance(target, brand, score_cutoff=max_distance) <= max_distance:
            return brand
    return None
