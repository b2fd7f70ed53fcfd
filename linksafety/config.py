"""Configuration management for LinkSafety."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .constants import (
    DEFAULT_BRAND_DISTANCE,
    DEFAULT_BRANDS,
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LONG_PATH_LENGTH,
    DEFAULT_LONG_QUERY_LENGTH,
    DEFAULT_MANY_PARAMS_COUNT,
    DEFAULT_MEDIUM_THRESHOLD,
    DEFAULT_PORTS,
    DEFAULT_SHORTENERS,
    DEFAULT_SUBDOMAIN_LIMIT,
    DEFAULT_WEIGHTS,
    REGISTRABLE_MODE_LAST_LABELS,
    REGISTRABLE_MODES,
    DetectorId,
)

logger = logging.getLogger(__name__)

HEURISTICS_FILE = "heuristics.yaml"
BRANDS_FILE = "brands.txt"
SHORTENERS_FILE = "shorteners.txt"

# heuristics.yaml "limits" keys -> ScoringConfig fields
LIMIT_FIELDS = {
    "subdomains": "subdomain_limit",
    "long_path": "long_path_length",
    "many_params": "many_params_count",
    "long_query": "long_query_length",
    "brand_distance": "brand_distance",
}

KNOWN_SECTIONS = {
    "weights",
    "thresholds",
    "limits",
    "brands",
    "extra_brands",
    "shorteners",
    "extra_shorteners",
    "default_ports",
    "registrable_domain",
}


class ConfigurationError(Exception):
    """Scoring configuration is missing or invalid."""

    pass


def _freeze_weights(raw: Mapping) -> Mapping:
    weights = {}
    for key, value in dict(raw or {}).items():
        weights[DetectorId.from_string(key) or key] = value
    return MappingProxyType(weights)


def _unique_lower(items) -> tuple[str, ...]:
    cleaned = (str(item).strip().lower() for item in items or ())
    return tuple(dict.fromkeys(item for item in cleaned if item))


@dataclass(frozen=True)
class ScoringConfig:
    """Immutable scoring configuration shared by every scoring call."""

    weights: Mapping = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    high_threshold: int = DEFAULT_HIGH_THRESHOLD
    medium_threshold: int = DEFAULT_MEDIUM_THRESHOLD

    # Brand list order matters (first exact or near match wins)
    brands: tuple[str, ...] = DEFAULT_BRANDS
    shorteners: frozenset[str] = DEFAULT_SHORTENERS

    subdomain_limit: int = DEFAULT_SUBDOMAIN_LIMIT
    long_path_length: int = DEFAULT_LONG_PATH_LENGTH
    many_params_count: int = DEFAULT_MANY_PARAMS_COUNT
    long_query_length: int = DEFAULT_LONG_QUERY_LENGTH
    brand_distance: int = DEFAULT_BRAND_DISTANCE

    default_ports: Mapping = field(default_factory=lambda: dict(DEFAULT_PORTS))
    registrable_domain_mode: str = REGISTRABLE_MODE_LAST_LABELS

    def __post_init__(self):
        """Freeze containers so one config can be shared across threads."""
        object.__setattr__(self, "weights", _freeze_weights(self.weights))
        object.__setattr__(self, "brands", _unique_lower(self.brands))
        object.__setattr__(self, "shorteners", frozenset(_unique_lower(self.shorteners)))
        object.__setattr__(
            self,
            "default_ports",
            MappingProxyType({str(k).lower(): v for k, v in dict(self.default_ports or {}).items()}),
        )

    def weight(self, detector: DetectorId) -> int:
        return self.weights[detector]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: ScoringConfig) -> list[str]:
    """Validate scoring configuration and return list of error messages."""
    errors: list[str] = []

    for detector in DetectorId:
        if detector not in config.weights:
            errors.append(f"Missing weight for {detector}")
        elif not _is_int(config.weights[detector]):
            errors.append(f"Weight for {detector} must be an integer, got {config.weights[detector]!r}")
    for key in config.weights:
        if not isinstance(key, DetectorId):
            errors.append(f"Unknown detector in weights: {key}")

    high, medium = config.high_threshold, config.medium_threshold
    if not (_is_int(high) and _is_int(medium)):
        errors.append(f"Thresholds must be integers (high={high!r}, medium={medium!r})")
    elif not 0 <= medium <= high <= 100:
        errors.append(f"Thresholds must satisfy 0 <= medium <= high <= 100 (high={high}, medium={medium})")

    if not config.brands:
        errors.append("Brand list is empty")

    for name in LIMIT_FIELDS.values():
        value = getattr(config, name)
        if not _is_int(value) or value < 0:
            errors.append(f"{name} must be a non-negative integer, got {value!r}")

    for scheme, port in config.default_ports.items():
        if not _is_int(port) or not 0 <= port <= 65535:
            errors.append(f"Default port for {scheme} must be 0-65535, got {port!r}")

    if config.registrable_domain_mode not in REGISTRABLE_MODES:
        errors.append(
            f"registrable_domain must be one of {', '.join(REGISTRABLE_MODES)}, "
            f"got {config.registrable_domain_mode!r}"
        )

    return errors


def _load_list_file(path: Path) -> list[str]:
    """Load a list file in file order, ignoring comments and empty lines."""
    items: list[str] = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                items.append(line.lower())
    return items


def _load_heuristics(config_dir: Path) -> dict:
    """Load scoring overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / HEURISTICS_FILE
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")

    for key in sorted(set(data) - KNOWN_SECTIONS):
        logger.warning("Ignoring unknown section %r in %s", key, path)

    def _section(name: str) -> dict:
        value = data.get(name)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ConfigurationError(f"'{name}' in {path} must be a mapping")
        return value

    def _list(name: str) -> list | None:
        value = data.get(name)
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"'{name}' in {path} must be a list")
        return list(value)

    overrides: dict[str, Any] = {}

    weights = _section("weights")
    if weights:
        merged = dict(DEFAULT_WEIGHTS)
        merged.update({DetectorId.from_string(k) or k: v for k, v in weights.items()})
        overrides["weights"] = merged

    thresholds = _section("thresholds")
    for key in ("high", "medium"):
        if key in thresholds:
            overrides[f"{key}_threshold"] = thresholds[key]
    for key in sorted(set(thresholds) - {"high", "medium"}):
        logger.warning("Ignoring unknown threshold %r in %s", key, path)

    limits = _section("limits")
    for key, value in limits.items():
        if key in LIMIT_FIELDS:
            overrides[LIMIT_FIELDS[key]] = value
        else:
            logger.warning("Ignoring unknown limit %r in %s", key, path)

    ports = _section("default_ports")
    if ports:
        overrides["default_ports"] = ports

    brands = _list("brands")
    extra_brands = _list("extra_brands") or []
    if brands is not None or extra_brands:
        overrides["brands"] = list(brands if brands is not None else DEFAULT_BRANDS) + extra_brands

    shorteners = _list("shorteners")
    extra_shorteners = _list("extra_shorteners") or []
    if shorteners is not None or extra_shorteners:
        overrides["shorteners"] = list(shorteners if shorteners is not None else DEFAULT_SHORTENERS) + extra_shorteners

    if data.get("registrable_domain") is not None:
        overrides["registrable_domain_mode"] = str(data["registrable_domain"]).strip().lower()

    return overrides


def _env_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def load_config(config_dir: Path | str | None = None) -> ScoringConfig:
    """Load scoring configuration: defaults, config files, then environment."""
    load_dotenv()

    config_dir = Path(config_dir or os.getenv("LINKSAFETY_CONFIG_DIR", "./config"))
    overrides = _load_heuristics(config_dir)

    # Plain list files replace the YAML lists when present
    brands_path = config_dir / BRANDS_FILE
    if brands_path.exists():
        overrides["brands"] = _load_list_file(brands_path)
    shorteners_path = config_dir / SHORTENERS_FILE
    if shorteners_path.exists():
        overrides["shorteners"] = _load_list_file(shorteners_path)

    for env_name, field_name in (
        ("LINKSAFETY_HIGH_THRESHOLD", "high_threshold"),
        ("LINKSAFETY_MEDIUM_THRESHOLD", "medium_threshold"),
    ):
        value = _env_int(env_name)
        if value is not None:
            overrides[field_name] = value

    if overrides:
        logger.info("Loaded scoring overrides from %s: %s", config_dir, ", ".join(sorted(overrides)))

    known = {f.name for f in fields(ScoringConfig)}
    config = ScoringConfig(**{k: v for k, v in overrides.items() if k in known})

    errors = validate_config(config)
    if errors:
        raise ConfigurationError("; ".join(errors))
    return config
