"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .arithmetic import is_valid_amount, to_decimal
from .currency import NATIVE_CURRENCIES
from .errors import ConfigError
from .languages import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DisplayConfig:
    native_currency: str = "USD"
    language: str = "en"


@dataclass(frozen=True)
class CoinsConfig:
    small_balance_ratio: str = "0.02"
    collapse_small_balances: bool = True
    include_small_balances: bool = True


@dataclass(frozen=True)
class CollectiblesConfig:
    tokens_per_row: int = 2
    showcase_family_name: str = "Showcase"


@dataclass(frozen=True)
class PreloadConfig:
    enabled: bool = False
    large_family_threshold: int = 4
    min_top_fold_threshold: int = 10
    batch_size: int = 200
    max_concurrency: int = 8
    request_timeout: int = 10


@dataclass(frozen=True)
class AppConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    coins: CoinsConfig = field(default_factory=CoinsConfig)
    collectibles: CollectiblesConfig = field(default_factory=CollectiblesConfig)
    preload: PreloadConfig = field(default_factory=PreloadConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _as_bool(value: Any, default: bool) -> bool:
    """YAML booleans pass through; interpolated strings are parsed."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_display(raw: dict[str, Any]) -> DisplayConfig:
    return DisplayConfig(
        native_currency=str(raw.get("native_currency") or "USD").upper(),
        language=str(raw.get("language") or "en"),
    )


def _build_coins(raw: dict[str, Any]) -> CoinsConfig:
    return CoinsConfig(
        small_balance_ratio=str(raw.get("small_balance_ratio", "0.02")),
        collapse_small_balances=_as_bool(raw.get("collapse_small_balances"), True),
        include_small_balances=_as_bool(raw.get("include_small_balances"), True),
    )


def _build_collectibles(raw: dict[str, Any]) -> CollectiblesConfig:
    return CollectiblesConfig(
        tokens_per_row=int(raw.get("tokens_per_row", 2)),
        showcase_family_name=raw.get("showcase_family_name", "Showcase"),
    )


def _build_preload(raw: dict[str, Any]) -> PreloadConfig:
    return PreloadConfig(
        enabled=_as_bool(raw.get("enabled"), False),
        large_family_threshold=int(raw.get("large_family_threshold", 4)),
        min_top_fold_threshold=int(raw.get("min_top_fold_threshold", 10)),
        batch_size=int(raw.get("batch_size", 200)),
        max_concurrency=int(raw.get("max_concurrency", 8)),
        request_timeout=int(raw.get("request_timeout", 10)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        display=_build_display(raw.get("display") or {}),
        coins=_build_coins(raw.get("coins") or {}),
        collectibles=_build_collectibles(raw.get("collectibles") or {}),
        preload=_build_preload(raw.get("preload") or {}),
    )

    validate_config(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def validate_config(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.display.native_currency not in NATIVE_CURRENCIES:
        raise ConfigError(
            f"Unsupported native currency '{cfg.display.native_currency}'"
        )
    if cfg.display.language not in SUPPORTED_LANGUAGES:
        raise ConfigError(f"Unsupported language '{cfg.display.language}'")

    ratio = cfg.coins.small_balance_ratio
    if not is_valid_amount(ratio) or not 0 <= to_decimal(ratio) < 1:
        raise ConfigError(
            f"small_balance_ratio must be a decimal in [0, 1), got '{ratio}'"
        )

    if cfg.collectibles.tokens_per_row < 1:
        raise ConfigError("tokens_per_row must be at least 1")

    preload = cfg.preload
    for name in (
        "large_family_threshold",
        "min_top_fold_threshold",
        "batch_size",
        "max_concurrency",
        "request_timeout",
    ):
        if getattr(preload, name) < 1:
            raise ConfigError(f"preload.{name} must be positive")
