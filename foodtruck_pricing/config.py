"""Pricing settings and logging setup.

Settings come from the environment:
    PRICING_LOYALTY_ENABLED: "true" (default) or "false"
    PRICING_OFFERS_STACKABLE: treat every deal as stackable (default "false")
    PRICING_PROMO_CODES_STACKABLE: promo codes stack with deals (default "true")
    PRICING_POINTS_PER_EURO: fallback loyalty accrual rate (default 1)
    PRICING_CURRENCY: receipt currency (default EUR)
    PRICING_LOG_LEVEL: DEBUG, INFO (default), WARNING or ERROR
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

import structlog

from .errors import ContractViolationError
from .money import CURRENCY_SYMBOLS
from .validation import require_one_of

LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ContractViolationError(f"{key} must be a boolean, got {raw!r}")


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ContractViolationError(f"{key} must be an integer, got {raw!r}", e) from e
    if value <= 0:
        raise ContractViolationError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class PricingSettings:
    loyalty_enabled: bool = True
    offers_stackable: bool = False
    promo_codes_stackable: bool = True
    default_points_per_euro: int = 1
    currency: str = "EUR"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "PricingSettings":
        env = os.environ if env is None else env

        currency = require_one_of(env.get("PRICING_CURRENCY", "EUR").upper(), CURRENCY_SYMBOLS, "PRICING_CURRENCY")
        log_level = require_one_of(env.get("PRICING_LOG_LEVEL", "INFO").upper(), LOG_LEVELS, "PRICING_LOG_LEVEL")

        return cls(
            loyalty_enabled=_env_bool(env, "PRICING_LOYALTY_ENABLED", True),
            offers_stackable=_env_bool(env, "PRICING_OFFERS_STACKABLE", False),
            promo_codes_stackable=_env_bool(env, "PRICING_PROMO_CODES_STACKABLE", True),
            default_points_per_euro=_env_int(env, "PRICING_POINTS_PER_EURO", 1),
            currency=currency,
            log_level=log_level,
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON rendering and ISO timestamps."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
