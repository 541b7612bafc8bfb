"""Error types for the pricing library."""

from typing import Optional


class PricingError(Exception):
    """Base class for pricing errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ContractViolationError(PricingError):
    """Caller passed malformed input (negative money, bad quantity, ...)."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(f"invalid argument: {message}", cause)


class UnknownRewardTypeError(PricingError):
    """No resolver is registered for a deal's reward type."""

    def __init__(self, reward_type: str):
        super().__init__(f"unknown reward type: {reward_type}")
        self.reward_type = reward_type


class PromoCodeRejectedError(PricingError):
    """Promo code validation failed upstream."""

    def __init__(self, code: str, reason: str = "invalid promo code"):
        super().__init__(f"promo code {code!r} rejected: {reason}")
        self.code = code
        self.reason = reason
