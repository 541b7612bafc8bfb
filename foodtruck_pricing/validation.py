"""Validation helpers for pricing input checks.

Money and quantities must be rejected at the boundary, never clamped.
"""

from collections.abc import Collection
from typing import Any

from .errors import ContractViolationError


def require_int(value: Any, field: str) -> int:
    """Require a real integer (bools are rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolationError(f"{field} must be an integer, got {value!r}")
    return value


def require_money(value: Any, field: str) -> int:
    """Require a non-negative integer amount of minor units."""
    require_int(value, field)
    if value < 0:
        raise ContractViolationError(f"{field} cannot be negative, got {value}")
    return value


def require_positive_quantity(value: Any, field: str = "quantity") -> int:
    """Require an integer quantity of at least one."""
    require_int(value, field)
    if value <= 0:
        raise ContractViolationError(f"{field} must be positive, got {value}")
    return value


def require_one_of(value: Any, allowed: Collection[str], field: str) -> str:
    """Require that a value is one of the allowed strings."""
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ContractViolationError(f"{field} must be one of {choices}, got {value!r}")
    return value
