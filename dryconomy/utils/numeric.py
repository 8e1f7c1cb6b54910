"""
Numeric guards for computed fields.

Every value that leaves the calculator passes through safe_number so that
incomplete city data (zero or missing baselines) degrades to 0 instead of
leaking NaN or Infinity into stored records and webhook payloads.
"""

import logging
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


def safe_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce a computed value to a finite float.

    Args:
        value: Number (or numeric string) to check.
        default: Replacement for None, NaN, +/-inf and unparseable input.

    Returns:
        float: value as a plain Python float, or default.
    """
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric value {value!r} coerced to {default}")
        return default
    if not np.isfinite(number):
        logger.warning(f"Non-finite value {number} coerced to {default}")
        return default
    return number


def is_finite_number(value: Any) -> bool:
    """True if value is a real number (bool excluded) with a finite value."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        return False
    return bool(np.isfinite(value))
