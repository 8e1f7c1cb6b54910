"""
Calendar divisors, unit conversions and reporting factors.
"""

from typing import Final


class Calendar:
    """Fixed divisors used to spread annual consumption over shorter periods."""
    HOURS_PER_DAY: Final[int] = 24
    DAYS_PER_WEEK: Final[int] = 7
    DAYS_PER_YEAR: Final[int] = 365
    MONTHS_PER_YEAR: Final[int] = 12
    HOURS_PER_YEAR: Final[int] = 8760


class Units:
    LITERS_PER_M3: Final[float] = 1000.0


class WaterEquivalence:
    """Everyday volumes used to contextualise yearly savings."""
    SHOWER_LITERS: Final[float] = 45.0      # 5 minute shower
    POOL_LITERS: Final[float] = 45000.0     # average residential pool
    BOTTLE_LITERS: Final[float] = 1.5


# Sentinel multiplier for payback that never happens within the rated life
PAYBACK_SENTINEL_LIFETIMES: Final[float] = 2.0

WEBHOOK_TIMEOUT_S: Final[float] = 10.0
WEBHOOK_BODY_LOG_LIMIT: Final[int] = 2000
