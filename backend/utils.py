#file: backend/utils.py

import math
from datetime import datetime, date
import pytz
from typing import Optional


def get_current_time() -> str:
    """Get current UTC time as a formatted string."""
    return datetime.now(pytz.utc).isoformat()


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def as_utc(moment: Optional[datetime]) -> datetime:
    """Return the given instant in UTC, defaulting to now."""
    if moment is None:
        return utc_now()
    if moment.tzinfo is None:
        return pytz.utc.localize(moment)
    return moment.astimezone(pytz.utc)


def today_utc() -> date:
    return utc_now().date()


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from -inf, unlike Python's banker's rounding."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded
