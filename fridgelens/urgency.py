"""Freshness classification of ingredients by expiry date."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Ingredient

_SECONDS_PER_DAY = 24 * 60 * 60

CRITICAL_DAYS = 3
WARNING_DAYS = 7
# Items that expired yesterday still count as "use first" for recipes.
EXPIRY_GRACE_DAYS = 1


class Urgency(str, Enum):
    NONE = "none"
    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    GOOD = "good"


URGENCY_BADGES: dict[Urgency, str] = {
    Urgency.CRITICAL: "Acil Tüket!",
    Urgency.EXPIRED: "Süresi Dolmuş",
}


def days_until(expiry: date | datetime, today: date | None = None) -> int:
    """Whole days from today's midnight until ``expiry``.

    A datetime keeps its time of day, so the partial day rounds up.
    """
    today = today or date.today()
    if isinstance(today, datetime):
        today = today.date()
    if isinstance(expiry, datetime):
        midnight = datetime.combine(today, time(), tzinfo=expiry.tzinfo)
        delta = expiry - midnight
        return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)
    return (expiry - today).days


def urgency_level(
    expiry: date | datetime | None, today: date | None = None
) -> Urgency:
    if expiry is None:
        return Urgency.NONE
    days = days_until(expiry, today)
    if days < 0:
        return Urgency.EXPIRED
    if days <= CRITICAL_DAYS:
        return Urgency.CRITICAL
    if days <= WARNING_DAYS:
        return Urgency.WARNING
    return Urgency.GOOD


def expiring_soon(
    ingredients: Iterable[Ingredient], today: date | None = None
) -> list[str]:
    """Names of ingredients to use first, in list order."""
    result: list[str] = []
    for ing in ingredients:
        if ing.expiry_date is None:
            continue
        days = days_until(ing.expiry_date, today)
        if -EXPIRY_GRACE_DAYS <= days <= CRITICAL_DAYS:
            result.append(ing.name)
    return result
