"""Expiry classification for inventory items."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

URGENT_DAYS = 3
SOON_DAYS = 7


class ExpiryStatus(str, Enum):
    URGENT = "urgent"
    SOON = "soon"
    FRESH = "fresh"


def days_until(expiry: date, today: Optional[date] = None) -> int:
    return (expiry - (today or date.today())).days


def expiry_status(expiry: date, today: Optional[date] = None) -> ExpiryStatus:
    """Classify an expiry date; already-expired items count as urgent."""

    remaining = days_until(expiry, today)
    if remaining <= URGENT_DAYS:
        return ExpiryStatus.URGENT
    if remaining <= SOON_DAYS:
        return ExpiryStatus.SOON
    return ExpiryStatus.FRESH


__all__ = ["ExpiryStatus", "URGENT_DAYS", "SOON_DAYS", "days_until", "expiry_status"]
