"""Unit conversion used when deducting recipe ingredients."""

from __future__ import annotations

import math

GRAMS_PER_KILOGRAM = 1000.0


def normalize_unit(unit: str | None) -> str:
    return (unit or "").strip().lower()


def convert_amount(amount: float, from_unit: str, to_unit: str) -> float:
    """Convert ``amount`` between units.

    Only g and kg are converted. Any other pair is assumed to already agree,
    so ml against l or pcs against g pass through unchanged.
    """

    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == "g" and target == "kg":
        return amount / GRAMS_PER_KILOGRAM
    if source == "kg" and target == "g":
        return amount * GRAMS_PER_KILOGRAM
    return amount


def round_quantity(value: float) -> float:
    """Round to 2 decimals, halves upward."""

    return math.floor(value * 100 + 0.5) / 100


__all__ = ["GRAMS_PER_KILOGRAM", "normalize_unit", "convert_amount", "round_quantity"]
