"""Leaf comparison rules for scalars and timestamps."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from .values import ValueKind, kind_of


def compare_timestamps(
    old: datetime,
    new: datetime,
    truncate_subsecond: bool = True
) -> bool:
    """
    Compare two timestamps as instants.

    Aware timestamps in different zones are equal when they denote the
    same instant. A naive timestamp never equals an aware one.

    Args:
        old: The expected timestamp
        new: The actual timestamp
        truncate_subsecond: Drop microseconds on both sides first

    Returns:
        True if the instants match
    """
    if truncate_subsecond:
        old = _truncate(old)
        new = _truncate(new)
    return bool(old == new)


def _truncate(value: datetime) -> datetime:
    # truncate the UTC instant; offsets can have a sub-second part
    if value.utcoffset() is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0)


def is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def compare_numbers(old: Any, new: Any) -> bool:
    """
    Mathematical equality, so 1 == 1.0 and Decimal('2.5') == 2.5.

    NaN equals NaN (quiet or signalling) and nothing else; NaNs never
    reach == since a signalling Decimal NaN raises there.
    """
    old_nan = is_nan(old)
    new_nan = is_nan(new)
    if old_nan or new_nan:
        return old_nan and new_nan
    return bool(old == new)


def compare_scalars(old: Any, new: Any) -> bool:
    """
    Exact equality with no cross-type coercion.

    Numbers are the only variant allowed to differ in Python type;
    booleans are never numbers here, so True != 1.
    """
    if kind_of(old) is ValueKind.NUMBER and kind_of(new) is ValueKind.NUMBER:
        return compare_numbers(old, new)
    if type(old) is not type(new):
        return False
    return bool(old == new)
