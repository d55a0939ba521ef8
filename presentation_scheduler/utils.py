#!/usr/bin/env python3
"""
Utility functions for the scheduling system.
"""

import datetime
from typing import Callable, Hashable, Iterable, Optional, Tuple


def date_distance(a, b) -> float:
    """Absolute distance between two date points (days for dates, raw units for ints)."""
    if isinstance(a, datetime.date) and isinstance(b, datetime.date):
        return abs(a - b) / datetime.timedelta(days=1)
    return float(abs(a - b))


def badness(a, b) -> float:
    """
    Closeness penalty between two presentation dates.

    The reciprocal of their distance, so presentations held close together
    cost more than presentations far apart. Symmetric in its arguments.

    Raises:
        ZeroDivisionError: if ``a`` and ``b`` are the same point
    """
    distance = date_distance(a, b)
    if distance == 0:
        raise ZeroDivisionError(f"badness is undefined for equal dates ({a!r})")
    return 1.0 / distance


def stringify_date(d) -> str:
    """Format a date point as a column label. 2024-09-11 -> '11/9'"""
    if isinstance(d, datetime.date):
        return f"{d.day}/{d.month}"
    return str(d)


# Sentinel value for "match all" in filter_keys
ALL = object()


def filter_keys(
    keys: Iterable[Tuple[Hashable, object]],
    individual: Hashable | object = ALL,
    date: object = ALL,
    predicate: Optional[Callable[[Hashable, object], bool]] = None
) -> list[Tuple[Hashable, object]]:
    """
    Filter (individual, date) variable keys by exact values or custom predicate.

    Args:
        keys: Iterable of (individual, date) tuples to filter (set, list, etc.)
        individual: Exact individual to match, or ALL to match everyone
        date: Exact meeting date to match, or ALL to match all dates
        predicate: Custom function (individual, date) -> bool
                   If provided, overrides exact matching parameters

    Returns:
        Filtered list of keys matching the criteria, in input order

    Examples:
        # All dates for one individual
        filter_keys(keys, individual='Jane')

        # Everyone on one date
        filter_keys(keys, date=datetime.date(2024, 9, 11))

        # Keys on dates after the summer break
        filter_keys(keys, predicate=lambda i, d: d >= datetime.date(2024, 9, 1))
    """
    # If predicate provided, use it exclusively
    if predicate is not None:
        return [k for k in keys if predicate(k[0], k[1])]

    def matches(i, d) -> bool:
        if individual is not ALL and i != individual:
            return False
        if date is not ALL and d != date:
            return False
        return True

    return [k for k in keys if matches(k[0], k[1])]
