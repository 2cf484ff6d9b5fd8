"""
Wait estimation heuristics.

A menu item's score is its expected wait in minutes::

    score = prep_time + pending_orders * penalty

Lower is better. Records may be ``MenuItemRecord`` instances, plain dicts
or any object exposing the fields; see ``MenuItemRecord`` for defaults.
"""
from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter
from typing import Any

from .models import CanteenAggregate, MenuItemRecord, ScoredItem

_EMPTY = object()


def item_score(item: Any, penalty: float = 1) -> float:
    """Expected wait for a single item. Never raises on bad field values."""
    record = MenuItemRecord.from_record(item)
    return record.prep_time + record.pending_orders * penalty


def recommend_item(items: Iterable[Any] | None, penalty: float = 1) -> ScoredItem | None:
    """Return the lowest-scoring item, or ``None`` for a missing/empty input.

    Ties keep the earliest item: a later item only wins with a strictly
    lower score.
    """
    if items is None:
        return None
    iterator = iter(items)
    best = next(iterator, _EMPTY)
    if best is _EMPTY:
        return None

    best_score = item_score(best, penalty)
    for item in iterator:
        score = item_score(item, penalty)
        if score < best_score:
            best, best_score = item, score
    return ScoredItem(item=best, score=best_score)


def recommend_canteen(items: Iterable[Any], penalty: float = 1) -> CanteenAggregate | None:
    """Return the canteen with the lowest mean item score.

    Unlike ``recommend_item`` there is no ``None`` guard: passing ``None``
    raises ``TypeError``. An empty input returns ``None``.

    Groups keep the order in which canteens are first seen and the minimum
    is taken with a stable sort, so ties go to the first-seen canteen.
    """
    groups: dict[str, list[float]] = {}
    for item in items:
        record = MenuItemRecord.from_record(item)
        totals = groups.setdefault(record.canteen, [0.0, 0])
        totals[0] += item_score(record, penalty)
        totals[1] += 1

    aggregates = [
        CanteenAggregate(canteen=canteen, avg_score=total / count)
        for canteen, (total, count) in groups.items()
    ]
    if not aggregates:
        return None
    return sorted(aggregates, key=attrgetter("avg_score"))[0]
