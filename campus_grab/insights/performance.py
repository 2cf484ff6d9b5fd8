from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..orders.models import Order

MAX_EXPECTED_MINUTES = 20
LEARNED_ETA_MIN_ORDERS = 3
MAX_ANALYZED_ORDERS = 500
_CONFIDENCE_THRESHOLDS = (("high", 50), ("medium", 20))


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def is_peak_hour(hour: int) -> bool:
    """Lunch (11-14h) and dinner (18-20h) rushes."""
    return 11 <= hour <= 14 or 18 <= hour <= 20


def actual_prep_minutes(order: Order) -> int | None:
    if order.completed_at is None:
        return None
    return round((order.completed_at - order.created_at).total_seconds() / 60)


def recent_orders(orders: list[Order], limit: int = MAX_ANALYZED_ORDERS) -> list[Order]:
    """The newest *limit* orders; older history stops influencing the stats."""
    return sorted(orders, key=lambda o: o.created_at, reverse=True)[:limit]


def _completed(orders: list[Order]) -> list[tuple[Order, int]]:
    result = []
    for order in orders:
        minutes = actual_prep_minutes(order)
        if minutes is not None:
            result.append((order, minutes))
    return result


def item_performance(orders: list[Order]) -> list[dict[str, Any]]:
    """Per-item speed stats, fastest first.

    Orders that finished in under half a minute are counted as completed
    but carry no timing signal, so they don't feed the averages.
    """
    stats: dict[str, dict[str, Any]] = {}
    for order, actual in _completed(orders):
        for line in order.items:
            entry = stats.setdefault(
                line.item_id,
                {"item_id": line.item_id, "item_name": line.name, "actual": [], "estimated": []},
            )
            if actual:
                entry["actual"].append(actual)
                entry["estimated"].append(line.eta_minutes)

    performances = []
    for entry in stats.values():
        actual_times, estimated_times = entry["actual"], entry["estimated"]
        if not actual_times:
            continue
        avg_actual = _mean(actual_times)
        beat = sum(1 for a, e in zip(actual_times, estimated_times) if a <= e)
        performances.append({
            "item_id": entry["item_id"],
            "item_name": entry["item_name"],
            "avg_actual_time": round(avg_actual, 1),
            "avg_estimated_time": round(_mean(estimated_times), 1),
            "order_count": len(actual_times),
            "speed_rating": max(0.0, min(1.0, 1 - avg_actual / MAX_EXPECTED_MINUTES)),
            "reliability_score": beat / len(actual_times),
        })

    return sorted(performances, key=lambda p: p["speed_rating"], reverse=True)


def canteen_performance(
    orders: list[Order],
    canteen_name: Callable[[str | None], str] = lambda admin_id: admin_id or "A",
) -> list[dict[str, Any]]:
    """Per-canteen prep time, split into peak and off-peak, quickest first."""
    stats: dict[str, dict[str, list[float]]] = {}
    for order, actual in _completed(orders):
        canteen = canteen_name(order.admin_id)
        peak = is_peak_hour(order.created_at.hour)
        for line in order.items:
            entry = stats.setdefault(
                canteen, {"all": [], "peak": [], "off_peak": [], "estimated": []},
            )
            if actual:
                entry["all"].append(actual)
                entry["estimated"].append(line.eta_minutes)
                entry["peak" if peak else "off_peak"].append(actual)

    results = []
    for canteen, entry in stats.items():
        times = entry["all"]
        beat = sum(1 for a, e in zip(times, entry["estimated"]) if a <= e)
        results.append({
            "canteen": canteen,
            "avg_prep_time": round(_mean(times), 1),
            "peak_hour_avg": round(_mean(entry["peak"]), 1),
            "off_peak_avg": round(_mean(entry["off_peak"]), 1),
            "total_orders": len(times),
            "reliability_score": beat / len(times) if times else 0.0,
        })

    return sorted(results, key=lambda r: r["avg_prep_time"])


def data_confidence(completed_count: int) -> str:
    for label, threshold in _CONFIDENCE_THRESHOLDS:
        if completed_count >= threshold:
            return label
    return "low"


def compute_insights(
    orders: list[Order],
    canteen_name: Callable[[str | None], str] = lambda admin_id: admin_id or "A",
    now: datetime | None = None,
) -> dict[str, Any]:
    orders = recent_orders(orders)
    completed = _completed(orders)
    items = item_performance(orders)
    canteens = canteen_performance(orders, canteen_name)

    now = now or datetime.now()
    peak = is_peak_hour(now.hour)
    recommendation = ""
    if canteens:
        key = "peak_hour_avg" if peak else "off_peak_avg"
        quickest = sorted(canteens, key=lambda c: c[key])[0]
        recommendation = (
            f"Canteen {quickest['canteen']} is "
            f"{'fastest during peak hours' if peak else 'currently quick'}"
        )

    return {
        "fastest_items": items[:5],
        "best_canteen": canteens[0] if canteens else None,
        "peak_hour_recommendation": recommendation,
        "data_confidence": data_confidence(len(completed)),
        "total_orders_analyzed": len(completed),
    }


def learned_eta(orders: list[Order], item_id: str) -> float | None:
    """Observed average prep time, once an item has enough completed orders."""
    for perf in item_performance(recent_orders(orders)):
        if perf["item_id"] == item_id and perf["order_count"] >= LEARNED_ETA_MIN_ORDERS:
            return perf["avg_actual_time"]
    return None
