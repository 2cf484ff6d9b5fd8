from __future__ import annotations

from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from campus_grab.app import app
from campus_grab.insights.performance import (
    actual_prep_minutes,
    canteen_performance,
    compute_insights,
    data_confidence,
    is_peak_hour,
    item_performance,
    learned_eta,
    recent_orders,
)
from campus_grab.orders import store
from campus_grab.orders.models import Order, OrderLine, OrderStatus


def _done(item_id: str, eta: int, minutes: float, hour: int = 10, admin_id: str = "admin1") -> Order:
    created = datetime(2026, 3, 2, hour, 0)
    return Order(
        id=f"ORD-{item_id}-{minutes}-{hour}",
        token_number="#0001",
        items=[OrderLine(item_id=item_id, name=f"Item {item_id}", quantity=1, price=50, eta_minutes=eta)],
        total=50,
        status=OrderStatus.completed,
        created_at=created,
        completed_at=created + timedelta(minutes=minutes),
        estimated_time=eta,
        admin_id=admin_id,
    )


def test_peak_hours():
    assert is_peak_hour(12)
    assert is_peak_hour(19)
    assert not is_peak_hour(16)
    assert not is_peak_hour(9)


def test_actual_prep_minutes_rounds():
    assert actual_prep_minutes(_done("a", 10, 7.6)) == 8
    open_order = _done("a", 10, 5).model_copy(update={"completed_at": None})
    assert actual_prep_minutes(open_order) is None


def test_item_performance_sorted_fastest_first():
    orders = [_done("slow", 10, 16), _done("fast", 10, 4), _done("fast", 10, 6)]
    perf = item_performance(orders)
    assert [p["item_id"] for p in perf] == ["fast", "slow"]
    fast = perf[0]
    assert fast["avg_actual_time"] == 5
    assert fast["order_count"] == 2
    assert fast["reliability_score"] == 1.0
    assert fast["speed_rating"] == 0.75
    assert perf[1]["reliability_score"] == 0.0


def test_zero_minute_orders_carry_no_timing():
    perf = item_performance([_done("a", 10, 0.2)])
    assert perf == []


def test_canteen_performance_splits_peak():
    orders = [
        _done("a", 10, 12, hour=12),
        _done("b", 10, 6, hour=16),
        _done("c", 10, 3, hour=16, admin_id="admin2"),
    ]
    names = {"admin1": "Bunk Spot", "admin2": "Main Canteen"}
    perf = canteen_performance(orders, lambda admin_id: names[admin_id])
    assert [p["canteen"] for p in perf] == ["Main Canteen", "Bunk Spot"]
    bunk = perf[1]
    assert bunk["avg_prep_time"] == 9
    assert bunk["peak_hour_avg"] == 12
    assert bunk["off_peak_avg"] == 6
    assert bunk["total_orders"] == 2


def test_data_confidence_thresholds():
    assert data_confidence(0) == "low"
    assert data_confidence(19) == "low"
    assert data_confidence(20) == "medium"
    assert data_confidence(50) == "high"


def test_compute_insights_recommends_quickest_canteen():
    orders = [_done("a", 10, 12, hour=12), _done("c", 10, 3, hour=12, admin_id="admin2")]
    insights = compute_insights(orders, now=datetime(2026, 3, 2, 12, 30))
    assert insights["total_orders_analyzed"] == 2
    assert insights["data_confidence"] == "low"
    assert insights["best_canteen"]["canteen"] == "admin2"
    assert insights["peak_hour_recommendation"] == "Canteen admin2 is fastest during peak hours"
    assert [i["item_id"] for i in insights["fastest_items"]] == ["c", "a"]


def test_compute_insights_without_data():
    insights = compute_insights([])
    assert insights["best_canteen"] is None
    assert insights["fastest_items"] == []
    assert insights["peak_hour_recommendation"] == ""


def test_learned_eta_needs_three_orders():
    orders = [_done("a", 10, 6), _done("a", 10, 8)]
    assert learned_eta(orders, "a") is None
    orders.append(_done("a", 10, 10))
    assert learned_eta(orders, "a") == 8


def test_insights_only_read_the_newest_orders():
    oldest = _done("old", 10, 1, hour=6)
    newer = []
    for i in range(500):
        order = _done("new", 10, 9, hour=9)
        newer.append(order.model_copy(update={
            "id": f"ORD-new-{i}",
            "created_at": order.created_at + timedelta(seconds=i),
            "completed_at": order.completed_at + timedelta(seconds=i),
        }))
    orders = [oldest, *newer]

    recent = recent_orders(orders)
    assert len(recent) == 500
    assert oldest not in recent
    assert recent[0].id == "ORD-new-499"

    insights = compute_insights(orders, now=datetime(2026, 3, 2, 9, 30))
    assert insights["total_orders_analyzed"] == 500
    assert insights["data_confidence"] == "high"
    assert [i["item_id"] for i in insights["fastest_items"]] == ["new"]
    assert learned_eta(orders, "old") is None


def test_insights_route():
    store.clear_orders()
    line = OrderLine(item_id="m1", name="Veg Burger", quantity=1, price=60, eta_minutes=8)
    order = store.add_order(
        [line], estimated_time=8, admin_id="admin1", created_at=datetime(2026, 3, 2, 16, 0),
    )
    store.update_order_status(order.id, OrderStatus.completed, now=datetime(2026, 3, 2, 16, 7))

    c = TestClient(app)
    c.post("/auth/login", json={"username": "student", "password": "student123"})
    body = c.get("/insights").json()
    assert body["total_orders_analyzed"] == 1
    assert body["best_canteen"]["canteen"] == "Bunk Spot"
    assert body["fastest_items"][0]["avg_actual_time"] == 7

    eta = c.get("/insights/eta/m1").json()
    assert eta == {"item_id": "m1", "learned_eta": None}
