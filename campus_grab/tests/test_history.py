from __future__ import annotations

from datetime import date, datetime

from fastapi.testclient import TestClient

from campus_grab.app import app
from campus_grab.orders import store
from campus_grab.orders.history import order_history, vendor_summary
from campus_grab.orders.models import Order, OrderLine, OrderStatus

client = TestClient(app)


def _order(created: datetime, total: float = 100, status=OrderStatus.completed, **kw) -> Order:
    return Order(
        id=f"ORD-{created.isoformat()}",
        token_number="#0001",
        items=[OrderLine(item_id="m1", name="Veg Burger", quantity=1, price=total)],
        total=total,
        status=status,
        created_at=created,
        estimated_time=10,
        **kw,
    )


ORDERS = [
    _order(datetime(2026, 3, 2, 12, 0), 100),
    _order(datetime(2026, 3, 2, 13, 0), 50),
    _order(datetime(2026, 3, 5, 9, 0), 70),
    _order(datetime(2026, 4, 1, 9, 0), 30),
    _order(datetime(2025, 12, 31, 19, 0), 20),
]


def test_history_groups_by_day_newest_first():
    days = order_history(ORDERS)["days"]
    assert [d["date"] for d in days] == [
        "2026-04-01", "2026-03-05", "2026-03-02", "2025-12-31",
    ]
    march_2 = days[2]
    assert march_2["order_count"] == 2
    assert march_2["total_revenue"] == 150


def test_history_filters_month_and_year():
    march = order_history(ORDERS, month=3, year=2026)["days"]
    assert [d["date"] for d in march] == ["2026-03-05", "2026-03-02"]

    year = order_history(ORDERS, year=2025)["days"]
    assert [d["date"] for d in year] == ["2025-12-31"]


def test_vendor_summary_for_a_day_excludes_pending():
    orders = [*ORDERS, _order(datetime(2026, 3, 2, 14, 0), 999, status=OrderStatus.pending)]
    summary = vendor_summary(orders, day=date(2026, 3, 2))
    assert summary["order_count"] == 2
    assert summary["total_revenue"] == 150


def test_vendor_summary_for_month():
    summary = vendor_summary(ORDERS, month=3, year=2026)
    assert summary["month"] == 3
    assert summary["year"] == 2026
    assert summary["total_orders"] == 3
    assert summary["month_total"] == 220
    assert [d["date"] for d in summary["days"]] == ["2026-03-05", "2026-03-02"]


def test_vendor_summary_defaults_to_current_month():
    summary = vendor_summary(ORDERS, today=date(2026, 4, 18))
    assert (summary["month"], summary["year"]) == (4, 2026)
    assert summary["month_total"] == 30


# ── Routes ───────────────────────────────────────────────────────────────


def test_history_route_only_returns_own_orders():
    store.clear_orders()
    line = OrderLine(item_id="m1", name="Veg Burger", quantity=1, price=60)
    store.add_order([line], estimated_time=8, user_id="stu1", created_at=datetime(2026, 3, 2, 12))
    store.add_order([line], estimated_time=8, user_id="stu2", created_at=datetime(2026, 3, 2, 12))
    client.post("/auth/login", json={"username": "student", "password": "student123"})

    resp = client.get("/orders/history", params={"month": 3, "year": 2026})
    assert resp.status_code == 200
    days = resp.json()["days"]
    assert len(days) == 1
    assert days[0]["order_count"] == 1


def test_history_route_validates_month():
    client.post("/auth/login", json={"username": "student", "password": "student123"})
    assert client.get("/orders/history", params={"month": 13}).status_code == 422


def test_vendor_route_for_date():
    store.clear_orders()
    line = OrderLine(item_id="m1", name="Veg Burger", quantity=2, price=60)
    store.add_order(
        [line], estimated_time=8, admin_id="admin1",
        status=OrderStatus.ready, created_at=datetime(2026, 3, 2, 12),
    )
    store.add_order(
        [line], estimated_time=8, admin_id="admin2",
        status=OrderStatus.ready, created_at=datetime(2026, 3, 2, 12),
    )
    client.post("/auth/login", json={"username": "admin", "password": "admin123"})

    resp = client.get("/admin/orders/vendor", params={"date": "2026-03-02"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["order_count"] == 1
    assert body["total_revenue"] == 120
