from __future__ import annotations

import logging
from datetime import date

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import get_current_user, require_admin, require_user
from .auth.models import CanteenAdmin, LoginRequest
from .auth.users import authenticate, canteen_name, list_canteens
from .config import DEFAULT_SETTINGS
from .insights.performance import compute_insights, learned_eta
from .menu import store as menu_store
from .menu.models import MenuItem, MenuItemCreate, MenuItemUpdate, SeedResponse
from .menu.seed import seed_menu
from .orders import store as order_store
from .orders.cart import (
    add_to_cart,
    cart_count,
    load_cart,
    max_eta,
    remove_from_cart,
    save_cart,
    summarize,
    update_quantity,
)
from .orders.history import order_history, vendor_summary
from .orders.models import (
    CartAddRequest,
    CartItem,
    CartQuantityRequest,
    CartResponse,
    CheckoutRequest,
    Order,
    OrderLine,
    StatusUpdateRequest,
)
from .recommendations.models import (
    CanteenAggregateOut,
    ScoredItemOut,
    ScoreRequest,
    ScoreResponse,
)
from .recommendations.predictor import item_score, recommend_canteen, recommend_item
from .recommendations.snapshot import build_records
from .student.layout import student_layout

logging.getLogger("campus_grab").setLevel(DEFAULT_SETTINGS.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Campus Grab API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_SETTINGS.session_secret)


def _penalty(value: float | None) -> float:
    return DEFAULT_SETTINGS.wait_penalty if value is None else value


def _owned_item(item_id: str, admin: CanteenAdmin) -> MenuItem:
    """Fetch a menu item belonging to *admin*; other canteens' items are 404."""
    try:
        item = menu_store.get_item(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if item.admin_id != admin.admin_id:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/canteens")
def canteens() -> list[dict]:
    result = []
    for canteen in list_canteens():
        items = menu_store.list_items(admin_id=canteen["admin_id"], available_only=True)
        result.append({**canteen, "available_items": len(items)})
    return result


@app.get("/menu", response_model=list[MenuItem])
def menu(admin_id: str | None = None) -> list[MenuItem]:
    return menu_store.list_items(admin_id=admin_id, available_only=True)


@app.get("/layout")
def layout(request: Request, path: str | None = None) -> dict:
    user = get_current_user(request)
    cart = load_cart(request.session)
    order = order_store.current_order(user_id=user["id"]) if user else None
    return student_layout(user, cart_count(cart), order, active_path=path)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        logger.info("Failed login for %s", body.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Cart ─────────────────────────────────────────────────────────────────


@app.get("/cart", response_model=CartResponse)
def get_cart(request: Request, user: dict = Depends(require_user)) -> CartResponse:
    return summarize(load_cart(request.session))


@app.post("/cart/items", response_model=CartResponse)
def cart_add(
    body: CartAddRequest,
    request: Request,
    user: dict = Depends(require_user),
) -> CartResponse:
    try:
        item = menu_store.get_item(body.item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not item.available:
        raise HTTPException(status_code=400, detail="Item is not available")

    cart = add_to_cart(
        load_cart(request.session),
        CartItem(
            id=item.id,
            name=item.name,
            price=item.price,
            eta_minutes=item.eta_minutes,
            admin_id=item.admin_id,
        ),
    )
    save_cart(request.session, cart)
    return summarize(cart)


@app.patch("/cart/items/{item_id}", response_model=CartResponse)
def cart_update(
    item_id: str,
    body: CartQuantityRequest,
    request: Request,
    user: dict = Depends(require_user),
) -> CartResponse:
    cart = update_quantity(load_cart(request.session), item_id, body.quantity)
    save_cart(request.session, cart)
    return summarize(cart)


@app.delete("/cart/items/{item_id}", response_model=CartResponse)
def cart_remove(item_id: str, request: Request, user: dict = Depends(require_user)) -> CartResponse:
    cart = remove_from_cart(load_cart(request.session), item_id)
    save_cart(request.session, cart)
    return summarize(cart)


@app.delete("/cart", response_model=CartResponse)
def cart_clear(request: Request, user: dict = Depends(require_user)) -> CartResponse:
    save_cart(request.session, [])
    return summarize([])


# ── Student orders ───────────────────────────────────────────────────────


@app.post("/orders", response_model=Order)
def checkout(
    body: CheckoutRequest,
    request: Request,
    user: dict = Depends(require_user),
) -> Order:
    cart = load_cart(request.session)
    if not cart:
        raise HTTPException(status_code=400, detail="Cart is empty")
    admin_ids = {i.admin_id for i in cart}
    if len(admin_ids) > 1:
        raise HTTPException(status_code=400, detail="Cart contains items from more than one canteen")

    order = order_store.add_order(
        [
            OrderLine(
                item_id=i.id,
                name=i.name,
                quantity=i.quantity,
                price=i.price,
                eta_minutes=i.eta_minutes,
            )
            for i in cart
        ],
        estimated_time=max_eta(cart),
        admin_id=admin_ids.pop(),
        user_id=user["id"],
        payment_method=body.payment_method,
    )
    save_cart(request.session, [])
    return order


@app.get("/orders", response_model=list[Order])
def my_orders(user: dict = Depends(require_user)) -> list[Order]:
    return order_store.list_orders(user_id=user["id"])


@app.get("/orders/current", response_model=Order | None)
def my_current_order(user: dict = Depends(require_user)) -> Order | None:
    return order_store.current_order(user_id=user["id"])


@app.get("/orders/history")
def my_order_history(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=2000),
    user: dict = Depends(require_user),
) -> dict:
    return order_history(order_store.list_orders(user_id=user["id"]), month=month, year=year)


# ── Recommendations ──────────────────────────────────────────────────────


@app.get("/recommendations/item", response_model=ScoredItemOut | None)
def recommended_item(
    admin_id: str | None = None,
    penalty: float | None = Query(default=None, ge=0),
    user: dict = Depends(require_user),
) -> ScoredItemOut | None:
    records = build_records(
        menu_store.list_items(admin_id=admin_id),
        order_store.active_orders(admin_id=admin_id),
        canteen_name,
    )
    best = recommend_item(records, _penalty(penalty))
    if best is None:
        return None
    return ScoredItemOut(item=best.item.model_dump(), score=best.score)


@app.get("/recommendations/canteen", response_model=CanteenAggregateOut | None)
def recommended_canteen(
    penalty: float | None = Query(default=None, ge=0),
    user: dict = Depends(require_user),
) -> CanteenAggregateOut | None:
    records = build_records(menu_store.list_items(), order_store.active_orders(), canteen_name)
    best = recommend_canteen(records, _penalty(penalty))
    if best is None:
        return None
    return CanteenAggregateOut(canteen=best.canteen, avg_score=best.avg_score)


@app.post("/recommendations/score", response_model=ScoreResponse)
def score_items(body: ScoreRequest, user: dict = Depends(require_user)) -> ScoreResponse:
    best_item = recommend_item(body.items, body.penalty)
    best_canteen = recommend_canteen(body.items, body.penalty)
    return ScoreResponse(
        scores=[item_score(item, body.penalty) for item in body.items],
        recommended_item=(
            ScoredItemOut(item=best_item.item, score=best_item.score) if best_item else None
        ),
        recommended_canteen=(
            CanteenAggregateOut(canteen=best_canteen.canteen, avg_score=best_canteen.avg_score)
            if best_canteen
            else None
        ),
    )


@app.get("/insights")
def insights(user: dict = Depends(require_user)) -> dict:
    return compute_insights(order_store.list_orders(), canteen_name)


@app.get("/insights/eta/{item_id}")
def insights_eta(item_id: str, user: dict = Depends(require_user)) -> dict:
    return {"item_id": item_id, "learned_eta": learned_eta(order_store.list_orders(), item_id)}


# ── Admin: menu ──────────────────────────────────────────────────────────


@app.get("/admin/me", response_model=CanteenAdmin)
def admin_me(admin: CanteenAdmin = Depends(require_admin)) -> CanteenAdmin:
    return admin


@app.get("/admin/menu", response_model=list[MenuItem])
def admin_menu(admin: CanteenAdmin = Depends(require_admin)) -> list[MenuItem]:
    return menu_store.list_items(admin_id=admin.admin_id)


@app.post("/admin/menu", response_model=MenuItem, status_code=201)
def admin_add_item(body: MenuItemCreate, admin: CanteenAdmin = Depends(require_admin)) -> MenuItem:
    return menu_store.add_item(admin.admin_id, body)


@app.post("/admin/menu/seed", response_model=SeedResponse)
def admin_seed_menu(admin: CanteenAdmin = Depends(require_admin)) -> SeedResponse:
    return seed_menu(admin.admin_id)


@app.patch("/admin/menu/{item_id}", response_model=MenuItem)
def admin_update_item(
    item_id: str,
    body: MenuItemUpdate,
    admin: CanteenAdmin = Depends(require_admin),
) -> MenuItem:
    _owned_item(item_id, admin)
    updates = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k == "image_url"
    }
    return menu_store.update_item(item_id, updates)


@app.post("/admin/menu/{item_id}/toggle", response_model=MenuItem)
def admin_toggle_item(item_id: str, admin: CanteenAdmin = Depends(require_admin)) -> MenuItem:
    _owned_item(item_id, admin)
    return menu_store.toggle_availability(item_id)


@app.delete("/admin/menu/{item_id}")
def admin_delete_item(item_id: str, admin: CanteenAdmin = Depends(require_admin)) -> dict:
    _owned_item(item_id, admin)
    menu_store.delete_item(item_id)
    return {"status": "deleted", "id": item_id}


# ── Admin: orders ────────────────────────────────────────────────────────


@app.get("/admin/orders", response_model=list[Order])
def admin_orders(admin: CanteenAdmin = Depends(require_admin)) -> list[Order]:
    return order_store.list_orders(admin_id=admin.admin_id)


@app.get("/admin/orders/vendor")
def admin_vendor_summary(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=2000),
    day: date | None = Query(default=None, alias="date"),
    admin: CanteenAdmin = Depends(require_admin),
) -> dict:
    return vendor_summary(
        order_store.list_orders(admin_id=admin.admin_id),
        month=month,
        year=year,
        day=day,
    )


@app.patch("/admin/orders/{order_id}", response_model=Order)
def admin_update_order(
    order_id: str,
    body: StatusUpdateRequest,
    admin: CanteenAdmin = Depends(require_admin),
) -> Order:
    try:
        order = order_store.get_order(order_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Order not found")
    if order.admin_id != admin.admin_id:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_store.update_order_status(order_id, body.status)
