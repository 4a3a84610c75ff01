"""Dashboard data routes against the in-memory Firestore fake."""

from datetime import UTC, datetime

from fastapi import FastAPI
from httpx import AsyncClient

from tests.fakes import FakeFirestore

CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _order(status: str, minute: int, total: float) -> dict:
    return {
        "userId": "u1",
        "status": status,
        "total": total,
        "createdAt": CREATED.replace(minute=minute),
        "items": [{"productId": "p1", "productName": "Oil", "quantity": 1, "price": total}],
    }


async def test_store_not_configured_returns_503(
    client: AsyncClient, app: FastAPI, auth_headers: dict[str, str]
) -> None:
    app.state.document_store = None
    response = await client.get("/api/v1/orders", headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_list_orders_newest_first_with_status_filter(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed("orders", "o1", _order("confirmed", 1, 50))
    fake_db.seed("orders", "o2", _order("completed", 2, 80))
    fake_db.seed("orders", "o3", _order("confirmed", 3, 20))

    response = await client.get("/api/v1/orders", headers=auth_headers)
    assert [o["id"] for o in response.json()] == ["o3", "o2", "o1"]

    response = await client.get(
        "/api/v1/orders", params={"status": "confirmed"}, headers=auth_headers
    )
    data = response.json()
    assert [o["id"] for o in data] == ["o3", "o1"]
    assert data[0]["items"][0]["unit_price"] == 20


async def test_list_orders_falls_back_when_index_missing(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed("orders", "o1", _order("confirmed", 1, 50))
    fake_db.seed("orders", "o2", _order("completed", 2, 80))
    fake_db.fail_ordered_queries = True
    response = await client.get(
        "/api/v1/orders", params={"status": "completed"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert [o["id"] for o in response.json()] == ["o2"]


async def test_update_order_status(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed("orders", "o1", _order("confirmed", 1, 50))
    response = await client.patch(
        "/api/v1/orders/o1/status", json={"status": "inProgress"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "inProgress"
    assert fake_db.docs("orders")["o1"]["status"] == "inProgress"
    assert "updatedAt" in fake_db.docs("orders")["o1"]


async def test_update_missing_order_returns_404(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.patch(
        "/api/v1/orders/nope/status", json={"status": "completed"}, headers=auth_headers
    )
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_invalid_order_status_is_422(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed("orders", "o1", _order("confirmed", 1, 50))
    response = await client.patch(
        "/api/v1/orders/o1/status", json={"status": "shipped"}, headers=auth_headers
    )
    assert response.status_code == 422


async def test_assign_mechanic_dispatches_request(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed(
        "emergency_requests",
        "e1",
        {"userId": "u1", "status": "pending", "type": "breakdown", "createdAt": CREATED},
    )
    response = await client.post(
        "/api/v1/emergencies/e1/assign",
        json={"mechanic_id": "m1", "mechanic_name": "Hafiz"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "dispatched"
    assert data["mechanic_name"] == "Hafiz"
    assert data["dispatched_at"] is not None


async def test_create_product_and_bulk_reprice(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/products",
        json={"name": "Brake pads", "category": "brakes", "price": 100},
        headers=auth_headers,
    )
    assert response.status_code == 201
    product_id = response.json()["id"]
    stored = fake_db.docs("products")[product_id]
    assert stored["inStock"] is True
    assert stored["rating"] == 0
    assert "createdAt" in stored

    response = await client.post(
        "/api/v1/products/bulk-price",
        json={"product_ids": [product_id, "ghost"], "type": "percentage", "value": -15},
        headers=auth_headers,
    )
    assert response.json() == {"count": 1}
    assert fake_db.docs("products")[product_id]["price"] == 85


async def test_update_stock_sets_in_stock_flag(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed(
        "products", "p1", {"name": "Wiper", "price": 30, "stockQuantity": 4, "inStock": True}
    )
    response = await client.patch(
        "/api/v1/products/p1/stock", json={"quantity": 0}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["in_stock"] is False


async def test_create_voucher_upper_cases_code(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/vouchers",
        json={
            "code": "raya20",
            "title": "Raya sale",
            "discount_value": 20,
            "is_percentage": True,
            "valid_from": "2024-04-01T00:00:00Z",
            "valid_until": "2024-04-30T00:00:00Z",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    stored = fake_db.docs("vouchers")[response.json()["id"]]
    assert stored["code"] == "RAYA20"
    assert stored["discountValue"] == 20
    assert "minSpend" not in stored


async def test_create_voucher_rejects_zero_discount(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/vouchers",
        json={
            "code": "FREE",
            "title": "Nothing",
            "discount_value": 0,
            "valid_from": "2024-04-01T00:00:00Z",
            "valid_until": "2024-04-30T00:00:00Z",
        },
        headers=auth_headers,
    )
    assert response.status_code == 422


async def test_list_users_pages_with_cursor(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    for i in range(1, 4):
        fake_db.seed(
            "users", f"u{i}", {"name": f"User {i}", "createdAt": CREATED.replace(day=i)}
        )
    response = await client.get(
        "/api/v1/users", params={"page_size": 2}, headers=auth_headers
    )
    data = response.json()
    assert [u["id"] for u in data["users"]] == ["u3", "u2"]
    assert data["last_doc_id"] == "u2"

    response = await client.get(
        "/api/v1/users",
        params={"page_size": 2, "start_after": "u2"},
        headers=auth_headers,
    )
    assert [u["id"] for u in response.json()["users"]] == ["u1"]


async def test_suspend_user_records_reason(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed("users", "u1", {"name": "Ali", "status": "active", "createdAt": CREATED})
    response = await client.post(
        "/api/v1/users/u1/suspend", json={"reason": "chargebacks"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "suspended"
    assert fake_db.docs("users")["u1"]["suspensionReason"] == "chargebacks"


async def test_delete_missing_review_returns_404(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.delete("/api/v1/reviews/nope", headers=auth_headers)
    assert response.status_code == 404


async def test_delete_review_recomputes_target_rating(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    fake_db.seed("products", "p1", {"name": "Oil", "rating": 3.0, "reviewCount": 2})
    base = {"targetId": "p1", "targetType": "product", "createdAt": CREATED}
    fake_db.seed("reviews", "r1", {**base, "rating": 5})
    fake_db.seed("reviews", "r2", {**base, "rating": 1})
    response = await client.delete("/api/v1/reviews/r2", headers=auth_headers)
    assert response.status_code == 204
    assert fake_db.docs("products")["p1"]["rating"] == 5.0
    assert fake_db.docs("products")["p1"]["reviewCount"] == 1


async def test_send_notification_to_selected_users(
    client: AsyncClient, fake_db: FakeFirestore, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/notifications",
        json={
            "title": "Service due",
            "body": "Your car is due for service",
            "type": "booking",
            "data": {"bookingId": "b1"},
            "user_ids": ["u1", "u2"],
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert len(data["ids"]) == 2
    assert data["push_payload"] == {
        "notification": {"title": "Service due", "body": "Your car is due for service"},
        "data": {"type": "booking", "bookingId": "b1"},
    }
    stored = fake_db.docs("notifications")
    assert sorted(n["userId"] for n in stored.values()) == ["u1", "u2"]
    assert all(n["isRead"] is False for n in stored.values())


async def test_ui_state_round_trip(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.get("/api/v1/ui", headers=auth_headers)
    assert response.json() == {
        "sidebar_collapsed": False,
        "current_page": "dashboard",
        "notifications": [],
    }

    response = await client.post("/api/v1/ui/sidebar/toggle", headers=auth_headers)
    assert response.json()["sidebar_collapsed"] is True

    response = await client.put(
        "/api/v1/ui/page", json={"page": "orders"}, headers=auth_headers
    )
    assert response.json()["current_page"] == "orders"


async def test_ui_notifications_dismiss(
    client: AsyncClient, app: FastAPI, auth_headers: dict[str, str]
) -> None:
    first = app.state.app_state.notify("info", "Saved")
    app.state.app_state.notify("warning", "Low stock")

    response = await client.get("/api/v1/ui/notifications", headers=auth_headers)
    assert [n["message"] for n in response.json()] == ["Saved", "Low stock"]

    response = await client.delete(
        f"/api/v1/ui/notifications/{first.id}", headers=auth_headers
    )
    assert response.status_code == 204
    response = await client.get("/api/v1/ui/notifications", headers=auth_headers)
    assert [n["message"] for n in response.json()] == ["Low stock"]

    await client.delete("/api/v1/ui/notifications", headers=auth_headers)
    response = await client.get("/api/v1/ui/notifications", headers=auth_headers)
    assert response.json() == []


async def test_dashboard_on_empty_store(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.get("/api/v1/analytics/dashboard", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["orders"]["total"] == 0
    assert data["emergencies"]["pending"] == 0
