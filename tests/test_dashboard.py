from datetime import date

from src.kurir.services.dashboard import compute_dashboard_stats


def _order(status, total_price, created_at, updated_at=None, user_id="user-1"):
    return {
        "id": f"{status}-{created_at}",
        "user_id": user_id,
        "status": status,
        "total_price": total_price,
        "created_at": created_at,
        "updated_at": updated_at or created_at,
    }


def test_dashboard_stats_aggregate_orders(fake_db):
    fake_db.tables["orders"] = [
        _order("pending", 10000, "2025-03-09T08:00:00+00:00"),
        _order("in_transit", None, "2025-03-10T09:00:00+00:00"),
        _order("delivered", 25000, "2025-03-09T10:00:00+00:00", "2025-03-10T07:00:00+00:00"),
        _order("delivered", 5000, "2025-03-01T10:00:00+00:00", "2025-03-02T07:00:00+00:00"),
        _order("cancelled", "7500", "2025-03-10T11:00:00+00:00"),
        _order("pending", 99999, "2025-03-10T11:00:00+00:00", user_id="user-2"),
    ]
    fake_db.tables["customers"] = [
        {"id": "c1", "user_id": "user-1"},
        {"id": "c2", "user_id": "user-1"},
        {"id": "c3", "user_id": "user-2"},
    ]

    stats = compute_dashboard_stats("user-1", today=date(2025, 3, 10))

    assert stats == {
        "totalOrders": 5,
        "activeOrders": 2,
        "totalCustomers": 2,
        "completedToday": 1,
        "todayRevenue": 7500,
        "totalRevenue": 47500,
    }


def test_dashboard_endpoint(api_client, auth_headers):
    api_client.post(
        "/api/orders",
        json={"pickup_address": "Gudang", "destinations": [{"address": "Jl. Tujuan 1"}]},
        headers=auth_headers,
    )

    response = api_client.get("/api/dashboard/stats", headers=auth_headers)

    assert response.status_code == 200
    payload = response.json()
    assert payload["totalOrders"] == 1
    assert payload["activeOrders"] == 1
    assert payload["totalRevenue"] == 0
