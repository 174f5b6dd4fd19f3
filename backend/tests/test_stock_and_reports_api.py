from datetime import date

from backend.services import reports
from backend.services.formatting import months_before


# ---------- Materials ----------
def test_materials_list_active_by_name(client, new_material, db_session):
    new_material(name="Viskon Kumaş", unit="metre")
    new_material(name="Boya")
    inactive = new_material(name="Eski Astar")
    inactive.active = False
    db_session.commit()

    resp = client.get("/v1/materials")

    assert resp.status_code == 200
    assert [m["name"] for m in resp.json()] == ["Boya", "Viskon Kumaş"]


def test_create_material_conflict(client):
    assert client.post("/v1/materials", json={"name": "Fermuar", "unit": "adet"}).status_code == 201
    resp = client.post("/v1/materials", json={"name": "Fermuar"})
    assert resp.status_code == 409
    assert resp.json()["success"] is False


# ---------- Stock ----------
def test_stock_lists_critical_first(client, new_material):
    new_material(name="A Pamuk", on_hand=500, qty_min=100)
    new_material(name="B Boya", on_hand=10, qty_min=40)
    new_material(name="C Fermuar")  # no ledger row

    rows = client.get("/v1/stock").json()

    assert [r["material_name"] for r in rows] == ["B Boya", "C Fermuar", "A Pamuk"]
    by_name = {r["material_name"]: r for r in rows}
    assert by_name["B Boya"]["critical"] is True
    assert by_name["C Fermuar"]["qty_on_hand"] == 0
    assert by_name["C Fermuar"]["critical"] is True
    assert by_name["A Pamuk"]["critical"] is False


def test_critical_count_ignores_zero_minimum(client, new_material):
    new_material(name="A", on_hand=10, qty_min=40)
    new_material(name="B", on_hand=40, qty_min=40)
    new_material(name="C", on_hand=0, qty_min=0)
    new_material(name="D", on_hand=100, qty_min=40)

    resp = client.get("/v1/stock/critical-count")

    assert resp.json() == {"success": True, "critical_count": 2}


def test_set_stock_upserts_ledger_row(client, new_material):
    material = new_material(name="Fermuar", unit="adet")

    resp = client.put(f"/v1/stock/{material.id}", json={"qty_on_hand": 250, "qty_min": 300})
    assert resp.status_code == 200
    assert resp.json()["critical"] is True

    resp = client.put(f"/v1/stock/{material.id}", json={"qty_on_hand": 900, "qty_min": 300})
    assert resp.json()["qty_on_hand"] == 900
    assert resp.json()["critical"] is False

    assert client.put("/v1/stock/999", json={"qty_on_hand": 1}).status_code == 404
    assert client.put(f"/v1/stock/{material.id}", json={"qty_on_hand": -1}).status_code == 422


def test_movements_after_delivery(client, order_42, material_m1):
    client.put("/v1/raw-material-orders/42/deliver")

    rows = client.get("/v1/stock-movements", params={"material_id": material_m1.id}).json()

    assert len(rows) == 1
    assert rows[0]["movement_type"] == "OUT"
    assert rows[0]["quantity"] == 30
    assert rows[0]["order_id"] == 42
    assert client.get("/v1/stock-movements", params={"order_id": 7}).json() == []


# ---------- Reports ----------
def test_range_start_falls_back_to_one_month():
    today = date(2025, 12, 15)
    assert reports.range_start("last_3_months", today) == date(2025, 9, 15)
    assert reports.range_start("bogus", today) == date(2025, 11, 15)
    assert reports.range_start(None, today) == date(2025, 11, 15)


def test_order_totals_by_material(client, new_material, new_order):
    pamuk = new_material(name="Pamuk")
    boya = new_material(name="Boya")
    today = date.today()
    recent = months_before(today, 1)
    new_order(pamuk, quantity=10, order_date=today)
    new_order(pamuk, quantity=15, order_date=recent)
    new_order(boya, quantity=40, order_date=today)
    new_order(boya, quantity=500, order_date=months_before(today, 5))

    rows = client.get("/v1/reports/raw-material-orders").json()
    assert [(r["material_name"], r["total_quantity"]) for r in rows] == [("Boya", 40.0), ("Pamuk", 25.0)]

    rows = client.get("/v1/reports/raw-material-orders", params={"range": "last_3_months"}).json()
    assert rows[0]["material_name"] == "Boya"


def test_monthly_totals(client, new_material, new_order):
    pamuk = new_material(name="Pamuk")
    boya = new_material(name="Boya")
    new_order(pamuk, quantity=10, order_date=date(2025, 10, 2))
    new_order(pamuk, quantity=5, order_date=date(2025, 10, 20))
    new_order(boya, quantity=30, order_date=date(2025, 10, 9))
    new_order(boya, quantity=7, order_date=date(2025, 11, 1))
    new_order(boya, quantity=99, order_date=date(2026, 1, 5))

    rows = client.get(
        "/v1/reports/raw-material-orders/monthly",
        params={"start": "2025-10-01", "end": "2025-12-31"},
    ).json()

    assert rows == [
        {"month_code": "2025-10", "month_name": "Ekim 2025", "material_name": "Boya", "total_quantity": 30.0},
        {"month_code": "2025-10", "month_name": "Ekim 2025", "material_name": "Pamuk", "total_quantity": 15.0},
        {"month_code": "2025-11", "month_name": "Kasım 2025", "material_name": "Boya", "total_quantity": 7.0},
    ]


# ---------- Health ----------
def test_health(client):
    resp = client.get("/v1/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "OK"
    assert resp.json()["database"] == "connected"
