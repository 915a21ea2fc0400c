from __future__ import annotations

import pytest

from src.dairy_delivery.dairy_delivery.container import build_container
from src.dairy_delivery.dairy_delivery.database.seed import seed_demo_data
from src.dairy_delivery.dairy_delivery.main import create_app


@pytest.fixture
def container():
    c = build_container(backend="memory")
    seed_demo_data(c)
    return c


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="config.testing")
    return app.test_client()


def _attendance(delivered=2):
    return {
        "date": "2026-03-02",
        "deliveryPersonId": "m1",
        "deliveryPersonName": "Ravi Kumar",
        "entries": [
            {
                "customerId": "1",
                "customerName": "Rajesh Kumar",
                "fixedQuantity": 2,
                "deliveredQuantity": delivered,
                "status": "Delivered",
                "pricePerLiter": 58,
            }
        ],
    }


def test_health(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert b"running" in resp.data


def test_cors_header(client):
    resp = client.get("/api/prices", headers={"Origin": "http://localhost:5173"})

    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_preflight_allows_requested_headers(client):
    resp = client.options(
        "/api/customers/1",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )

    assert resp.status_code == 200
    allowed = resp.headers["Access-Control-Allow-Headers"].lower()
    assert "content-type" in allowed
    assert "authorization" in allowed
    assert "PUT" in resp.headers["Access-Control-Allow-Methods"]


def test_customer_crud(client):
    resp = client.post(
        "/api/customers",
        json={"name": "Anand", "address": "5th St", "mobile": "9000000001", "subscriptions": [{"product": "Milk", "quantity": 1}]},
    )
    assert resp.status_code == 201
    customer_id = resp.get_json()["id"]

    resp = client.put(f"/api/customers/{customer_id}", json={"assignedTo": "m1"})
    assert resp.status_code == 200
    assert resp.get_json()["assignedTo"] == "m1"

    assert client.get(f"/api/customers/{customer_id}").get_json()["name"] == "Anand"
    assert len(client.get("/api/customers").get_json()) == 3


def test_error_bodies(client):
    resp = client.get("/api/customers/404")
    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Customer not found"}

    resp = client.post("/api/customers", json={"name": ""})
    assert resp.status_code == 400

    resp = client.post("/api/customers", json={"id": "1", "name": "X", "address": "Y", "mobile": "Z"})
    assert resp.status_code == 409
    assert resp.get_json()["existing"]["name"] == "Rajesh Kumar"

    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_members(client):
    resp = client.post("/api/members", json={"name": "Kumar", "mobile": "9000000009", "shift": "Evening"})
    assert resp.status_code == 201
    member_id = resp.get_json()["id"]

    resp = client.put(f"/api/members/{member_id}", json={"isActive": False})
    assert resp.get_json()["isActive"] is False
    assert client.put("/api/members/404", json={"name": "X"}).status_code == 404


def test_price_endpoints(client):
    resp = client.post("/api/prices/bulk", json=[{"product": "Milk", "price": 60}])
    assert resp.status_code == 200
    prices = {p["product"]: p["price"] for p in resp.get_json()}
    assert prices["Milk"] == 60
    assert prices["Curd"] == 60
    assert prices["Ghee"] == 650

    assert client.post("/api/prices/add", json={"product": "Butter", "price": 500}).status_code == 201
    assert client.post("/api/prices/add", json={"product": "Butter", "price": 500}).status_code == 409
    assert client.delete("/api/prices/Butter").status_code == 200
    assert client.delete("/api/prices/Butter").status_code == 404


def test_delivery_upsert_and_monthly_report(client):
    record = {
        "date": "2026-03-05",
        "customerId": "1",
        "items": [{"product": "Milk", "quantity": 2, "status": "Delivered", "priceCheck": 58}],
    }
    assert client.post("/api/deliveries", json=record).status_code == 201
    assert client.post("/api/deliveries", json=record).status_code == 200

    resp = client.post("/api/deliveries/bulk", json=[{**record, "date": "2026-03-06"}])
    assert resp.get_json() == {"message": "Records saved successfully", "count": 1}

    assert len(client.get("/api/deliveries?month=2&year=2026").get_json()) == 2
    assert len(client.get("/api/deliveries?date=2026-03-06").get_json()) == 1

    report = client.get("/api/reports/monthly?month=2&year=2026").get_json()
    rajesh = next(r for r in report if r["customerId"] == "1")
    assert rajesh["totalLiters"] == 4
    assert rajesh["totalAmount"] == 232
    priya = next(r for r in report if r["customerId"] == "2")
    assert priya["totalAmount"] == 0

    history = client.get("/api/customers/1/history?month=2&year=2026").get_json()
    assert [r["date"] for r in history["records"]] == ["2026-03-05", "2026-03-06"]


def test_report_export_and_revenue(client):
    client.post(
        "/api/deliveries",
        json={"date": "2026-03-05", "customerId": "1", "items": [{"product": "Curd", "quantity": 1, "status": "Delivered"}]},
    )

    resp = client.get("/api/reports/monthly/export?month=2&year=2026")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "bills_2026_03.csv" in resp.headers["Content-Disposition"]
    assert "Rajesh Kumar,Curd,1,60.00" in resp.data.decode("utf-8-sig")

    revenue = client.get("/api/reports/revenue?month=2&year=2026").get_json()
    assert revenue["totalRevenue"] == 60
    assert client.get("/api/reports/monthly?month=12&year=2026").status_code == 400


def test_attendance_flow(client):
    sheet = client.get("/api/attendance/sheet/m1/2026-03-02").get_json()
    assert [e["customerId"] for e in sheet["entries"]] == ["1"]

    assert client.get("/api/attendance/check/m1/2026-03-02").get_json() == {"exists": False, "attendance": None}

    resp = client.post("/api/attendance", json=_attendance())
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Attendance saved successfully"
    attendance_id = body["attendance"]["id"]

    resp = client.post("/api/attendance", json=_attendance(delivered=1))
    assert resp.status_code == 409
    assert resp.get_json()["attendance"]["entries"][0]["deliveredQuantity"] == 2

    assert client.get("/api/attendance/check/m1/2026-03-02").get_json()["exists"] is True
    assert client.get(f"/api/attendance/{attendance_id}").status_code == 200
    assert len(client.get("/api/attendance/history/m1?month=3&year=2026").get_json()) == 1
    assert client.get("/api/attendance/admin?customerName=priya").get_json() == []
    assert client.post("/api/attendance", json={"date": "2026-03-03"}).status_code == 400


def test_dashboard_counts(client, container):
    stats = client.get("/api/stats/dashboard").get_json()

    assert stats["totalCustomers"] == 2
    assert stats["activeCustomers"] == 2
    assert stats["totalProducts"] == 5
    assert stats["totalMembers"] == 2
    assert stats["monthlyRevenue"] == 0

    products = client.get("/api/stats/products?month=2&year=2026").get_json()
    assert [p["product"] for p in products][:4] == ["Milk", "Curd", "Ghee", "Paneer"]

    assignments = client.get("/api/stats/assignments").get_json()
    assert [len(a["customers"]) for a in assignments] == [1, 1]
    assert len(client.get("/api/stats/team?date=2026-03-02").get_json()) == 2


def test_bill_messages(client):
    resp = client.post("/api/messages/bills", json={"month": 2, "year": 2026, "channels": ["SMS", "WhatsApp"]})

    assert resp.status_code == 201
    assert len(resp.get_json()) == 4
    assert len(client.get("/api/messages?month=2&year=2026").get_json()) == 4
    assert client.post("/api/messages/bills", json={"month": 2, "year": 2026, "channels": ["Fax"]}).status_code == 400


def test_deactivating_customer_keeps_delivery_records(client):
    record = {
        "date": "2026-03-05",
        "customerId": "1",
        "items": [{"product": "Milk", "quantity": 2, "status": "Delivered", "priceCheck": 58}],
    }
    client.post("/api/deliveries", json=record)
    before = client.get("/api/deliveries?customerId=1").get_json()

    assert client.put("/api/customers/1", json={"isActive": False}).status_code == 200

    sheet = client.get("/api/attendance/sheet/m1/2026-03-06").get_json()
    assert [e["customerId"] for e in sheet["entries"]] == []
    assert client.get("/api/deliveries?customerId=1").get_json() == before
    history = client.get("/api/customers/1/history?month=2&year=2026").get_json()
    assert history["records"] == before


def test_out_of_range_month_is_rejected_everywhere(client):
    assert client.get("/api/customers/1/history?month=13&year=2026").status_code == 400
    assert client.get("/api/deliveries?month=12&year=2026").status_code == 400
    assert client.get("/api/reports/monthly?month=-1&year=2026").status_code == 400
    assert client.get("/api/customers/1/history?month=11&year=2025").status_code == 200
