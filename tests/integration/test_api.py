"""Integration tests for API endpoints"""

from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from budget_tracker.domain.models import Direction
from budget_tracker.infrastructure.database.repositories import TransactionRepository


def seed(db, records):
    repo = TransactionRepository(db)
    for record in records:
        repo.append(record)
    db.commit()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/extract", json={"text": "Rs 10 paid at Cafe Coffee Day"})
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "budget_extraction_total" in response.text


def test_extract_and_save(client: TestClient):
    response = client.post(
        "/v1/extract",
        json={"text": "Your A/c XX1234 is debited for Rs. 1,500.00 at Amazon Pay", "save": True},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["detected"] is True
    transaction = data["transaction"]
    assert Decimal(transaction["amount"]) == Decimal("1500")
    assert transaction["direction"] == "EXPENSE"
    assert transaction["category"] == "Shopping"
    assert transaction["merchant"] == "Amazon Pay"
    assert transaction["origin"] == "EXTRACTED"
    assert transaction["account_name"] == "Primary Bank"
    assert transaction["timestamp"] == "2025-03-15T12:00:00"
    assert transaction["id"] is not None

    listed = client.get("/v1/transactions").json()
    assert [t["id"] for t in listed] == [transaction["id"]]


def test_extract_preview_does_not_store(client: TestClient):
    response = client.post("/v1/extract", json={"text": "You have received INR 2000 from Jane Doe"})

    data = response.json()
    assert data["detected"] is True
    assert data["transaction"]["direction"] == "INCOME"
    assert data["transaction"]["id"] is None
    assert client.get("/v1/transactions").json() == []


def test_extract_nothing_detected(client: TestClient):
    response = client.post("/v1/extract", json={"text": "Hello, how are you?", "save": True})

    assert response.status_code == 200
    assert response.json() == {"detected": False, "transaction": None}
    assert client.get("/v1/transactions").json() == []


def test_manual_transaction_lifecycle(client: TestClient):
    created = client.post(
        "/v1/transactions",
        json={"amount": "2,500", "direction": "income", "category": "Salary", "merchant": "Acme"},
    )
    assert created.status_code == 201
    record = created.json()
    assert record["origin"] == "MANUAL"
    assert Decimal(record["amount"]) == Decimal("2500")

    updated = client.put(
        f"/v1/transactions/{record['id']}",
        json={"amount": "2600", "direction": "INCOME", "category": "Bonus"},
    )
    assert updated.status_code == 200
    assert updated.json()["category"] == "Bonus"
    assert updated.json()["timestamp"] == record["timestamp"]

    assert client.delete(f"/v1/transactions/{record['id']}").status_code == 204
    assert client.delete(f"/v1/transactions/{record['id']}").status_code == 404
    assert client.put(
        f"/v1/transactions/{record['id']}",
        json={"amount": "1", "direction": "EXPENSE", "category": "Food"},
    ).status_code == 404


def test_manual_transaction_rejects_invalid_amount(client: TestClient):
    response = client.post("/v1/transactions", json={"amount": "-40", "category": "Food"})
    assert response.status_code == 422

    response = client.post("/v1/transactions", json={"amount": "40"})
    assert response.status_code == 422


def test_list_filters(client: TestClient, db, make_record):
    seed(
        db,
        [
            make_record("100", category="Food", merchant="Swiggy"),
            make_record("5000", Direction.INCOME, "Salary", merchant="Acme"),
            make_record("80", category="Transport", merchant="Uber"),
        ],
    )

    assert len(client.get("/v1/transactions").json()) == 3
    assert [t["category"] for t in client.get("/v1/transactions", params={"direction": "INCOME"}).json()] == ["Salary"]
    assert [t["merchant"] for t in client.get("/v1/transactions", params={"search": "swig"}).json()] == ["Swiggy"]
    assert [t["merchant"] for t in client.get("/v1/transactions", params={"category": "Transport"}).json()] == ["Uber"]


def test_today_summary(client: TestClient, db, make_record):
    seed(
        db,
        [
            make_record("120", timestamp=datetime(2025, 3, 15, 8, 0)),
            make_record("900", Direction.INCOME, "Salary", datetime(2025, 3, 15, 9, 0)),
            make_record("60", timestamp=datetime(2025, 3, 14, 21, 0)),
        ],
    )

    data = client.get("/v1/transactions/today").json()
    assert Decimal(data["spent"]) == Decimal("120")
    assert Decimal(data["earned"]) == Decimal("900")


def test_monthly_analytics(client: TestClient, db, make_record):
    seed(db, [make_record("300", timestamp=datetime(2025, 2, 3)), make_record("50")])

    data = client.get("/v1/analytics/monthly", params={"months": 3}).json()["months"]

    assert [m["label"] for m in data] == ["Jan", "Feb", "Mar"]
    assert [Decimal(m["expense"]) for m in data] == [Decimal("0"), Decimal("300"), Decimal("50")]
    assert client.get("/v1/analytics/monthly", params={"months": 0}).status_code == 422


def test_analytics_without_data(client: TestClient):
    insights = client.get("/v1/insights").json()["insights"]
    assert insights == [{"title": "Welcome", "value": "Add transactions to see smart insights", "kind": "INFO"}]

    health = client.get("/v1/budget-health").json()
    assert health["status"] == "No Data"
    assert health["score"] == 0


def test_insights_and_health(client: TestClient, db, make_record):
    seed(
        db,
        [
            make_record("400", category="Food", timestamp=datetime(2025, 2, 10)),
            make_record("300", category="Food", merchant="Zomato"),
            make_record("3100", Direction.INCOME, "Salary"),
        ],
    )

    insights = client.get("/v1/insights").json()["insights"]
    assert [i["title"] for i in insights] == ["Top Category", "Month Comparison", "Largest Expense"]
    assert insights[1]["kind"] == "POSITIVE"

    health = client.get("/v1/budget-health").json()
    # savings (3100-300)/3100 -> round(36.1) = 36, shrinking spend +10
    assert health["score"] == 96
    assert health["status"] == "Excellent"
    assert Decimal(health["projected_spend"]) == Decimal("620.00")
    assert health["growth_rate"] == -0.25


def test_request_id_is_reused_from_caller(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

    generated = client.get("/health").headers["X-Request-ID"]
    assert generated and generated != "abc-123"


def test_sub_cent_amount_is_not_stored(client: TestClient):
    response = client.post("/v1/extract", json={"text": "Rs 0.004 paid at Uber", "save": True})
    assert response.json() == {"detected": False, "transaction": None}

    health = client.get("/v1/budget-health")
    assert health.status_code == 200
    assert health.json()["status"] == "No Data"


def test_extracted_amount_is_rounded_to_cents(client: TestClient):
    response = client.post("/v1/extract", json={"text": "Rs 10.555 paid at Uber", "save": True})
    assert Decimal(response.json()["transaction"]["amount"]) == Decimal("10.56")

    assert client.get("/v1/budget-health").status_code == 200
    listed = client.get("/v1/transactions").json()
    assert [Decimal(t["amount"]) for t in listed] == [Decimal("10.56")]


def test_update_rejects_invalid_values(client: TestClient, db, make_record):
    seed(db, [make_record("100", category="Food")])
    record_id = client.get("/v1/transactions").json()[0]["id"]

    blank = client.put(
        f"/v1/transactions/{record_id}",
        json={"amount": "100", "direction": "EXPENSE", "category": "   "},
    )
    assert blank.status_code == 422

    sub_cent = client.put(
        f"/v1/transactions/{record_id}",
        json={"amount": "1.234", "direction": "EXPENSE", "category": "Food"},
    )
    assert sub_cent.status_code == 422

    assert client.get("/v1/transactions").json()[0]["category"] == "Food"


def test_transactions_by_day(client: TestClient, db, make_record):
    seed(
        db,
        [
            make_record("120", timestamp=datetime(2025, 3, 15, 8, 0)),
            make_record("900", Direction.INCOME, "Salary", datetime(2025, 3, 15, 9, 0)),
            make_record("60", timestamp=datetime(2025, 3, 14, 21, 0)),
            make_record("45", category="Transport", timestamp=datetime(2025, 3, 2, 18, 0)),
        ],
    )

    groups = client.get("/v1/transactions/by-day").json()

    assert [g["header"] for g in groups] == ["Today", "Yesterday", "02 Mar 2025"]
    assert groups[0]["day"] == "2025-03-15T00:00:00"
    assert Decimal(groups[0]["spent"]) == Decimal("120")
    assert Decimal(groups[0]["earned"]) == Decimal("900")
    assert [t["category"] for t in groups[0]["transactions"]] == ["Salary", "General"]
    assert Decimal(groups[1]["spent"]) == Decimal("60")

    filtered = client.get("/v1/transactions/by-day", params={"category": "Transport"}).json()
    assert [g["header"] for g in filtered] == ["02 Mar 2025"]
