from datetime import date


def test_health_check(client):
    body = client.get("/health").json()
    assert body["status"] == "OK"
    assert "timestamp" in body
    assert "version" in body


def test_dashboard_without_active_budget_year(client):
    client.post("/debts/", json={"description": "Loan to Sam", "amount": "200", "type": "owed_to_me"})
    client.post("/tasks/", json={"title": "Call bank", "important": True})
    client.post("/tithes/", json={"description": "Gift", "amount": "25", "date": "2024-05-01"})

    response = client.get("/dashboard/summary")
    assert response.status_code == 200
    summary = response.json()

    assert summary["budgetYear"] is None
    assert summary["income"]["total"] == 0
    assert summary["expenses"] == {"total": 0, "recent": []}
    assert summary["budget"] == {"total": 0, "allocated": 0, "spent": 0, "remaining": 0}
    assert summary["balance"] == 0
    assert summary["debts"] == {"owedToMe": 200.0, "iOwe": 0, "netDebt": 200.0}
    assert summary["tasks"] == {"total": 1, "completed": 0, "pending": 1, "important": 1}
    assert summary["tithe"]["given"] == 25.0
    assert summary["tithe"]["percentage"] == 0
    assert summary["assets"] == {"netWorth": 0, "lastUpdated": None}


def test_dashboard_for_active_budget_year(client, budget_year, fund, category):
    client.put(f"/funds/{fund['id']}/budget/{budget_year['id']}", json={"amount": "100", "amount_given": "300"})
    annual = client.post("/funds/", json={"name": "Insurance", "type": "annual"}).json()
    client.put(f"/funds/{annual['id']}/budget/{budget_year['id']}", json={"amount": "1200", "spent": "400"})
    skipped = client.post("/funds/", json={"name": "Side", "type": "annual", "include_in_budget": False}).json()
    client.put(f"/funds/{skipped['id']}/budget/{budget_year['id']}", json={"amount": "999"})

    client.post("/incomes/", json={"name": "Salary", "amount": "3000", "date": "2024-02-01"})
    for index in range(12):
        client.post("/expenses/", json={
            "name": f"Shop {index}", "amount": "10", "date": f"2024-03-{index + 1:02d}",
            "budget_year_id": budget_year["id"], "category_id": category["id"], "fund_id": fund["id"],
        })
    client.post("/tithes/", json={"description": "Tithe", "amount": "300", "date": "2024-02-02"})
    client.post("/debts/", json={"description": "Borrowed", "amount": "50", "type": "i_owe"})
    client.post("/assets/", json={"date": "2024-03-31", "details": [
        {"asset_type": "savings", "asset_name": "Savings", "amount": "5000", "category": "asset"},
        {"asset_type": "card", "asset_name": "Card", "amount": "750", "category": "liability"},
    ]})

    summary = client.get("/dashboard/summary").json()

    assert summary["budgetYear"]["id"] == budget_year["id"]
    assert summary["income"]["total"] == 3000.0
    assert summary["expenses"]["total"] == 120.0
    assert len(summary["expenses"]["recent"]) == 10
    assert summary["expenses"]["recent"][0]["name"] == "Shop 11"
    assert summary["expenses"]["recent"][0]["category"]["name"] == "Supermarket"
    assert summary["balance"] == 2880.0
    assert summary["budget"] == {"total": 2400.0, "allocated": 300.0, "spent": 400.0, "remaining": 1700.0}
    assert summary["debts"] == {"owedToMe": 0, "iOwe": 50.0, "netDebt": -50.0}
    assert summary["tithe"] == {"given": 300.0, "expected": 300.0, "balance": 0, "percentage": 10.0}
    assert summary["assets"] == {"netWorth": 4250.0, "lastUpdated": "2024-03-31"}


def test_dashboard_for_unknown_budget_year_is_404(client):
    assert client.get("/dashboard/summary", params={"budget_year_id": 9999}).status_code == 404


def test_dashboard_is_scoped_to_user(client, budget_year):
    client.post("/incomes/", json={"name": "Salary", "amount": "3000", "date": "2024-02-01"})

    other = client.get("/dashboard/summary", headers={"X-User-Id": "user-b"}).json()
    assert other["budgetYear"] is None
    assert other["income"]["total"] == 0
    assert other["tithe"]["expected"] == 0


# ===== CASH ENVELOPES =====

def test_envelope_transaction_uses_active_budget_year(client, budget_year, fund):
    response = client.post("/cash-envelope-transactions/", json={
        "fund_id": fund["id"], "date": "2024-04-10", "amount": "40", "description": "Market cash",
    })
    assert response.status_code == 201, response.text
    transaction = response.json()
    assert transaction["budget_year_id"] == budget_year["id"]
    assert transaction["month"] == 4
    assert transaction["fund"]["name"] == "Groceries"

    april = client.get("/cash-envelope-transactions/", params={"month": 4}).json()
    assert [t["id"] for t in april] == [transaction["id"]]
    assert client.get("/cash-envelope-transactions/", params={"month": 5}).json() == []


def test_envelope_month_out_of_range_is_400(client, budget_year):
    assert client.get("/cash-envelope-transactions/", params={"month": 13}).status_code == 400


def test_envelope_without_any_budget_year_is_400(client, fund):
    response = client.post("/cash-envelope-transactions/", json={
        "fund_id": fund["id"], "date": date.today().isoformat(), "amount": "40",
    })
    assert response.status_code == 400


def test_envelope_for_foreign_fund_is_404(client, budget_year, fund):
    response = client.post("/cash-envelope-transactions/", json={
        "fund_id": fund["id"], "date": "2024-04-10", "amount": "40",
    }, headers={"X-User-Id": "user-b"})
    assert response.status_code == 404
