from src.db.core import CashEnvelopeTransactionDB, FundBudgetDB


def test_duplicate_fund_name_is_rejected(client, fund):
    response = client.post("/funds/", json={"name": "Groceries", "type": "annual"})
    assert response.status_code == 400


def test_invalid_level_is_rejected(client):
    response = client.post("/funds/", json={"name": "Fuel", "type": "monthly", "level": 4})
    assert response.status_code == 422


def test_upsert_fund_budget_creates_then_updates(client, fund, budget_year):
    url = f"/funds/{fund['id']}/budget/{budget_year['id']}"

    created = client.put(url, json={"amount": "100.00"})
    assert created.status_code == 200
    assert float(created.json()["amount"]) == 100.0

    updated = client.put(url, json={"amount": "150.00", "amount_given": "50.00"})
    assert updated.json()["id"] == created.json()["id"]
    assert float(updated.json()["amount"]) == 150.0
    assert float(updated.json()["amount_given"]) == 50.0

    budgets = client.get(f"/funds/{fund['id']}").json()["fund_budgets"]
    assert len(budgets) == 1


def test_upsert_for_unknown_budget_year_is_404(client, fund):
    response = client.put(f"/funds/{fund['id']}/budget/9999", json={"amount": "10"})
    assert response.status_code == 404


def test_list_by_budget_year_only_returns_budgeted_funds(client, fund, budget_year):
    other = client.post("/funds/", json={"name": "Vacation", "type": "savings", "display_order": 1}).json()
    client.put(f"/funds/{fund['id']}/budget/{budget_year['id']}", json={"amount": "100"})

    all_funds = client.get("/funds/").json()
    assert [f["id"] for f in all_funds] == [fund["id"], other["id"]]

    budgeted = client.get("/funds/", params={"budget_year_id": budget_year["id"]}).json()
    assert [f["id"] for f in budgeted] == [fund["id"]]
    assert budgeted[0]["fund_budgets"][0]["budget_year_id"] == budget_year["id"]


def test_deactivated_funds_are_hidden_from_list(client, fund):
    assert client.put(f"/funds/{fund['id']}/deactivate").json()["is_active"] is False
    assert client.get("/funds/").json() == []

    assert client.put(f"/funds/{fund['id']}/activate").json()["is_active"] is True
    assert len(client.get("/funds/").json()) == 1


def test_fund_spent_sums_expenses_in_budget_year(client, fund, category, budget_year):
    for amount in ("20.00", "30.50"):
        client.post("/expenses/", json={
            "name": "Shopping", "amount": amount, "date": "2024-03-01",
            "budget_year_id": budget_year["id"], "category_id": category["id"], "fund_id": fund["id"],
        })

    response = client.get(f"/funds/{fund['id']}/spent", params={"budget_year_id": budget_year["id"]})
    assert response.status_code == 200
    assert response.json()["spent"] == 50.5


def test_categories_by_fund(client, fund, category):
    response = client.get(f"/categories/fund/{fund['id']}")
    assert [c["id"] for c in response.json()] == [category["id"]]
    assert response.json()[0]["fund"]["name"] == "Groceries"


def test_category_requires_own_fund(client, fund):
    response = client.post("/categories/", json={"name": "Elsewhere", "fund_id": fund["id"]},
                           headers={"X-User-Id": "someone-else"})
    assert response.status_code == 404


# ===== DELETES =====

def add_expense(client, budget_year, category, fund):
    response = client.post("/expenses/", json={
        "name": "Shopping", "amount": "10", "date": "2024-03-01",
        "budget_year_id": budget_year["id"], "category_id": category["id"], "fund_id": fund["id"],
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_delete_fund_removes_categories_budgets_and_envelopes(client, db, fund, category, budget_year):
    client.put(f"/funds/{fund['id']}/budget/{budget_year['id']}", json={"amount": "100"})
    client.post("/cash-envelope-transactions/", json={"fund_id": fund["id"], "date": "2024-04-10", "amount": "40"})

    assert client.delete(f"/funds/{fund['id']}").status_code == 204

    assert client.get(f"/funds/{fund['id']}").status_code == 404
    assert client.get(f"/categories/{category['id']}").status_code == 404
    assert client.get(f"/categories/fund/{fund['id']}").json() == []
    assert db.query(FundBudgetDB).count() == 0
    assert db.query(CashEnvelopeTransactionDB).count() == 0


def test_delete_fund_used_by_expense_is_refused(client, fund, category, budget_year):
    expense = add_expense(client, budget_year, category, fund)

    response = client.delete(f"/funds/{fund['id']}")
    assert response.status_code == 400

    assert client.get(f"/categories/{category['id']}").status_code == 200
    assert client.get(f"/expenses/{expense['id']}").json()["fund_id"] == fund["id"]


def test_delete_category_used_by_expense_is_refused(client, fund, category, budget_year):
    expense = add_expense(client, budget_year, category, fund)

    assert client.delete(f"/categories/{category['id']}").status_code == 400
    assert client.delete(f"/expenses/{expense['id']}").status_code == 204
    assert client.delete(f"/categories/{category['id']}").status_code == 204
