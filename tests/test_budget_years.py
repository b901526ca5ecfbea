from src.db.core import CashEnvelopeTransactionDB, FundBudgetDB

OTHER_USER_ID = "user-b"


def create_year(client, name, start, end, is_active=False, headers=None):
    response = client.post("/budget-years/", json={
        "name": name, "start_date": start, "end_date": end, "is_active": is_active,
    }, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_rejects_end_before_start(client):
    response = client.post("/budget-years/", json={
        "name": "Backwards", "start_date": "2024-12-31", "end_date": "2024-01-01",
    })
    assert response.status_code == 422


def test_activation_is_exclusive(client):
    first = create_year(client, "2023", "2023-01-01", "2023-12-31", is_active=True)
    second = create_year(client, "2024", "2024-01-01", "2024-12-31", is_active=True)

    years = {year["id"]: year for year in client.get("/budget-years/").json()}
    assert years[second["id"]]["is_active"] is True
    assert years[first["id"]]["is_active"] is False

    response = client.put(f"/budget-years/{first['id']}/activate")
    assert response.status_code == 200
    assert response.json()["is_active"] is True

    active = [year for year in client.get("/budget-years/").json() if year["is_active"]]
    assert [year["id"] for year in active] == [first["id"]]
    assert client.get("/budget-years/active").json()["id"] == first["id"]


def test_activation_does_not_touch_other_users(client):
    theirs = create_year(client, "Theirs", "2024-01-01", "2024-12-31", is_active=True,
                         headers={"X-User-Id": OTHER_USER_ID})
    create_year(client, "Mine", "2024-01-01", "2024-12-31", is_active=True)

    response = client.get("/budget-years/active", headers={"X-User-Id": OTHER_USER_ID})
    assert response.json()["id"] == theirs["id"]


def test_update_with_is_active_deactivates_siblings(client):
    first = create_year(client, "2023", "2023-01-01", "2023-12-31", is_active=True)
    second = create_year(client, "2024", "2024-01-01", "2024-12-31")

    response = client.put(f"/budget-years/{second['id']}", json={"is_active": True})
    assert response.status_code == 200

    assert client.get(f"/budget-years/{first['id']}").json()["is_active"] is False


def test_update_rejects_dates_that_cross(client):
    year = create_year(client, "2024", "2024-01-01", "2024-12-31")
    response = client.put(f"/budget-years/{year['id']}", json={"end_date": "2023-06-30"})
    assert response.status_code == 400


def test_no_active_year_is_404(client):
    create_year(client, "2024", "2024-01-01", "2024-12-31")
    assert client.get("/budget-years/active").status_code == 404


def test_missing_and_foreign_years_are_404(client):
    theirs = create_year(client, "Theirs", "2024-01-01", "2024-12-31", headers={"X-User-Id": OTHER_USER_ID})

    assert client.get(f"/budget-years/{theirs['id']}").status_code == 404
    assert client.put(f"/budget-years/{theirs['id']}/activate").status_code == 404
    assert client.delete("/budget-years/9999").status_code == 404


def test_delete_budget_year(client):
    year = create_year(client, "2024", "2024-01-01", "2024-12-31")
    assert client.delete(f"/budget-years/{year['id']}").status_code == 204
    assert client.get(f"/budget-years/{year['id']}").status_code == 404


def test_delete_budget_year_removes_everything_filed_under_it(client, db, budget_year, fund, category):
    client.put(f"/funds/{fund['id']}/budget/{budget_year['id']}", json={"amount": "100"})
    client.post("/incomes/", json={"name": "Salary", "amount": "3000", "date": "2024-02-01"})
    client.post("/expenses/", json={
        "name": "Shopping", "amount": "10", "date": "2024-03-01",
        "budget_year_id": budget_year["id"], "category_id": category["id"], "fund_id": fund["id"],
    })
    client.post("/cash-envelope-transactions/", json={"fund_id": fund["id"], "date": "2024-04-10", "amount": "40"})

    assert client.delete(f"/budget-years/{budget_year['id']}").status_code == 204

    assert client.get("/incomes/").json() == []
    assert client.get("/expenses/").json() == []
    assert db.query(FundBudgetDB).count() == 0
    assert db.query(CashEnvelopeTransactionDB).count() == 0
    assert client.get(f"/funds/{fund['id']}").status_code == 200
    assert client.get(f"/categories/{category['id']}").status_code == 200
