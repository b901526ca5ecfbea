OTHER = {"X-User-Id": "user-b"}


def add_income(client, amount, day, **extra):
    response = client.post("/incomes/", json={"name": "Salary", "amount": amount, "date": day, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def add_expense(client, budget_year, category, fund, amount, day, name="Shopping"):
    response = client.post("/expenses/", json={
        "name": name, "amount": amount, "date": day,
        "budget_year_id": budget_year["id"], "category_id": category["id"], "fund_id": fund["id"],
    })
    assert response.status_code == 201, response.text
    return response.json()


# ===== INCOMES =====

def test_income_is_filed_under_budget_year_of_its_date(client, budget_year):
    income = add_income(client, "1000.00", "2024-03-15", source="Employer")
    assert income["budget_year_id"] == budget_year["id"]
    assert income["month"] == 3
    assert income["year"] == 2024


def test_income_outside_any_budget_year_is_rejected(client, budget_year):
    response = client.post("/incomes/", json={"name": "Salary", "amount": "10", "date": "2030-01-01"})
    assert response.status_code == 400


def test_income_update_rederives_month_and_year(client, budget_year):
    income = add_income(client, "1000.00", "2024-03-15")
    response = client.put(f"/incomes/{income['id']}", json={"date": "2024-11-02"})
    assert response.json()["month"] == 11


def test_non_positive_income_is_rejected(client, budget_year):
    response = client.post("/incomes/", json={"name": "Salary", "amount": "0", "date": "2024-03-15"})
    assert response.status_code == 422


def test_income_summary_groups(client, budget_year):
    add_income(client, "1000.00", "2024-01-15", source="Employer")
    add_income(client, "500.00", "2024-01-30", source="Employer")
    add_income(client, "250.00", "2024-02-10")

    summary = client.get("/incomes/summary").json()
    assert summary["totalAmount"] == 1750.0
    assert summary["incomeCount"] == 3
    assert summary["averageAmount"] == 583.33
    assert summary["bySource"]["Employer"] == {"count": 2, "total": 1500.0}
    assert summary["bySource"]["Other"] == {"count": 1, "total": 250.0}
    assert summary["byMonth"]["1"]["total"] == 1500.0
    assert summary["byMonth"]["2"]["count"] == 1


def test_income_summary_of_nothing_is_zero(client):
    summary = client.get("/incomes/summary").json()
    assert summary["totalAmount"] == 0
    assert summary["averageAmount"] == 0
    assert summary["bySource"] == {}


# ===== EXPENSES =====

def test_expense_list_filters_and_pages(client, budget_year, fund, category):
    add_expense(client, budget_year, category, fund, "10.00", "2024-01-05", name="Milk")
    add_expense(client, budget_year, category, fund, "75.00", "2024-02-05", name="Big shop")
    add_expense(client, budget_year, category, fund, "20.00", "2024-03-05", name="Bread")

    newest_first = client.get("/expenses/").json()
    assert [e["name"] for e in newest_first] == ["Bread", "Big shop", "Milk"]
    assert newest_first[0]["category"]["name"] == "Supermarket"

    assert [e["name"] for e in client.get("/expenses/", params={"min_amount": "50"}).json()] == ["Big shop"]
    assert [e["name"] for e in client.get("/expenses/", params={"search": "BREAD"}).json()] == ["Bread"]
    assert len(client.get("/expenses/", params={"start_date": "2024-02-01", "end_date": "2024-02-28"}).json()) == 1

    second_page = client.get("/expenses/", params={"page": "2", "limit": "2"}).json()
    assert [e["name"] for e in second_page] == ["Milk"]

    # malformed paging falls back to defaults
    assert len(client.get("/expenses/", params={"page": "abc", "limit": "xyz"}).json()) == 3


def test_expense_with_foreign_category_is_404(client, budget_year, fund, category):
    response = client.post("/expenses/", json={
        "name": "Shopping", "amount": "10", "date": "2024-01-01",
        "budget_year_id": budget_year["id"], "category_id": 9999, "fund_id": fund["id"],
    })
    assert response.status_code == 404


def test_expense_summary(client, budget_year, fund, category):
    add_expense(client, budget_year, category, fund, "10.00", "2024-01-05")
    add_expense(client, budget_year, category, fund, "30.00", "2024-01-25")
    add_expense(client, budget_year, category, fund, "20.00", "2024-04-05")

    summary = client.get("/expenses/stats/summary", params={"budget_year_id": budget_year["id"]}).json()
    assert summary["totalAmount"] == 60.0
    assert summary["expenseCount"] == 3
    assert summary["averageAmount"] == 20.0
    assert summary["byCategory"] == {"Supermarket": {"count": 3, "total": 60.0}}
    assert summary["byFund"] == {"Groceries": {"count": 3, "total": 60.0}}
    assert summary["byMonth"]["1"] == {"count": 2, "total": 40.0}
    assert sum(group["total"] for group in summary["byMonth"].values()) == summary["totalAmount"]


def test_expenses_are_scoped_to_user(client, budget_year, fund, category):
    expense = add_expense(client, budget_year, category, fund, "10.00", "2024-01-05")

    assert client.get("/expenses/", headers=OTHER).json() == []
    assert client.get(f"/expenses/{expense['id']}", headers=OTHER).status_code == 404
    assert client.delete(f"/expenses/{expense['id']}", headers=OTHER).status_code == 404
    assert client.get(f"/expenses/{expense['id']}").status_code == 200


# ===== TITHES =====

def test_tithe_summary_against_income(client, budget_year):
    add_income(client, "1000.00", "2024-01-15")
    add_income(client, "500.00", "2024-02-15")
    client.post("/tithes/", json={"description": "January tithe", "amount": "100.00", "date": "2024-01-20"})

    summary = client.get("/tithes/summary").json()
    assert summary["totalTitheGiven"] == 100.0
    assert summary["totalIncome"] == 1500.0
    assert summary["expectedTithe"] == 150.0
    assert summary["titheBalance"] == -50.0
    assert summary["tithePercentage"] == 6.67
    assert summary["titheCount"] == 1
    assert summary["byYear"] == {"2024": {"count": 1, "total": 100.0}}


def test_tithe_summary_without_income(client):
    client.post("/tithes/", json={"description": "Gift", "amount": "40", "date": "2024-01-20"})
    summary = client.get("/tithes/summary").json()
    assert summary["tithePercentage"] == 0
    assert summary["expectedTithe"] == 0
    assert summary["titheBalance"] == 40.0


def test_tithe_crud(client):
    tithe = client.post("/tithes/", json={"description": "Gift", "amount": "40", "date": "2024-01-20"}).json()
    updated = client.put(f"/tithes/{tithe['id']}", json={"amount": "45.5"}).json()
    assert float(updated["amount"]) == 45.5
    assert client.delete(f"/tithes/{tithe['id']}").status_code == 204
    assert client.put(f"/tithes/{tithe['id']}", json={"amount": "1"}).status_code == 404
