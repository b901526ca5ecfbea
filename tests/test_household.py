from datetime import date

OTHER = {"X-User-Id": "user-b"}


# ===== DEBTS =====

def add_debt(client, amount, debt_type, is_paid=False, description="Lunch money"):
    response = client.post("/debts/", json={
        "description": description, "amount": amount, "type": debt_type, "is_paid": is_paid,
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_debt_summary_nets_both_directions(client):
    add_debt(client, "200.00", "owed_to_me")
    add_debt(client, "50.00", "i_owe", is_paid=True)

    summary = client.get("/debts/summary").json()
    assert summary["totalDebts"] == 2
    assert summary["paidDebts"] == 1
    assert summary["unpaidDebts"] == 1
    assert summary["owedToMe"] == 200.0
    assert summary["iOwe"] == 50.0
    assert summary["unpaidOwedToMe"] == 200.0
    assert summary["unpaidIOwe"] == 0
    assert summary["netBalance"] == 150.0
    assert summary["unpaidNetBalance"] == 200.0


def test_paid_debt_carries_paid_date(client):
    debt = add_debt(client, "20", "i_owe")
    assert debt["paid_date"] is None

    paid = client.put(f"/debts/{debt['id']}/pay").json()
    assert paid["is_paid"] is True
    assert paid["paid_date"] == date.today().isoformat()

    reopened = client.put(f"/debts/{debt['id']}/unpay").json()
    assert reopened["is_paid"] is False
    assert reopened["paid_date"] is None


def test_debt_created_paid_gets_a_paid_date(client):
    debt = add_debt(client, "20", "owed_to_me", is_paid=True)
    assert debt["paid_date"] == date.today().isoformat()


def test_debt_list_filters_by_type(client):
    add_debt(client, "20", "owed_to_me", description="Alice")
    add_debt(client, "30", "i_owe", description="Bob")

    owed = client.get("/debts/", params={"type": "i_owe"}).json()
    assert [d["description"] for d in owed] == ["Bob"]
    assert client.get("/debts/", params={"type": "sideways"}).status_code == 422


def test_debt_invalid_type_is_rejected(client):
    response = client.post("/debts/", json={"description": "X", "amount": "5", "type": "maybe"})
    assert response.status_code == 422


# ===== TASKS =====

def test_toggle_sets_and_clears_completed_at(client):
    task = client.post("/tasks/", json={"title": "File taxes", "important": True}).json()
    assert task["completed"] is False
    assert task["completed_at"] is None

    done = client.patch(f"/tasks/{task['id']}/toggle").json()
    assert done["completed"] is True
    assert done["completed_at"] is not None

    undone = client.patch(f"/tasks/{task['id']}/toggle").json()
    assert undone["completed"] is False
    assert undone["completed_at"] is None


def test_task_summary_and_delete_completed(client):
    client.post("/tasks/", json={"title": "One", "completed": True})
    client.post("/tasks/", json={"title": "Two", "completed": True, "important": True})
    client.post("/tasks/", json={"title": "Three", "important": True})
    client.post("/tasks/", json={"title": "Not mine", "completed": True}, headers=OTHER)

    summary = client.get("/tasks/stats/summary").json()
    assert summary == {
        "totalTasks": 3,
        "completedTasks": 2,
        "pendingTasks": 1,
        "importantTasks": 1,
        "completionRate": 66.67,
    }

    assert client.delete("/tasks/completed").json() == {"deletedCount": 2}
    assert [t["title"] for t in client.get("/tasks/").json()] == ["Three"]
    assert len(client.get("/tasks/", headers=OTHER).json()) == 1


def test_task_summary_of_nothing(client):
    assert client.get("/tasks/stats/summary").json()["completionRate"] == 0


def test_toggle_missing_task_is_404(client):
    assert client.patch("/tasks/9999/toggle").status_code == 404


# ===== NOTES =====

def test_note_crud(client):
    note = client.post("/notes/", json={"title": "Ideas", "content": "Save more"}).json()
    assert client.get(f"/notes/{note['id']}").json()["title"] == "Ideas"

    updated = client.put(f"/notes/{note['id']}", json={"content": "Save even more"}).json()
    assert updated["content"] == "Save even more"
    assert updated["title"] == "Ideas"

    assert client.get(f"/notes/{note['id']}", headers=OTHER).status_code == 404
    assert client.delete(f"/notes/{note['id']}").status_code == 204
    assert client.get("/notes/").json() == []


# ===== SETTINGS =====

def test_setting_values_are_stored_as_text(client):
    text = client.post("/settings/", json={"setting_key": "currency", "setting_value": "USD"}).json()
    assert text["setting_value"] == "USD"

    number = client.post("/settings/", json={"setting_key": "rate", "setting_value": 0.1, "data_type": "number"}).json()
    assert number["setting_value"] == "0.1"

    blob = client.post("/settings/", json={"setting_key": "layout", "setting_value": {"cols": 2}, "data_type": "json"}).json()
    assert blob["setting_value"] == '{"cols": 2}'

    assert [s["setting_key"] for s in client.get("/settings/by-type/number").json()] == ["rate"]


def test_duplicate_setting_key_is_rejected(client):
    client.post("/settings/", json={"setting_key": "currency", "setting_value": "USD"})
    response = client.post("/settings/", json={"setting_key": "currency", "setting_value": "EUR"})
    assert response.status_code == 400


def test_settings_page_reports_total_and_has_more(client):
    for index in range(5):
        client.post("/settings/", json={"setting_key": f"key_{index}", "setting_value": str(index)})

    first = client.get("/settings/", params={"page": "1", "limit": "2"}).json()
    assert first["total"] == 5
    assert first["page"] == 1
    assert first["limit"] == 2
    assert first["hasMore"] is True
    assert len(first["data"]) == 2

    last = client.get("/settings/", params={"page": "3", "limit": "2"}).json()
    assert len(last["data"]) == 1
    assert last["hasMore"] is False


def test_setting_by_key(client):
    assert client.get("/settings/key/theme").json() is None
    assert client.put("/settings/key/theme", json={"setting_value": "dark"}).status_code == 404

    client.post("/settings/", json={"setting_key": "theme", "setting_value": "light"})
    updated = client.put("/settings/key/theme", json={"setting_value": "dark"}).json()
    assert updated["setting_value"] == "dark"
    assert client.get("/settings/key/theme").json()["setting_value"] == "dark"

    assert client.delete("/settings/key/theme").status_code == 204
    assert client.delete("/settings/key/theme").status_code == 404


# ===== ASSETS =====

def add_snapshot(client, day, assets, liabilities):
    response = client.post("/assets/", json={
        "date": day,
        "details": [
            {"asset_type": "savings", "asset_name": "Savings", "amount": assets, "category": "asset"},
            {"asset_type": "loan", "asset_name": "Car Loan", "amount": liabilities, "category": "liability"},
        ],
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_asset_trends(client):
    add_snapshot(client, "2024-01-01", "1200", "200")
    add_snapshot(client, "2024-03-01", "1190", "200")
    add_snapshot(client, "2024-02-01", "1300", "200")

    trends = client.get("/assets/trends/summary").json()
    assert [point["date"] for point in trends["trends"]] == ["2024-01-01", "2024-02-01", "2024-03-01"]
    assert [point["netWorth"] for point in trends["trends"]] == [1000.0, 1100.0, 990.0]
    assert [point["growthRate"] for point in trends["trends"]] == [0.0, 10.0, -10.0]
    assert trends["summary"] == {"currentNetWorth": 990.0, "averageGrowthRate": 0.0}

    assert client.get("/assets/latest").json()["date"] == "2024-03-01"


def test_duplicate_asset_types_are_rejected(client):
    response = client.post("/assets/", json={
        "date": "2024-01-01",
        "details": [
            {"asset_type": "savings", "asset_name": "A", "amount": "1", "category": "asset"},
            {"asset_type": "savings", "asset_name": "B", "amount": "2", "category": "asset"},
        ],
    })
    assert response.status_code == 422


def test_snapshot_update_replaces_details(client):
    snapshot = add_snapshot(client, "2024-01-01", "1200", "200")
    response = client.put(f"/assets/{snapshot['id']}", json={
        "details": [{"asset_type": "cash", "asset_name": "Cash", "amount": "50", "category": "asset"}],
    })
    assert response.status_code == 200
    assert [d["asset_type"] for d in response.json()["details"]] == ["cash"]


def test_latest_snapshot_missing_is_404(client):
    assert client.get("/assets/latest").status_code == 404
