import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.db.core import Base, enable_sqlite_foreign_keys, get_db
from src.main import app

USER_ID = "user-a"
OTHER_USER_ID = "user-b"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        database = testing_session()
        try:
            yield database
        finally:
            database.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, headers={"X-User-Id": USER_ID}) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def budget_year(client):
    response = client.post("/budget-years/", json={
        "name": "2024",
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
        "is_active": True,
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def fund(client):
    response = client.post("/funds/", json={"name": "Groceries", "type": "monthly", "level": 1})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def category(client, fund):
    response = client.post("/categories/", json={"name": "Supermarket", "fund_id": fund["id"], "color_class": "bg-green-500"})
    assert response.status_code == 201
    return response.json()
