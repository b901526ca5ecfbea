import datetime as dt
from pydantic import BaseModel
from typing import Optional, List

from src.models.budget_year import BudgetYearResponse
from src.models.category import CategorySummary
from src.models.common import CamelModel

# ===== DASHBOARD MODELS =====

class RecentExpense(BaseModel):
    id: int
    name: str
    amount: float
    date: dt.date
    category: Optional[CategorySummary] = None

    class Config:
        from_attributes = True

class IncomeMetrics(CamelModel):
    total: float

class ExpenseMetrics(CamelModel):
    total: float
    recent: List[RecentExpense]

class BudgetMetrics(CamelModel):
    total: float
    allocated: float
    spent: float
    remaining: float

class DebtMetrics(CamelModel):
    owed_to_me: float
    i_owe: float
    net_debt: float

class TaskMetrics(CamelModel):
    total: int
    completed: int
    pending: int
    important: int

class TitheMetrics(CamelModel):
    given: float
    expected: float
    balance: float
    percentage: float

class AssetMetrics(CamelModel):
    net_worth: float
    last_updated: Optional[dt.date] = None

class DashboardSummary(CamelModel):
    budget_year: Optional[BudgetYearResponse] = None
    income: IncomeMetrics
    expenses: ExpenseMetrics
    budget: BudgetMetrics
    balance: float
    debts: DebtMetrics
    tasks: TaskMetrics
    tithe: TitheMetrics
    assets: AssetMetrics
