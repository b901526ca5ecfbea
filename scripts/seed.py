import sys
import os
import random
from sqlalchemy.orm import Session
from datetime import date, datetime, timedelta
from decimal import Decimal
from faker import Faker

# Add the project root to the Python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.config import DEFAULT_USER_ID
from src.db.core import (
    Base,
    engine,
    session_local,
    BudgetYearDB,
    FundDB,
    FundBudgetDB,
    CategoryDB,
    IncomeDB,
    ExpenseDB,
    TitheDB,
    DebtDB,
    TaskDB,
    NoteDB,
    AssetSnapshotDB,
    AssetDetailDB,
    SystemSettingDB,
    CashEnvelopeTransactionDB,
    FundType,
    DebtType,
    AssetCategory,
    SettingDataType,
)

fake = Faker()

FUNDS = [
    # name, type, level, monthly or annual amount, categories
    ("Groceries", FundType.MONTHLY, 1, Decimal("600.00"), ["Supermarket", "Farmers Market"]),
    ("Fuel", FundType.MONTHLY, 1, Decimal("180.00"), ["Gas Station"]),
    ("Dining Out", FundType.MONTHLY, 3, Decimal("120.00"), ["Restaurants", "Coffee"]),
    ("Utilities", FundType.ANNUAL, 1, Decimal("3600.00"), ["Electricity", "Water", "Internet"]),
    ("Insurance", FundType.ANNUAL, 1, Decimal("2400.00"), ["Car Insurance", "Home Insurance"]),
    ("Vacation", FundType.SAVINGS, 2, Decimal("3000.00"), ["Travel"]),
    ("Emergency", FundType.SAVINGS, 2, Decimal("5000.00"), ["Emergency"]),
]

COLOR_CLASSES = ["bg-blue-500", "bg-green-500", "bg-red-500", "bg-yellow-500", "bg-purple-500", "bg-pink-500"]

ASSETS = [
    ("checking", "Checking Account", AssetCategory.ASSET, 4000, 9000),
    ("savings", "Savings Account", AssetCategory.ASSET, 10000, 25000),
    ("retirement", "401(k)", AssetCategory.ASSET, 40000, 60000),
    ("car_loan", "Car Loan", AssetCategory.LIABILITY, 8000, 15000),
    ("credit_card", "Credit Card", AssetCategory.LIABILITY, 0, 2500),
]


def money(low: float, high: float) -> Decimal:
    return Decimal(str(round(random.uniform(low, high), 2)))


def seed_database(user_id: str = DEFAULT_USER_ID):
    """
    Fills the database with a year of sample budget data for one user.
    """
    Base.metadata.create_all(bind=engine)
    db: Session = session_local()

    try:
        if db.query(BudgetYearDB).filter(BudgetYearDB.user_id == user_id).count() > 0:
            print(f"Data for user '{user_id}' already exists. Exiting.")
            return

        print(f"Seeding sample data for user '{user_id}'...")

        # 1. Budget years: last year (inactive) and this year (active)
        this_year = date.today().year
        budget_years = []
        for year in (this_year - 1, this_year):
            budget_year = BudgetYearDB(
                user_id=user_id,
                name=str(year),
                start_date=date(year, 1, 1),
                end_date=date(year, 12, 31),
                is_active=(year == this_year),
            )
            db.add(budget_year)
            budget_years.append(budget_year)
        db.flush()
        active_year = budget_years[-1]

        # 2. Funds, their budgets and categories
        print("Creating funds and categories...")
        categories = []
        funds = []
        for order, (name, fund_type, level, amount, category_names) in enumerate(FUNDS):
            fund = FundDB(user_id=user_id, name=name, type=fund_type, level=level, display_order=order)
            db.add(fund)
            db.flush()
            funds.append(fund)

            for budget_year in budget_years:
                months_elapsed = 12 if budget_year is not active_year else date.today().month
                db.add(FundBudgetDB(
                    user_id=user_id,
                    fund_id=fund.id,
                    budget_year_id=budget_year.id,
                    amount=amount,
                    amount_given=amount * months_elapsed if fund_type == FundType.MONTHLY else Decimal("0.00"),
                    spent=money(0, float(amount)) if fund_type != FundType.MONTHLY else Decimal("0.00"),
                ))

            for category_name in category_names:
                category = CategoryDB(
                    user_id=user_id,
                    fund_id=fund.id,
                    name=category_name,
                    color_class=random.choice(COLOR_CLASSES),
                )
                db.add(category)
                categories.append(category)
        db.flush()

        # 3. Incomes, expenses and tithes across both years
        print("Creating incomes, expenses and tithes...")
        for budget_year in budget_years:
            last_day = min(budget_year.end_date, date.today())
            for _ in range(24):
                income_date = fake.date_between_dates(budget_year.start_date, last_day)
                amount = money(1500, 4500)
                db.add(IncomeDB(
                    user_id=user_id,
                    budget_year_id=budget_year.id,
                    name=random.choice(["Paycheck", "Bonus", "Side Project", "Refund"]),
                    amount=amount,
                    source=random.choice(["Employer", "Freelance", None]),
                    date=income_date,
                    month=income_date.month,
                    year=income_date.year,
                    note=fake.sentence() if random.random() < 0.2 else None,
                ))
                if random.random() < 0.8:
                    db.add(TitheDB(
                        user_id=user_id,
                        description=f"Tithe on {income_date.isoformat()}",
                        amount=(amount * Decimal("0.10")).quantize(Decimal("0.01")),
                        date=income_date + timedelta(days=random.randint(0, 6)),
                    ))

            for _ in range(150):
                category = random.choice(categories)
                db.add(ExpenseDB(
                    user_id=user_id,
                    budget_year_id=budget_year.id,
                    category_id=category.id,
                    fund_id=category.fund_id,
                    name=fake.company(),
                    amount=money(5, 250),
                    date=fake.date_between_dates(budget_year.start_date, last_day),
                    note=fake.sentence() if random.random() < 0.1 else None,
                ))

        # 4. Cash envelope withdrawals for monthly funds
        for fund in funds:
            if fund.type != FundType.MONTHLY:
                continue
            for month in range(1, date.today().month + 1):
                withdrawal_date = date(active_year.start_date.year, month, random.randint(1, 28))
                if withdrawal_date > date.today():
                    continue
                db.add(CashEnvelopeTransactionDB(
                    user_id=user_id,
                    fund_id=fund.id,
                    budget_year_id=active_year.id,
                    date=withdrawal_date,
                    month=withdrawal_date.month,
                    year=withdrawal_date.year,
                    amount=money(20, 150),
                    description=f"Cash for {fund.name.lower()}",
                ))

        # 5. Debts, tasks and notes
        print("Creating debts, tasks and notes...")
        for _ in range(8):
            is_paid = random.random() < 0.4
            db.add(DebtDB(
                user_id=user_id,
                description=f"{fake.first_name()} - {fake.bs()}",
                amount=money(20, 800),
                type=random.choice(list(DebtType)),
                is_paid=is_paid,
                paid_date=fake.date_between(start_date='-90d', end_date='today') if is_paid else None,
            ))

        for _ in range(12):
            completed = random.random() < 0.5
            db.add(TaskDB(
                user_id=user_id,
                title=fake.sentence(nb_words=5).rstrip('.'),
                description=fake.paragraph() if random.random() < 0.5 else None,
                completed=completed,
                important=random.random() < 0.3,
                completed_at=datetime.utcnow() - timedelta(days=random.randint(0, 30)) if completed else None,
            ))

        for _ in range(5):
            db.add(NoteDB(user_id=user_id, title=fake.catch_phrase(), content=fake.paragraph(nb_sentences=4)))

        # 6. Monthly asset snapshots for the past year
        print("Creating asset snapshots...")
        for months_back in range(11, -1, -1):
            snapshot_date = date.today().replace(day=1) - timedelta(days=30 * months_back)
            snapshot = AssetSnapshotDB(user_id=user_id, date=snapshot_date, note=None)
            snapshot.details = [
                AssetDetailDB(asset_type=asset_type, asset_name=asset_name, category=category, amount=money(low, high))
                for asset_type, asset_name, category, low, high in ASSETS
            ]
            db.add(snapshot)

        # 7. Settings
        db.add_all([
            SystemSettingDB(user_id=user_id, setting_key="currency", setting_value="USD", data_type=SettingDataType.STRING),
            SystemSettingDB(user_id=user_id, setting_key="tithe_rate", setting_value="0.1", data_type=SettingDataType.NUMBER),
            SystemSettingDB(user_id=user_id, setting_key="show_savings", setting_value="true", data_type=SettingDataType.BOOLEAN),
        ])

        db.commit()
        print("Database seeded successfully!")

    except Exception as e:
        print(f"An error occurred: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_USER_ID)
