import datetime as dt
import enum
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import create_engine, event, CheckConstraint, ForeignKey, Index, UniqueConstraint, Boolean, Integer, String, Text, DECIMAL, DateTime, Date
from sqlalchemy.types import Enum
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Mapped, relationship, mapped_column

from src.config import DATABASE_URL, SQL_ECHO


class NotFoundError(Exception):
    pass


class Base(DeclarativeBase):
    pass


def _enum_column(enum_cls, name: str) -> Enum:
    # Persist the lowercase values ("monthly", "i_owe"), not the member names
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        validate_strings=True,
        values_callable=lambda members: [member.value for member in members],
    )


class FundType(enum.Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"
    SAVINGS = "savings"


class DebtType(enum.Enum):
    OWED_TO_ME = "owed_to_me"
    I_OWE = "i_owe"


class AssetCategory(enum.Enum):
    ASSET = "asset"
    LIABILITY = "liability"


class SettingDataType(enum.Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"


class BudgetYearDB(Base):
    __tablename__ = "budget_years"

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_budget_year_dates"),
        Index("idx_budget_years_user_active", "user_id", "is_active"),
        Index("idx_budget_years_user_start", "user_id", "start_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    fund_budgets: Mapped[List["FundBudgetDB"]] = relationship(back_populates="budget_year", cascade="all, delete-orphan")


class FundDB(Base):
    __tablename__ = "funds"

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_fund_user_name"),
        CheckConstraint("level BETWEEN 1 AND 3", name="ck_fund_level"),
        Index("idx_funds_user_order", "user_id", "display_order"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[FundType] = mapped_column(_enum_column(FundType, "fund_type"), nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    include_in_budget: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    fund_budgets: Mapped[List["FundBudgetDB"]] = relationship(back_populates="fund", cascade="all, delete-orphan")
    categories: Mapped[List["CategoryDB"]] = relationship(back_populates="fund", cascade="all, delete-orphan")


class FundBudgetDB(Base):
    __tablename__ = "fund_budgets"

    __table_args__ = (
        UniqueConstraint("fund_id", "budget_year_id", name="uq_fund_budget_year"),
        CheckConstraint("amount >= 0", name="ck_fund_budget_amount"),
        CheckConstraint("amount_given >= 0", name="ck_fund_budget_amount_given"),
        CheckConstraint("spent >= 0", name="ck_fund_budget_spent"),
        Index("idx_fund_budgets_year", "budget_year_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    fund_id: Mapped[int] = mapped_column(ForeignKey("funds.id", ondelete="CASCADE"), nullable=False)
    budget_year_id: Mapped[int] = mapped_column(ForeignKey("budget_years.id", ondelete="CASCADE"), nullable=False)

    amount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), default=Decimal("0.00"), nullable=False)
    amount_given: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), default=Decimal("0.00"), nullable=False)
    spent: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), default=Decimal("0.00"), nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    fund: Mapped["FundDB"] = relationship(back_populates="fund_budgets")
    budget_year: Mapped["BudgetYearDB"] = relationship(back_populates="fund_budgets")


class CategoryDB(Base):
    __tablename__ = "categories"

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_category_user_name"),
        Index("idx_categories_fund", "fund_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    fund_id: Mapped[int] = mapped_column(ForeignKey("funds.id", ondelete="CASCADE"), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color_class: Mapped[Optional[str]] = mapped_column(String(50))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    fund: Mapped["FundDB"] = relationship(back_populates="categories")


class IncomeDB(Base):
    __tablename__ = "incomes"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_income_amount"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_income_month"),
        Index("idx_incomes_user_date", "user_id", "date"),
        Index("idx_incomes_budget_year", "budget_year_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    budget_year_id: Mapped[int] = mapped_column(ForeignKey("budget_years.id", ondelete="CASCADE"), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)
    source: Mapped[Optional[str]] = mapped_column(String(255))
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    budget_year: Mapped["BudgetYearDB"] = relationship()


class ExpenseDB(Base):
    __tablename__ = "expenses"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expense_amount"),
        Index("idx_expenses_user_date", "user_id", "date"),
        Index("idx_expenses_budget_year", "budget_year_id"),
        Index("idx_expenses_fund", "fund_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    budget_year_id: Mapped[int] = mapped_column(ForeignKey("budget_years.id", ondelete="CASCADE"), nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    fund_id: Mapped[int] = mapped_column(ForeignKey("funds.id", ondelete="RESTRICT"), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    budget_year: Mapped["BudgetYearDB"] = relationship()
    category: Mapped["CategoryDB"] = relationship()
    fund: Mapped["FundDB"] = relationship()


class TitheDB(Base):
    __tablename__ = "tithes"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_tithe_amount"),
        Index("idx_tithes_user_date", "user_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class DebtDB(Base):
    __tablename__ = "debts"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_debt_amount"),
        Index("idx_debts_user_type", "user_id", "type"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)
    type: Mapped[DebtType] = mapped_column(_enum_column(DebtType, "debt_type"), nullable=False)
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    paid_date: Mapped[Optional[dt.date]] = mapped_column(Date)
    note: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class TaskDB(Base):
    __tablename__ = "tasks"

    __table_args__ = (
        Index("idx_tasks_user_completed", "user_id", "completed"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    important: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class NoteDB(Base):
    __tablename__ = "notes"

    __table_args__ = (
        Index("idx_notes_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class AssetSnapshotDB(Base):
    __tablename__ = "asset_snapshots"

    __table_args__ = (
        Index("idx_asset_snapshots_user_date", "user_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    details: Mapped[List["AssetDetailDB"]] = relationship(
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="AssetDetailDB.id",
    )


class AssetDetailDB(Base):
    __tablename__ = "asset_details"

    __table_args__ = (
        UniqueConstraint("snapshot_id", "asset_type", name="uq_asset_detail_snapshot_type"),
        CheckConstraint("amount >= 0", name="ck_asset_detail_amount"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    snapshot_id: Mapped[int] = mapped_column(ForeignKey("asset_snapshots.id", ondelete="CASCADE"), nullable=False)

    asset_type: Mapped[str] = mapped_column(String(100), nullable=False)
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(14, 2), nullable=False)
    category: Mapped[AssetCategory] = mapped_column(_enum_column(AssetCategory, "asset_category"), nullable=False)

    snapshot: Mapped["AssetSnapshotDB"] = relationship(back_populates="details")


class SystemSettingDB(Base):
    __tablename__ = "system_settings"

    __table_args__ = (
        UniqueConstraint("user_id", "setting_key", name="uq_system_setting_user_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    setting_key: Mapped[str] = mapped_column(String(100), nullable=False)
    setting_value: Mapped[Optional[str]] = mapped_column(Text)
    data_type: Mapped[SettingDataType] = mapped_column(_enum_column(SettingDataType, "setting_data_type"), default=SettingDataType.STRING, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class CashEnvelopeTransactionDB(Base):
    __tablename__ = "cash_envelope_transactions"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_cash_envelope_amount"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_cash_envelope_month"),
        Index("idx_cash_envelope_year_month", "user_id", "budget_year_id", "month"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    fund_id: Mapped[int] = mapped_column(ForeignKey("funds.id", ondelete="CASCADE"), nullable=False)
    budget_year_id: Mapped[int] = mapped_column(ForeignKey("budget_years.id", ondelete="CASCADE"), nullable=False)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(255))

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    fund: Mapped["FundDB"] = relationship()


def enable_sqlite_foreign_keys(target_engine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ON DELETE CASCADE/RESTRICT unless the pragma is set per connection.
    """
    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)
if DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)
session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    database = session_local()
    try:
        yield database
    finally:
        database.close()
