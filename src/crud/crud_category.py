from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import asc
from typing import Optional, List

from src.db.core import CategoryDB, FundDB, NotFoundError
from src.models.category import CategoryCreate, CategoryUpdate
from src.crud.filters import scoped_query
from src.logging_config import get_logger

logger = get_logger(__name__)


def _require_fund(db: Session, fund_id: int, user_id: str) -> FundDB:
    fund = scoped_query(db, FundDB, user_id).filter(FundDB.id == fund_id).first()
    if not fund:
        raise NotFoundError(f"Fund with id {fund_id} not found")
    return fund


# ===== DATABASE OPERATIONS =====

def create_db_category(db: Session, user_id: str, category_data: CategoryCreate) -> CategoryDB:
    """Create a new category under one of the user's funds"""
    _require_fund(db, category_data.fund_id, user_id)

    existing_category = scoped_query(db, CategoryDB, user_id).filter(CategoryDB.name == category_data.name).first()
    if existing_category:
        raise ValueError(f"Category with name '{category_data.name}' already exists")

    db_category = CategoryDB(user_id=user_id, **category_data.model_dump())

    try:
        db.add(db_category)
        db.commit()
        db.refresh(db_category)
    except IntegrityError:
        db.rollback()
        raise ValueError("Category creation failed due to database constraint")

    logger.info(f"Created category {db_category.id} for user {user_id}")
    return db_category


def read_db_category(db: Session, category_id: int, user_id: str) -> Optional[CategoryDB]:
    """Read a category by ID"""
    return scoped_query(db, CategoryDB, user_id).filter(CategoryDB.id == category_id).options(
        joinedload(CategoryDB.fund)
    ).first()


def read_db_categories(db: Session, user_id: str) -> List[CategoryDB]:
    """Read the user's active categories by name, with their fund"""
    return scoped_query(db, CategoryDB, user_id).filter(
        CategoryDB.is_active.is_(True)
    ).options(joinedload(CategoryDB.fund)).order_by(asc(CategoryDB.name)).all()


def read_db_categories_by_fund(db: Session, fund_id: int, user_id: str) -> List[CategoryDB]:
    """Read the active categories drawing from one fund"""
    return scoped_query(db, CategoryDB, user_id).filter(
        CategoryDB.fund_id == fund_id,
        CategoryDB.is_active.is_(True)
    ).order_by(asc(CategoryDB.name)).all()


def update_db_category(db: Session, category_id: int, user_id: str, category_updates: CategoryUpdate) -> CategoryDB:
    """Update an existing category"""
    db_category = read_db_category(db, category_id, user_id)
    if not db_category:
        raise NotFoundError(f"Category with id {category_id} not found")

    update_data = category_updates.model_dump(exclude_unset=True)
    if update_data.get('fund_id') is not None:
        _require_fund(db, update_data['fund_id'], user_id)
    if 'name' in update_data:
        existing_category = scoped_query(db, CategoryDB, user_id).filter(
            CategoryDB.name == update_data['name'],
            CategoryDB.id != category_id
        ).first()
        if existing_category:
            raise ValueError(f"Category with name '{update_data['name']}' already exists")

    for field, value in update_data.items():
        setattr(db_category, field, value)

    try:
        db.commit()
        db.refresh(db_category)
    except IntegrityError:
        db.rollback()
        raise ValueError("Category update failed due to database constraint")

    logger.info(f"Updated category {category_id} for user {user_id}")
    return db_category


def set_category_active(db: Session, category_id: int, user_id: str, is_active: bool) -> CategoryDB:
    """Activate or deactivate a category"""
    db_category = read_db_category(db, category_id, user_id)
    if not db_category:
        raise NotFoundError(f"Category with id {category_id} not found")

    db_category.is_active = is_active
    db.commit()
    db.refresh(db_category)
    return db_category


def delete_db_category(db: Session, category_id: int, user_id: str) -> bool:
    """Delete a category"""
    db_category = read_db_category(db, category_id, user_id)
    if not db_category:
        raise NotFoundError(f"Category with id {category_id} not found")

    try:
        db.delete(db_category)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Category is still used by expenses and cannot be deleted")

    logger.info(f"Deleted category {category_id} for user {user_id}")
    return True
