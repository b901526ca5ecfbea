import json
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any

from src.db.core import SystemSettingDB, SettingDataType, NotFoundError
from src.models.setting import SettingCreate, SettingUpdate, SettingValueUpdate, SettingPage, SettingResponse
from src.crud.filters import scoped_query, filter_equal, filter_search, resolve_page, paginate
from src.logging_config import get_logger

logger = get_logger(__name__)


def serialize_setting_value(value: Any) -> str:
    """Settings are stored as text: strings as-is, anything else JSON encoded."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


# ===== DATABASE OPERATIONS =====

def create_db_setting(db: Session, user_id: str, setting_data: SettingCreate) -> SystemSettingDB:
    """Create a new setting"""
    if read_db_setting_by_key(db, user_id, setting_data.setting_key):
        raise ValueError(f"Setting '{setting_data.setting_key}' already exists")

    db_setting = SystemSettingDB(
        user_id=user_id,
        setting_key=setting_data.setting_key,
        setting_value=serialize_setting_value(setting_data.setting_value),
        data_type=setting_data.data_type,
        description=setting_data.description,
    )

    try:
        db.add(db_setting)
        db.commit()
        db.refresh(db_setting)
    except IntegrityError:
        db.rollback()
        raise ValueError("Setting creation failed due to database constraint")

    logger.info(f"Created setting '{db_setting.setting_key}' for user {user_id}")
    return db_setting


def read_db_settings(
    db: Session,
    user_id: str,
    setting_key: Optional[str] = None,
    data_type: Optional[SettingDataType] = None,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> SettingPage:
    """Read a page of settings along with the total match count"""
    query = scoped_query(db, SystemSettingDB, user_id)
    query = filter_equal(query, SystemSettingDB.setting_key, setting_key)
    query = filter_equal(query, SystemSettingDB.data_type, data_type)
    query = filter_search(query, [SystemSettingDB.setting_key, SystemSettingDB.setting_value], search)

    total = query.count()
    resolved = resolve_page(page, limit)
    settings = paginate(query.order_by(desc(SystemSettingDB.updated_at), desc(SystemSettingDB.id)), resolved).all()

    return SettingPage(
        data=[SettingResponse.model_validate(setting) for setting in settings],
        total=total,
        page=resolved.page,
        limit=resolved.limit,
        has_more=total > resolved.offset + resolved.limit,
    )


def read_db_settings_by_type(db: Session, user_id: str, data_type: SettingDataType) -> List[SystemSettingDB]:
    return scoped_query(db, SystemSettingDB, user_id).filter(SystemSettingDB.data_type == data_type).all()


def read_db_setting(db: Session, setting_id: int, user_id: str) -> Optional[SystemSettingDB]:
    return scoped_query(db, SystemSettingDB, user_id).filter(SystemSettingDB.id == setting_id).first()


def read_db_setting_by_key(db: Session, user_id: str, setting_key: str) -> Optional[SystemSettingDB]:
    return scoped_query(db, SystemSettingDB, user_id).filter(SystemSettingDB.setting_key == setting_key).first()


def _apply_setting_updates(db: Session, db_setting: SystemSettingDB, update_data: dict) -> SystemSettingDB:
    if 'setting_value' in update_data:
        update_data['setting_value'] = serialize_setting_value(update_data['setting_value'])
    # data_type is not nullable; an explicit null leaves it unchanged
    if 'data_type' in update_data and update_data['data_type'] is None:
        del update_data['data_type']

    for field, value in update_data.items():
        setattr(db_setting, field, value)

    try:
        db.commit()
        db.refresh(db_setting)
    except IntegrityError:
        db.rollback()
        raise ValueError("Setting update failed due to database constraint")

    logger.info(f"Updated setting '{db_setting.setting_key}' for user {db_setting.user_id}")
    return db_setting


def update_db_setting(db: Session, setting_id: int, user_id: str, setting_updates: SettingUpdate) -> SystemSettingDB:
    """Update a setting by ID"""
    db_setting = read_db_setting(db, setting_id, user_id)
    if not db_setting:
        raise NotFoundError(f"Setting with id {setting_id} not found")
    return _apply_setting_updates(db, db_setting, setting_updates.model_dump(exclude_unset=True))


def update_db_setting_by_key(db: Session, user_id: str, setting_key: str,
                             setting_updates: SettingValueUpdate) -> SystemSettingDB:
    """Update a setting's value by key"""
    db_setting = read_db_setting_by_key(db, user_id, setting_key)
    if not db_setting:
        raise NotFoundError(f"Setting '{setting_key}' not found")
    return _apply_setting_updates(db, db_setting, setting_updates.model_dump(exclude_unset=True))


def delete_db_setting(db: Session, setting_id: int, user_id: str) -> bool:
    db_setting = read_db_setting(db, setting_id, user_id)
    if not db_setting:
        raise NotFoundError(f"Setting with id {setting_id} not found")

    db.delete(db_setting)
    db.commit()
    return True


def delete_db_setting_by_key(db: Session, user_id: str, setting_key: str) -> bool:
    db_setting = read_db_setting_by_key(db, user_id, setting_key)
    if not db_setting:
        raise NotFoundError(f"Setting '{setting_key}' not found")

    db.delete(db_setting)
    db.commit()
    return True
