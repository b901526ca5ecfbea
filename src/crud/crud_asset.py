from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any
from datetime import date

from src.db.core import AssetSnapshotDB, AssetDetailDB, NotFoundError
from src.models.asset import AssetSnapshotCreate, AssetSnapshotUpdate, AssetDetailCreate, AssetTrends
from src.crud.filters import scoped_query, filter_date_range, resolve_page, paginate
from src.services.asset_trends import build_asset_trends
from src.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SNAPSHOT_LIMIT = 20
DEFAULT_TREND_LIMIT = 12


def _build_details(details: List[AssetDetailCreate]) -> List[AssetDetailDB]:
    return [AssetDetailDB(**detail.model_dump()) for detail in details]


# ===== DATABASE OPERATIONS =====

def create_db_asset_snapshot(db: Session, user_id: str, snapshot_data: AssetSnapshotCreate) -> AssetSnapshotDB:
    """Create a snapshot together with its asset and liability lines"""
    db_snapshot = AssetSnapshotDB(
        user_id=user_id,
        date=snapshot_data.date,
        note=snapshot_data.note,
        details=_build_details(snapshot_data.details),
    )

    try:
        db.add(db_snapshot)
        db.commit()
        db.refresh(db_snapshot)
    except IntegrityError:
        db.rollback()
        raise ValueError("Asset snapshot creation failed due to database constraint")

    logger.info(f"Created asset snapshot {db_snapshot.id} with {len(db_snapshot.details)} details for user {user_id}")
    return db_snapshot


def read_db_asset_snapshot(db: Session, snapshot_id: int, user_id: str) -> Optional[AssetSnapshotDB]:
    """Read a snapshot by ID with its details"""
    return scoped_query(db, AssetSnapshotDB, user_id).filter(AssetSnapshotDB.id == snapshot_id).options(
        selectinload(AssetSnapshotDB.details)
    ).first()


def read_db_asset_snapshots(
    db: Session,
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: Any = None,
    limit: Any = None,
) -> List[AssetSnapshotDB]:
    """Read a page of snapshots, newest first"""
    query = scoped_query(db, AssetSnapshotDB, user_id)
    query = filter_date_range(query, AssetSnapshotDB.date, start_date, end_date)
    query = query.options(selectinload(AssetSnapshotDB.details))
    query = query.order_by(desc(AssetSnapshotDB.date), desc(AssetSnapshotDB.id))
    return paginate(query, resolve_page(page, limit, default_limit=DEFAULT_SNAPSHOT_LIMIT)).all()


def read_latest_asset_snapshot(db: Session, user_id: str) -> Optional[AssetSnapshotDB]:
    """Read the most recent snapshot, if any"""
    return scoped_query(db, AssetSnapshotDB, user_id).options(
        selectinload(AssetSnapshotDB.details)
    ).order_by(desc(AssetSnapshotDB.date), desc(AssetSnapshotDB.id)).first()


def update_db_asset_snapshot(db: Session, snapshot_id: int, user_id: str,
                             snapshot_updates: AssetSnapshotUpdate) -> AssetSnapshotDB:
    """Update a snapshot; supplied details replace the existing ones"""
    db_snapshot = read_db_asset_snapshot(db, snapshot_id, user_id)
    if not db_snapshot:
        raise NotFoundError(f"Asset snapshot with id {snapshot_id} not found")

    update_data = snapshot_updates.model_dump(exclude_unset=True, exclude={'details'})
    for field, value in update_data.items():
        setattr(db_snapshot, field, value)

    try:
        if snapshot_updates.details is not None:
            # Old rows must be gone before new ones reuse their asset_type
            db_snapshot.details.clear()
            db.flush()
            db_snapshot.details.extend(_build_details(snapshot_updates.details))
        db.commit()
        db.refresh(db_snapshot)
    except IntegrityError:
        db.rollback()
        raise ValueError("Asset snapshot update failed due to database constraint")

    logger.info(f"Updated asset snapshot {snapshot_id} for user {user_id}")
    return db_snapshot


def delete_db_asset_snapshot(db: Session, snapshot_id: int, user_id: str) -> bool:
    """Delete a snapshot and its details"""
    db_snapshot = read_db_asset_snapshot(db, snapshot_id, user_id)
    if not db_snapshot:
        raise NotFoundError(f"Asset snapshot with id {snapshot_id} not found")

    db.delete(db_snapshot)
    db.commit()
    logger.info(f"Deleted asset snapshot {snapshot_id} for user {user_id}")
    return True


# ===== TRENDS =====

def get_asset_trends(db: Session, user_id: str, limit: Any = None) -> AssetTrends:
    """Net worth and growth across the latest snapshots, oldest first"""
    page = resolve_page(1, limit, default_limit=DEFAULT_TREND_LIMIT)
    latest = scoped_query(db, AssetSnapshotDB, user_id).options(
        selectinload(AssetSnapshotDB.details)
    ).order_by(desc(AssetSnapshotDB.date), desc(AssetSnapshotDB.id)).limit(page.limit).all()

    return build_asset_trends(list(reversed(latest)))
