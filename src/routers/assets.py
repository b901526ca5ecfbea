from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from src.crud import crud_asset
from src.models import asset as asset_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/assets",
    tags=["assets"],
)

@router.get("/", response_model=List[asset_models.AssetSnapshotResponse])
def read_asset_snapshots(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve asset snapshots with their details, newest first.
    """
    return crud_asset.read_db_asset_snapshots(
        db=db, user_id=user_id, start_date=start_date, end_date=end_date, page=page, limit=limit
    )

@router.get("/latest", response_model=asset_models.AssetSnapshotResponse)
def read_latest_asset_snapshot(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_snapshot = crud_asset.read_latest_asset_snapshot(db=db, user_id=user_id)
    if db_snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No asset snapshots recorded")
    return db_snapshot

@router.get("/trends/summary", response_model=asset_models.AssetTrends)
def read_asset_trends(
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Net worth and growth rate across the latest snapshots, oldest first.
    """
    return crud_asset.get_asset_trends(db=db, user_id=user_id, limit=limit)

@router.get("/{snapshot_id}", response_model=asset_models.AssetSnapshotResponse)
def read_asset_snapshot(
    snapshot_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_snapshot = crud_asset.read_db_asset_snapshot(db=db, snapshot_id=snapshot_id, user_id=user_id)
    if db_snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset snapshot not found")
    return db_snapshot

@router.post("/", response_model=asset_models.AssetSnapshotResponse, status_code=status.HTTP_201_CREATED)
def create_asset_snapshot(
    snapshot: asset_models.AssetSnapshotCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Record a snapshot of assets and liabilities.
    """
    try:
        return crud_asset.create_db_asset_snapshot(db=db, user_id=user_id, snapshot_data=snapshot)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{snapshot_id}", response_model=asset_models.AssetSnapshotResponse)
def update_asset_snapshot(
    snapshot_id: int,
    snapshot: asset_models.AssetSnapshotUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Update a snapshot. Supplied details replace the existing ones.
    """
    try:
        return crud_asset.update_db_asset_snapshot(db=db, snapshot_id=snapshot_id, user_id=user_id, snapshot_updates=snapshot)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{snapshot_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_asset_snapshot(
    snapshot_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_asset.delete_db_asset_snapshot(db=db, snapshot_id=snapshot_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
