from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from src.crud import crud_tithe
from src.models import tithe as tithe_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/tithes",
    tags=["tithes"],
)

@router.get("/", response_model=List[tithe_models.TitheResponse])
def read_tithes(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve tithes, newest first. ``search`` matches description or note.
    """
    return crud_tithe.read_db_tithes(
        db=db, user_id=user_id, start_date=start_date, end_date=end_date,
        search=search, page=page, limit=limit
    )

@router.get("/summary", response_model=tithe_models.TitheSummary)
def read_tithe_summary(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Tithes given compared with 10% of all income.
    """
    return crud_tithe.get_tithe_summary(db=db, user_id=user_id)

@router.get("/{tithe_id}", response_model=tithe_models.TitheResponse)
def read_tithe(
    tithe_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_tithe = crud_tithe.read_db_tithe(db=db, tithe_id=tithe_id, user_id=user_id)
    if db_tithe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tithe not found")
    return db_tithe

@router.post("/", response_model=tithe_models.TitheResponse, status_code=status.HTTP_201_CREATED)
def create_tithe(
    tithe: tithe_models.TitheCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_tithe.create_db_tithe(db=db, user_id=user_id, tithe_data=tithe)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{tithe_id}", response_model=tithe_models.TitheResponse)
def update_tithe(
    tithe_id: int,
    tithe: tithe_models.TitheUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_tithe.update_db_tithe(db=db, tithe_id=tithe_id, user_id=user_id, tithe_updates=tithe)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{tithe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tithe(
    tithe_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_tithe.delete_db_tithe(db=db, tithe_id=tithe_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
