from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_note
from src.models import note as note_models
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
)

@router.get("/", response_model=List[note_models.NoteResponse])
def read_notes(
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return crud_note.read_db_notes(db=db, user_id=user_id, search=search, page=page, limit=limit)

@router.get("/{note_id}", response_model=note_models.NoteResponse)
def read_note(
    note_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_note = crud_note.read_db_note(db=db, note_id=note_id, user_id=user_id)
    if db_note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return db_note

@router.post("/", response_model=note_models.NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    note: note_models.NoteCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return crud_note.create_db_note(db=db, user_id=user_id, note_data=note)

@router.put("/{note_id}", response_model=note_models.NoteResponse)
def update_note(
    note_id: int,
    note: note_models.NoteUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_note.update_db_note(db=db, note_id=note_id, user_id=user_id, note_updates=note)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    note_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_note.delete_db_note(db=db, note_id=note_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
