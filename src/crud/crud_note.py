from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import Optional, List, Any

from src.db.core import NoteDB, NotFoundError
from src.models.note import NoteCreate, NoteUpdate
from src.crud.filters import scoped_query, filter_search, resolve_page, paginate


def create_db_note(db: Session, user_id: str, note_data: NoteCreate) -> NoteDB:
    db_note = NoteDB(user_id=user_id, **note_data.model_dump())
    db.add(db_note)
    db.commit()
    db.refresh(db_note)
    return db_note


def read_db_note(db: Session, note_id: int, user_id: str) -> Optional[NoteDB]:
    return scoped_query(db, NoteDB, user_id).filter(NoteDB.id == note_id).first()


def read_db_notes(db: Session, user_id: str, search: Optional[str] = None,
                  page: Any = None, limit: Any = None) -> List[NoteDB]:
    """Read a page of notes, most recently created first"""
    query = scoped_query(db, NoteDB, user_id)
    query = filter_search(query, [NoteDB.title, NoteDB.content], search)
    query = query.order_by(desc(NoteDB.created_at), desc(NoteDB.id))
    return paginate(query, resolve_page(page, limit)).all()


def update_db_note(db: Session, note_id: int, user_id: str, note_updates: NoteUpdate) -> NoteDB:
    db_note = read_db_note(db, note_id, user_id)
    if not db_note:
        raise NotFoundError(f"Note with id {note_id} not found")

    for field, value in note_updates.model_dump(exclude_unset=True).items():
        setattr(db_note, field, value)

    db.commit()
    db.refresh(db_note)
    return db_note


def delete_db_note(db: Session, note_id: int, user_id: str) -> bool:
    db_note = read_db_note(db, note_id, user_id)
    if not db_note:
        raise NotFoundError(f"Note with id {note_id} not found")

    db.delete(db_note)
    db.commit()
    return True
