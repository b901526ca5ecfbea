from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_task
from src.models import task as task_models
from src.models.common import DeletedCount
from src.db.core import get_db, NotFoundError
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)

@router.get("/", response_model=List[task_models.TaskResponse])
def read_tasks(
    completed: Optional[bool] = None,
    important: Optional[bool] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve tasks, most recent first. ``search`` matches title or description.
    """
    return crud_task.read_db_tasks(
        db=db, user_id=user_id, completed=completed, important=important,
        search=search, page=page, limit=limit
    )

@router.get("/stats/summary", response_model=task_models.TaskSummary)
def read_task_summary(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Task counts and completion rate.
    """
    return crud_task.get_task_summary(db=db, user_id=user_id)

@router.delete("/completed", response_model=DeletedCount)
def delete_completed_tasks(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Delete every completed task.
    """
    return DeletedCount(deleted_count=crud_task.delete_completed_tasks(db=db, user_id=user_id))

@router.get("/{task_id}", response_model=task_models.TaskResponse)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_task = crud_task.read_db_task(db=db, task_id=task_id, user_id=user_id)
    if db_task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return db_task

@router.post("/", response_model=task_models.TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task: task_models.TaskCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_task.create_db_task(db=db, user_id=user_id, task_data=task)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.patch("/{task_id}/toggle", response_model=task_models.TaskResponse)
def toggle_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Flip a task between completed and pending.
    """
    try:
        return crud_task.toggle_db_task(db=db, task_id=task_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{task_id}", response_model=task_models.TaskResponse)
def update_task(
    task_id: int,
    task: task_models.TaskUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_task.update_db_task(db=db, task_id=task_id, user_id=user_id, task_updates=task)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_task.delete_db_task(db=db, task_id=task_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
