from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import desc
from typing import Optional, List, Any
from datetime import datetime

from src.db.core import TaskDB, NotFoundError
from src.models.task import TaskCreate, TaskUpdate, TaskSummary
from src.crud.filters import scoped_query, filter_equal, filter_search, resolve_page, paginate
from src.services import metrics
from src.logging_config import get_logger

logger = get_logger(__name__)


def _set_completed(db_task: TaskDB, completed: bool) -> None:
    # completed_at is only touched when the state actually flips
    if completed and not db_task.completed_at:
        db_task.completed_at = datetime.utcnow()
    elif not completed:
        db_task.completed_at = None
    db_task.completed = completed


# ===== DATABASE OPERATIONS =====

def create_db_task(db: Session, user_id: str, task_data: TaskCreate) -> TaskDB:
    """Create a new task"""
    db_task = TaskDB(user_id=user_id, **task_data.model_dump(exclude={'completed'}))
    _set_completed(db_task, task_data.completed)

    try:
        db.add(db_task)
        db.commit()
        db.refresh(db_task)
    except IntegrityError:
        db.rollback()
        raise ValueError("Task creation failed due to database constraint")

    logger.info(f"Created task {db_task.id} for user {user_id}")
    return db_task


def read_db_task(db: Session, task_id: int, user_id: str) -> Optional[TaskDB]:
    """Read a task by ID"""
    return scoped_query(db, TaskDB, user_id).filter(TaskDB.id == task_id).first()


def read_db_tasks(
    db: Session,
    user_id: str,
    completed: Optional[bool] = None,
    important: Optional[bool] = None,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> List[TaskDB]:
    """Read a page of tasks, most recently created first"""
    query = scoped_query(db, TaskDB, user_id)
    query = filter_equal(query, TaskDB.completed, completed)
    query = filter_equal(query, TaskDB.important, important)
    query = filter_search(query, [TaskDB.title, TaskDB.description], search)
    query = query.order_by(desc(TaskDB.created_at), desc(TaskDB.id))
    return paginate(query, resolve_page(page, limit)).all()


def read_all_tasks(db: Session, user_id: str) -> List[TaskDB]:
    return scoped_query(db, TaskDB, user_id).all()


def update_db_task(db: Session, task_id: int, user_id: str, task_updates: TaskUpdate) -> TaskDB:
    """Update an existing task"""
    db_task = read_db_task(db, task_id, user_id)
    if not db_task:
        raise NotFoundError(f"Task with id {task_id} not found")

    update_data = task_updates.model_dump(exclude_unset=True)
    completed = update_data.pop('completed', None)

    for field, value in update_data.items():
        setattr(db_task, field, value)
    if completed is not None:
        _set_completed(db_task, completed)

    try:
        db.commit()
        db.refresh(db_task)
    except IntegrityError:
        db.rollback()
        raise ValueError("Task update failed due to database constraint")

    logger.info(f"Updated task {task_id} for user {user_id}")
    return db_task


def toggle_db_task(db: Session, task_id: int, user_id: str) -> TaskDB:
    """Flip a task between completed and pending"""
    db_task = read_db_task(db, task_id, user_id)
    if not db_task:
        raise NotFoundError(f"Task with id {task_id} not found")

    _set_completed(db_task, not db_task.completed)
    db.commit()
    db.refresh(db_task)
    return db_task


def delete_db_task(db: Session, task_id: int, user_id: str) -> bool:
    """Delete a task"""
    db_task = read_db_task(db, task_id, user_id)
    if not db_task:
        raise NotFoundError(f"Task with id {task_id} not found")

    db.delete(db_task)
    db.commit()
    logger.info(f"Deleted task {task_id} for user {user_id}")
    return True


def delete_completed_tasks(db: Session, user_id: str) -> int:
    """Delete every completed task of the user and return how many went"""
    deleted_count = scoped_query(db, TaskDB, user_id).filter(
        TaskDB.completed.is_(True)
    ).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Deleted {deleted_count} completed tasks for user {user_id}")
    return deleted_count


# ===== SUMMARY =====

def count_tasks(tasks: List[TaskDB]):
    """(total, completed, important) where important excludes completed tasks"""
    completed = sum(1 for task in tasks if task.completed)
    important = sum(1 for task in tasks if task.important and not task.completed)
    return len(tasks), completed, important


def get_task_summary(db: Session, user_id: str) -> TaskSummary:
    total, completed, important = count_tasks(read_all_tasks(db, user_id))

    return TaskSummary(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        important_tasks=important,
        completion_rate=metrics.to_float(metrics.percentage(completed, total)),
    )
