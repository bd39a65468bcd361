import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import InvalidInput, NotFound, StoreUnavailable
from .models import UPDATABLE_FIELDS, TaskDB, TaskOut

logger = logging.getLogger(__name__)

task_table = TaskDB.__table__


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise InvalidInput("Task name is required.")
    return name.strip()


def _store_failure(db: Session, action: str, exc: SQLAlchemyError) -> StoreUnavailable:
    db.rollback()
    logger.error("Failed %s: %s", action, exc)
    return StoreUnavailable(f"Failed {action}.")


def list_tasks(db: Session) -> list[TaskOut]:
    try:
        rows = db.scalars(select(TaskDB).order_by(TaskDB.id.desc())).all()
    except SQLAlchemyError as exc:
        raise _store_failure(db, "to fetch tasks from database", exc) from exc
    return [TaskOut(**row.to_dict()) for row in rows]


def create_task(db: Session, name: str | None) -> TaskOut:
    name = _clean_name(name)
    try:
        result = db.execute(insert(task_table).values(name=name, completed=False))
        db.commit()
    except SQLAlchemyError as exc:
        raise _store_failure(db, "to insert task into database", exc) from exc
    task_id = result.inserted_primary_key[0]
    logger.info("Created task id=%s", task_id)
    return TaskOut(id=task_id, name=name, completed=False)


def update_task(db: Session, task_id: int, fields: dict) -> None:
    values = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
    if not values:
        raise InvalidInput("No fields provided for update.")
    if "name" in values:
        values["name"] = _clean_name(values["name"])

    # Column names come from the allow-list; values are bound parameters.
    stmt = update(task_table).where(task_table.c.id == task_id).values(**values)
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError as exc:
        raise _store_failure(db, "to update task in database", exc) from exc
    if result.rowcount == 0:
        raise NotFound(f"Task {task_id} not found.")
    logger.info("Updated task id=%s fields=%s", task_id, sorted(values))


def delete_task(db: Session, task_id: int) -> None:
    try:
        result = db.execute(delete(task_table).where(task_table.c.id == task_id))
        db.commit()
    except SQLAlchemyError as exc:
        raise _store_failure(db, "to delete task from database", exc) from exc
    if result.rowcount == 0:
        raise NotFound(f"Task {task_id} not found.")
    logger.info("Deleted task id=%s", task_id)
