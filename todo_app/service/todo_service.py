import logging
from contextlib import contextmanager
from typing import List

from sqlalchemy import delete, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_app.models import Todo
from todo_app.schema.todo import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


class TodoNotFoundError(Exception):
    def __init__(self, todo_id: int):
        super().__init__(f"Todo {todo_id} not found")
        self.todo_id = todo_id


class StoreFailureError(Exception):
    """数据库层出错；原始异常保存在 __cause__ 中，不返回给调用方"""


@contextmanager
def _store_call(db: Session, action: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Error %s", action)
        db.rollback()
        raise StoreFailureError(f"Error {action}") from e


def list_todos(db: Session) -> List[Todo]:
    with _store_call(db, "fetching todos"):
        return db.query(Todo).order_by(Todo.id.asc()).all()


def count_todos(db: Session) -> int:
    with _store_call(db, "counting todos"):
        return db.query(func.count(Todo.id)).scalar()


def get_todo(db: Session, todo_id: int) -> Todo:
    with _store_call(db, "fetching todo"):
        todo = db.query(Todo).filter(Todo.id == todo_id).first()
    if not todo:
        raise TodoNotFoundError(todo_id)
    return todo


def create_todo(db: Session, data: TodoCreate) -> Todo:
    with _store_call(db, "creating todo"):
        todo = Todo(text=data.text, completed=False)
        db.add(todo)
        db.commit()
        db.refresh(todo)
    logger.debug("Created todo %s", todo.id)
    return todo


def update_todo(db: Session, todo_id: int, data: TodoUpdate):
    """合并更新：只改请求里给出的字段

    单条 UPDATE ... RETURNING，不存在（包括刚被并发删除）的 id 统一按 404 处理。
    """
    changes = data.changes()
    if not changes:
        return get_todo(db, todo_id)

    with _store_call(db, "updating todo"):
        row = db.execute(
            update(Todo)
            .where(Todo.id == todo_id)
            .values(**changes)
            .returning(Todo.id, Todo.text, Todo.completed)
        ).first()
        if row is None:
            db.rollback()
            raise TodoNotFoundError(todo_id)
        db.commit()
    return row


def delete_todo(db: Session, todo_id: int) -> None:
    with _store_call(db, "deleting todo"):
        deleted_id = db.execute(
            delete(Todo).where(Todo.id == todo_id).returning(Todo.id)
        ).scalar()
        if deleted_id is None:
            db.rollback()
            raise TodoNotFoundError(todo_id)
        db.commit()
    logger.debug("Deleted todo %s", todo_id)
