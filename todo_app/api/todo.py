from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from todo_app.db import get_db
from todo_app.schema.todo import TodoCreate, TodoUpdate, TodoOut, TodoCount, TodoDeleted
from todo_app.service import todo_service

router = APIRouter(prefix="/todos", tags=["todos"])

# PostgreSQL INTEGER 上限，超出的 id 直接按参数错误处理
MAX_TODO_ID = 2147483647


@router.get("", response_model=List[TodoOut])
def list_todos(db: Session = Depends(get_db)):
    return todo_service.list_todos(db)


# 必须在 /{todo_id} 之前注册
@router.get("/count", response_model=TodoCount)
def count_todos(db: Session = Depends(get_db)):
    return {"amount": todo_service.count_todos(db)}


@router.get("/{todo_id}", response_model=TodoOut)
def get_todo(
        todo_id: int = Path(..., gt=0, le=MAX_TODO_ID),
        db: Session = Depends(get_db)
):
    return todo_service.get_todo(db, todo_id)


@router.post("", response_model=TodoOut, status_code=201)
def create_todo(
        todo_data: TodoCreate,
        db: Session = Depends(get_db)
):
    return todo_service.create_todo(db, todo_data)


@router.patch("/{todo_id}", response_model=TodoOut)
def update_todo(
        todo_data: TodoUpdate,
        todo_id: int = Path(..., gt=0, le=MAX_TODO_ID),
        db: Session = Depends(get_db)
):
    """局部更新，text / completed 均可省略"""
    return todo_service.update_todo(db, todo_id, todo_data)


@router.delete("/{todo_id}", response_model=TodoDeleted)
def delete_todo(
        todo_id: int = Path(..., gt=0, le=MAX_TODO_ID),
        db: Session = Depends(get_db)
):
    todo_service.delete_todo(db, todo_id)
    return {"message": "Todo deleted successfully"}
