from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from todo_app.core.templates import render_todos
from todo_app.db import get_db
from todo_app.service.todo_service import list_todos

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def home(tab: str = "incomplete", db: Session = Depends(get_db)):
    todos = list_todos(db)
    return HTMLResponse(render_todos(todos, show_completed=(tab == "completed")))
