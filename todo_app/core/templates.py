from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def render_todos(todos, show_completed=False, draft="", editing_id=None, editing_text=""):
    """渲染待办列表；输出只取决于传入的状态"""
    completed = [todo for todo in todos if todo.completed]
    incomplete = [todo for todo in todos if not todo.completed]
    return templates.env.get_template("todos.html").render(
        todos=completed if show_completed else incomplete,
        show_completed=show_completed,
        completed_count=len(completed),
        incomplete_count=len(incomplete),
        draft=draft,
        editing_id=editing_id,
        editing_text=editing_text,
    )
