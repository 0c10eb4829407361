# todo_app/client/todo_view.py
import logging
from typing import List, Optional

from todo_app.client.todo_client import TodoClient, TodoApiError
from todo_app.core.templates import render_todos
from todo_app.schema.todo import TodoOut

logger = logging.getLogger(__name__)


class TodoView:
    """待办列表视图

    本地缓存整张列表，每次修改成功后整体重新拉取，不做乐观更新。
    请求失败只记日志，不回滚也不提示。
    """

    def __init__(self, client: TodoClient):
        self.client = client
        self.todos: List[TodoOut] = []
        self.show_completed = False
        self.draft = ""
        self.editing_id: Optional[int] = None
        self.editing_text = ""

    def mount(self):
        self.refresh()

    def refresh(self):
        try:
            self.todos = self.client.list_todos()
        except TodoApiError as e:
            logger.error("Error fetching todos: %s", e)

    def _mutate(self, action: str, call) -> bool:
        try:
            call()
        except TodoApiError as e:
            logger.error("Error %s: %s", action, e)
            return False
        self.refresh()
        return True

    def _find(self, todo_id: int) -> Optional[TodoOut]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    @property
    def visible_todos(self) -> List[TodoOut]:
        return [todo for todo in self.todos if todo.completed is self.show_completed]

    def set_filter(self, show_completed: bool):
        self.show_completed = show_completed

    def add(self) -> bool:
        text = self.draft.strip()
        if not text:
            return False
        # 不管请求成败都先清空输入框
        self.draft = ""
        return self._mutate("creating todo", lambda: self.client.create_todo(text))

    def toggle(self, todo_id: int) -> bool:
        todo = self._find(todo_id)
        if todo is None:
            return False
        return self._mutate(
            "updating todo",
            lambda: self.client.update_todo(todo.id, text=todo.text, completed=not todo.completed),
        )

    def start_edit(self, todo_id: int):
        todo = self._find(todo_id)
        if todo is None:
            return
        self.editing_id = todo.id
        self.editing_text = todo.text

    def cancel_edit(self):
        self.editing_id = None
        self.editing_text = ""

    def save_edit(self) -> bool:
        todo = self._find(self.editing_id) if self.editing_id is not None else None
        if todo is None:
            self.cancel_edit()
            return False
        text = self.editing_text.strip()
        # 空内容不提交，保持编辑状态
        if not text:
            return False
        self.cancel_edit()
        return self._mutate(
            "updating todo",
            lambda: self.client.update_todo(todo.id, text=text, completed=todo.completed),
        )

    def delete(self, todo_id: int) -> bool:
        return self._mutate("deleting todo", lambda: self.client.delete_todo(todo_id))

    def render(self) -> str:
        return render_todos(
            self.todos,
            show_completed=self.show_completed,
            draft=self.draft,
            editing_id=self.editing_id,
            editing_text=self.editing_text,
        )
