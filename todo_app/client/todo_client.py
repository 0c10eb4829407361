# todo_app/client/todo_client.py
import logging
import os
from typing import List, Optional

import requests
from pydantic import TypeAdapter

from todo_app.schema.todo import TodoOut, TodoCount, TodoDeleted

logger = logging.getLogger(__name__)

_TODO = TypeAdapter(TodoOut)
_TODO_LIST = TypeAdapter(List[TodoOut])
_COUNT = TypeAdapter(TodoCount)
_DELETED = TypeAdapter(TodoDeleted)


class TodoApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TodoNotFound(TodoApiError):
    pass


class TodoClient:
    """/todos 接口的 HTTP 客户端

    session 可以是 requests.Session，也可以是任何接口相同的对象
    （测试里直接传 FastAPI 的 TestClient）。
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 5):
        self.base_url = (base_url or os.getenv("TODO_API_URL", "http://localhost:3000")).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, adapter: TypeAdapter, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            res = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TodoApiError(f"{method} {path} failed: {e}") from e

        if res.status_code >= 400:
            message = self._error_message(res)
            if res.status_code == 404:
                raise TodoNotFound(message, status_code=404)
            raise TodoApiError(message, status_code=res.status_code)

        # 非 JSON 或结构不对（代理页、TODO_API_URL 配错）同样算请求失败
        try:
            return adapter.validate_python(res.json())
        except ValueError as e:
            raise TodoApiError(
                f"{method} {path} returned an unexpected body: {e}", status_code=res.status_code
            ) from e

    @staticmethod
    def _error_message(res) -> str:
        try:
            data = res.json()
        except ValueError:
            return res.text
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return res.text

    def list_todos(self) -> List[TodoOut]:
        return self._request("GET", "/todos", _TODO_LIST)

    def count_todos(self) -> int:
        return self._request("GET", "/todos/count", _COUNT).amount

    def get_todo(self, todo_id: int) -> TodoOut:
        return self._request("GET", f"/todos/{todo_id}", _TODO)

    def create_todo(self, text: str) -> TodoOut:
        return self._request("POST", "/todos", _TODO, json={"text": text})

    def update_todo(self, todo_id: int, text: Optional[str] = None, completed: Optional[bool] = None) -> TodoOut:
        body = {}
        if text is not None:
            body["text"] = text
        if completed is not None:
            body["completed"] = completed
        return self._request("PATCH", f"/todos/{todo_id}", _TODO, json=body)

    def delete_todo(self, todo_id: int) -> str:
        return self._request("DELETE", f"/todos/{todo_id}", _DELETED).message
