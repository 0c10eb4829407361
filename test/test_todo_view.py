import logging

import pytest

from todo_app.client.todo_client import TodoClient
from todo_app.client.todo_view import TodoView


class RecordingClient(TodoClient):
    """记录调用过的方法名"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def _request(self, method, path, adapter, **kwargs):
        self.calls.append((method, path))
        return super()._request(method, path, adapter, **kwargs)


@pytest.fixture()
def api(client):
    return RecordingClient(base_url="http://testserver", session=client)


@pytest.fixture()
def view(api):
    v = TodoView(api)
    v.mount()
    return v


def test_mount_fetches_collection(api):
    api.create_todo("buy milk")
    v = TodoView(api)
    assert v.todos == []
    v.mount()
    assert [t.text for t in v.todos] == ["buy milk"]


def test_add_trims_and_refetches(view, api):
    view.draft = "  buy milk  "
    assert view.add() is True
    assert view.draft == ""
    assert [t.text for t in view.todos] == ["buy milk"]
    assert api.calls[-2:] == [("POST", "/todos"), ("GET", "/todos")]


def test_add_blank_does_not_call_service(view, api):
    calls_before = list(api.calls)
    view.draft = "   "
    assert view.add() is False
    assert api.calls == calls_before


def test_add_failure_clears_draft_and_logs(view, api, test_engine, caplog):
    from todo_app.db import Base

    Base.metadata.drop_all(bind=test_engine)
    view.draft = "buy milk"
    with caplog.at_level(logging.ERROR, logger="todo_app.client.todo_view"):
        assert view.add() is False
    assert view.draft == ""
    assert "Error creating todo" in caplog.text


def test_toggle_flips_completed_and_moves_tab(view):
    view.draft = "buy milk"
    view.add()
    todo_id = view.todos[0].id

    assert [t.id for t in view.visible_todos] == [todo_id]
    view.toggle(todo_id)
    assert view.todos[0].completed is True
    assert view.todos[0].text == "buy milk"
    assert view.visible_todos == []

    view.set_filter(True)
    assert [t.id for t in view.visible_todos] == [todo_id]


def test_edit_save(view, api):
    view.draft = "buy milk"
    view.add()
    todo_id = view.todos[0].id
    view.toggle(todo_id)

    view.start_edit(todo_id)
    assert view.editing_id == todo_id
    assert view.editing_text == "buy milk"

    view.editing_text = "buy oat milk"
    assert view.save_edit() is True
    assert view.editing_id is None
    assert view.todos[0].text == "buy oat milk"
    assert view.todos[0].completed is True


def test_edit_cancel_makes_no_call(view, api):
    view.draft = "buy milk"
    view.add()
    todo_id = view.todos[0].id
    calls_before = list(api.calls)

    view.start_edit(todo_id)
    view.editing_text = "something else"
    view.cancel_edit()

    assert view.editing_id is None
    assert api.calls == calls_before
    assert view.todos[0].text == "buy milk"


def test_edit_save_blank_stays_in_edit_mode(view, api):
    view.draft = "buy milk"
    view.add()
    todo_id = view.todos[0].id
    view.start_edit(todo_id)
    calls_before = list(api.calls)

    view.editing_text = "  "
    assert view.save_edit() is False
    assert view.editing_id == todo_id
    assert api.calls == calls_before


def test_delete_refetches(view):
    view.draft = "buy milk"
    view.add()
    assert view.delete(view.todos[0].id) is True
    assert view.todos == []


def test_delete_missing_is_logged(view, caplog):
    with caplog.at_level(logging.ERROR, logger="todo_app.client.todo_view"):
        assert view.delete(404) is False
    assert "Todo not found" in caplog.text


def test_each_todo_in_exactly_one_tab(view):
    for text in ["a", "b", "c"]:
        view.draft = text
        view.add()
    view.toggle(view.todos[1].id)

    incomplete = {t.id for t in view.visible_todos}
    view.set_filter(True)
    completed = {t.id for t in view.visible_todos}
    assert incomplete.isdisjoint(completed)
    assert incomplete | completed == {t.id for t in view.todos}


def test_render_shows_editing_row(view):
    view.draft = "buy milk"
    view.add()
    todo_id = view.todos[0].id
    view.start_edit(todo_id)
    view.editing_text = "buy bread"

    html = view.render()
    assert 'value="buy bread"' in html
    assert "Save" in html
    assert "Cancel" in html
    assert 'class="todo-text' not in html


class HtmlResponse:
    status_code = 200
    text = "<html><body>login</body></html>"

    def json(self):
        raise ValueError("Expecting value")


class HtmlSession:
    def request(self, method, url, **kwargs):
        return HtmlResponse()


def test_non_json_reply_is_logged_not_raised(caplog):
    v = TodoView(TodoClient(base_url="http://proxy", session=HtmlSession()))
    with caplog.at_level(logging.ERROR, logger="todo_app.client.todo_view"):
        v.mount()
        v.draft = "buy milk"
        assert v.add() is False
        assert v.delete(1) is False
    assert v.todos == []
    assert v.draft == ""
    assert "Error fetching todos" in caplog.text
    assert "Error creating todo" in caplog.text
    assert "Error deleting todo" in caplog.text
