from datetime import datetime

import pytest

from todo_api.db import CreateTodo, TodoModel, UpdateTodo, UpdateTodoPartial
from todo_api.models import (
    CreateTodoRequest,
    PartialUpdateTodoRequest,
    RequestError,
    Todo,
    UpdateTodoRequest,
)


def test_todo_from_model_drops_timestamps():
    now = datetime(2024, 5, 1, 8, 30)
    model = TodoModel(id=4, title="t", description="d", created=now, updated=now)
    todo = Todo.from_model(model)
    assert todo == Todo(id=4, title="t", description="d")
    assert todo.to_dict() == {"id": 4, "title": "t", "description": "d"}


def test_create_request_round_trip():
    request = CreateTodoRequest.from_json({"title": "a", "description": "b"})
    assert request.to_record() == CreateTodo(title="a", description="b")


def test_create_request_ignores_unknown_fields():
    request = CreateTodoRequest.from_json({"title": "a", "description": "b", "x": 1})
    assert request == CreateTodoRequest(title="a", description="b")


@pytest.mark.parametrize(
    "data",
    [
        {"title": "a"},
        {"description": "b"},
        {"title": 1, "description": "b"},
        {"title": "a", "description": None},
        ["a", "b"],
        "text",
    ],
)
def test_create_request_rejects_bad_bodies(data):
    with pytest.raises(RequestError):
        CreateTodoRequest.from_json(data)


@pytest.mark.parametrize(
    "data",
    [{"title": "a"}, {"title": "a", "description": 3}, None],
)
def test_update_request_rejects_bad_bodies(data):
    with pytest.raises(RequestError):
        UpdateTodoRequest.from_json(data)


def test_update_request_round_trip():
    request = UpdateTodoRequest.from_json({"title": "x", "description": "y"})
    assert request.to_record() == UpdateTodo(title="x", description="y")


def test_partial_request_missing_and_null_fields_are_none():
    assert PartialUpdateTodoRequest.from_json({}) == PartialUpdateTodoRequest()
    request = PartialUpdateTodoRequest.from_json({"title": None, "description": "d"})
    assert request.to_record() == UpdateTodoPartial(title=None, description="d")
    assert request.to_record().changes() == {"description": "d"}


def test_partial_request_rejects_wrong_types():
    with pytest.raises(RequestError):
        PartialUpdateTodoRequest.from_json({"title": ["a"]})
    with pytest.raises(RequestError):
        PartialUpdateTodoRequest.from_json(42)