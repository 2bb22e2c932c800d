"""JSON request and response bodies for the todo API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from todo_api.db import CreateTodo, TodoModel, UpdateTodo, UpdateTodoPartial


class RequestError(ValueError):
    """A request body does not have the expected shape."""


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise RequestError("expected a JSON object")
    return data


def _required_str(data: dict[str, Any], name: str) -> str:
    if name not in data:
        raise RequestError(f"missing field `{name}`")
    value = data[name]
    if not isinstance(value, str):
        raise RequestError(f"field `{name}` must be a string")
    return value


def _optional_str(data: dict[str, Any], name: str) -> str | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise RequestError(f"field `{name}` must be a string or null")
    return value


@dataclass(frozen=True)
class Todo:
    """A todo as returned to clients."""

    id: int
    title: str
    description: str

    @classmethod
    def from_model(cls, model: TodoModel) -> Todo:
        return cls(id=model.id, title=model.title, description=model.description)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "description": self.description}


@dataclass(frozen=True)
class CreateTodoRequest:
    """Body of a create request."""

    title: str
    description: str

    @classmethod
    def from_json(cls, data: Any) -> CreateTodoRequest:
        data = _require_object(data)
        return cls(
            title=_required_str(data, "title"),
            description=_required_str(data, "description"),
        )

    def to_record(self) -> CreateTodo:
        return CreateTodo(title=self.title, description=self.description)


@dataclass(frozen=True)
class PartialUpdateTodoRequest:
    """Body of a partial update request; absent or null fields are kept."""

    title: str | None = None
    description: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> PartialUpdateTodoRequest:
        data = _require_object(data)
        return cls(
            title=_optional_str(data, "title"),
            description=_optional_str(data, "description"),
        )

    def to_record(self) -> UpdateTodoPartial:
        return UpdateTodoPartial(title=self.title, description=self.description)


@dataclass(frozen=True)
class UpdateTodoRequest:
    """Body of a full update request."""

    title: str
    description: str

    @classmethod
    def from_json(cls, data: Any) -> UpdateTodoRequest:
        data = _require_object(data)
        return cls(
            title=_required_str(data, "title"),
            description=_required_str(data, "description"),
        )

    def to_record(self) -> UpdateTodo:
        return UpdateTodo(title=self.title, description=self.description)