"""Todo operations against the database."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from todo_api.db import CreateTodo, TodoModel, UpdateTodo, UpdateTodoPartial, todos


class ServiceError(Exception):
    """A todo operation failed."""


class NotFoundError(ServiceError):
    """The requested todo does not exist."""


def _to_model(row: Row) -> TodoModel:
    return TodoModel(**row._mapping)


class TodoService:
    """Create, read, update and delete todos."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _connection(self, transaction: bool = False) -> Iterator[Connection]:
        try:
            opener = self._engine.begin if transaction else self._engine.connect
            with opener() as conn:
                yield conn
        except SQLAlchemyError as error:
            raise ServiceError(f"DB error: {error}") from error

    def create(self, request: CreateTodo) -> TodoModel:
        """Insert a todo and return the stored row."""
        with self._connection(transaction=True) as conn:
            conn.execute(
                insert(todos).values(title=request.title, description=request.description)
            )
            row = conn.execute(
                select(todos).order_by(todos.c.id.desc()).limit(1)
            ).first()
        if row is None:
            raise NotFoundError("DB error: Record not found")
        return _to_model(row)

    def list(self) -> list[TodoModel]:
        """Return every todo."""
        with self._connection() as conn:
            return [_to_model(row) for row in conn.execute(select(todos))]

    def get(self, todo_id: int) -> TodoModel:
        """Return the todo with the given id."""
        with self._connection() as conn:
            row = conn.execute(select(todos).where(todos.c.id == todo_id)).first()
        if row is None:
            raise NotFoundError("DB error: Record not found")
        return _to_model(row)

    def delete(self, todo_id: int) -> None:
        """Delete the todo with the given id."""
        with self._connection(transaction=True) as conn:
            result = conn.execute(delete(todos).where(todos.c.id == todo_id))
        if result.rowcount == 0:
            raise NotFoundError("DB error: Record not found")

    def partial_update(self, todo_id: int, request: UpdateTodoPartial) -> None:
        """Change only the fields the request sets."""
        changes = request.changes()
        if not changes:
            raise ServiceError("DB error: There are no changes to save")
        self._apply(todo_id, changes)

    def update(self, todo_id: int, request: UpdateTodo) -> None:
        """Replace the title and description of a todo."""
        self._apply(todo_id, {"title": request.title, "description": request.description})

    def _apply(self, todo_id: int, changes: dict[str, str]) -> None:
        with self._connection(transaction=True) as conn:
            result = conn.execute(
                update(todos).where(todos.c.id == todo_id).values(**changes)
            )
        if result.rowcount == 0:
            raise NotFoundError("DB error: Record not found")