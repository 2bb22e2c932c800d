"""Application wiring and the server entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import uvicorn
from starlette.applications import Starlette
from starlette.routing import Route

from todo_api.db import DbConnectionPoolError, connection_pool, migrate_db
from todo_api.handlers import (
    create_todo,
    delete_todo,
    get_todo,
    list_todos,
    partial_update_todo,
    update_todo,
)
from todo_api.service import TodoService

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9999


def create_app(service: TodoService) -> Starlette:
    """Build the application with all todo routes served by the given service."""
    routes = [
        Route("/todo", list_todos, methods=["GET"]),
        Route("/todo/{id}", get_todo, methods=["GET"]),
        Route("/todo", create_todo, methods=["POST"]),
        Route("/todo/{id}", delete_todo, methods=["DELETE"]),
        Route("/todo/{id}", partial_update_todo, methods=["PATCH"]),
        Route("/todo/{id}", update_todo, methods=["PUT"]),
    ]
    app = Starlette(routes=routes)
    app.state.service = service
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Migrate the database and serve the todo API."""
    parser = argparse.ArgumentParser(prog="todo_api", description="Serve the todo API.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    try:
        engine = connection_pool()
        migrate_db(engine)
    except DbConnectionPoolError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    uvicorn.run(create_app(TodoService(engine)), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())