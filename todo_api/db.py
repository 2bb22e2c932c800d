"""Database access: schema, connection pool, migrations and record types."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dotenv import find_dotenv, load_dotenv
from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

metadata = MetaData()

todos = Table(
    "todos",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("created", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    Column(
        "updated",
        DateTime,
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.now(),
    ),
)


class DbConnectionPoolError(Exception):
    """Raised when the database connection pool cannot be set up."""


def database_url() -> str:
    """Return DATABASE_URL, reading a .env file from the working directory first."""
    load_dotenv(find_dotenv(usecwd=True))
    try:
        return os.environ["DATABASE_URL"]
    except KeyError:
        raise DbConnectionPoolError(
            "Missing environment variable: DATABASE_URL"
        ) from None


def _normalise_url(url: str) -> str:
    if url.startswith("mysql://"):
        return "mysql+pymysql://" + url[len("mysql://"):]
    return url


def connection_pool(url: str | None = None) -> Engine:
    """Build a pooled engine that checks each connection before handing it out."""
    if url is None:
        url = database_url()
    try:
        return create_engine(_normalise_url(url), pool_pre_ping=True)
    except SQLAlchemyError as error:
        raise DbConnectionPoolError(f"DB pool build error: {error}") from error


def migrate_db(engine: Engine) -> None:
    """Create any tables that do not exist yet."""
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as error:
        raise DbConnectionPoolError(f"Failed to run DB migrations: {error}") from error


@dataclass(frozen=True)
class TodoModel:
    """A row of the todos table."""

    id: int
    title: str
    description: str
    created: datetime
    updated: datetime


@dataclass(frozen=True)
class CreateTodo:
    """Values for a new todo row."""

    title: str
    description: str


@dataclass(frozen=True)
class UpdateTodoPartial:
    """Changes to a todo row; fields left as None are kept."""

    title: str | None = None
    description: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the columns that are to be changed."""
        return {
            name: value
            for name, value in (("title", self.title), ("description", self.description))
            if value is not None
        }


@dataclass(frozen=True)
class UpdateTodo:
    """Full replacement values for a todo row."""

    title: str
    description: str