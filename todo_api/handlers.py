"""HTTP handlers for the todo endpoints."""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from todo_api.models import (
    CreateTodoRequest,
    PartialUpdateTodoRequest,
    RequestError,
    Todo,
    UpdateTodoRequest,
)
from todo_api.service import NotFoundError, ServiceError, TodoService

_ID_PATTERN = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1

T = TypeVar("T")


class _Rejection(Exception):
    """The request could not be turned into handler arguments."""

    def __init__(self, status: HTTPStatus, message: str) -> None:
        super().__init__(message)
        self.status = status

    def response(self) -> Response:
        return PlainTextResponse(str(self), status_code=self.status)


def _service(request: Request) -> TodoService:
    return request.app.state.service


def _as_i32(value: int) -> int:
    """Wrap an unsigned id into the signed 32-bit range of the id column."""
    return (value + 2**31) % 2**32 - 2**31


def _path_id(request: Request) -> int:
    raw = request.path_params["id"]
    if not _ID_PATTERN.fullmatch(raw):
        raise _Rejection(HTTPStatus.BAD_REQUEST, f"Invalid URL: cannot parse `{raw}` as `u64`")
    value = int(raw)
    if value > _U64_MAX:
        raise _Rejection(HTTPStatus.BAD_REQUEST, f"Invalid URL: cannot parse `{raw}` as `u64`")
    return value


def _is_json_content(request: Request) -> bool:
    essence = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if essence == "application/json":
        return True
    return essence.startswith("application/") and essence.endswith("+json")


async def _json_body(request: Request, parse: Callable[[Any], T]) -> T:
    if not _is_json_content(request):
        raise _Rejection(
            HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
            "Expected request with `Content-Type: application/json`",
        )
    body = await request.body()
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise _Rejection(
            HTTPStatus.BAD_REQUEST, f"Failed to parse the request body as JSON: {error}"
        ) from error
    try:
        return parse(data)
    except RequestError as error:
        raise _Rejection(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            f"Failed to deserialize the JSON body into the target type: {error}",
        ) from error


def _status_for(error: ServiceError) -> HTTPStatus:
    if isinstance(error, NotFoundError):
        return HTTPStatus.NOT_FOUND
    return HTTPStatus.INTERNAL_SERVER_ERROR


async def list_todos(request: Request) -> Response:
    """Return every todo as a JSON array."""
    try:
        models = await run_in_threadpool(_service(request).list)
    except ServiceError as error:
        print(f"Failed to fetch the list of TODOs:  {error}")
        return Response(status_code=HTTPStatus.INTERNAL_SERVER_ERROR)
    return JSONResponse([Todo.from_model(model).to_dict() for model in models])


async def get_todo(request: Request) -> Response:
    """Return the todo named by the path id."""
    try:
        todo_id = _path_id(request)
    except _Rejection as rejection:
        return rejection.response()
    print(f"Get TODO handler id: {todo_id}")
    try:
        model = await run_in_threadpool(_service(request).get, _as_i32(todo_id))
    except ServiceError as error:
        print(f"Failed to retrieve TODO: {error}")
        return Response(status_code=_status_for(error))
    return JSONResponse(Todo.from_model(model).to_dict())


async def create_todo(request: Request) -> Response:
    """Store a new todo and return it."""
    try:
        body = await _json_body(request, CreateTodoRequest.from_json)
    except _Rejection as rejection:
        return rejection.response()
    print(f"Create TODO request: {body!r}")
    try:
        model = await run_in_threadpool(_service(request).create, body.to_record())
    except ServiceError as error:
        print(f"Error during creation of TODO: {error}")
        return Response(status_code=HTTPStatus.INTERNAL_SERVER_ERROR)
    return JSONResponse(Todo.from_model(model).to_dict())


async def delete_todo(request: Request) -> Response:
    """Delete the todo named by the path id."""
    try:
        todo_id = _path_id(request)
    except _Rejection as rejection:
        return rejection.response()
    print(f"Delete TODO handler request id: {todo_id}")
    try:
        await run_in_threadpool(_service(request).delete, _as_i32(todo_id))
    except ServiceError as error:
        print(f"Failed to delete TODO: {error}")
        return Response(status_code=_status_for(error))
    return Response(status_code=HTTPStatus.OK)


async def partial_update_todo(request: Request) -> Response:
    """Change the fields given in the body of the todo named by the path id."""
    try:
        todo_id = _path_id(request)
        body = await _json_body(request, PartialUpdateTodoRequest.from_json)
    except _Rejection as rejection:
        return rejection.response()
    print(f"Partial update TODO request: {body!r}")
    try:
        await run_in_threadpool(
            _service(request).partial_update, _as_i32(todo_id), body.to_record()
        )
    except ServiceError as error:
        print(f"Failed to do partial update: {error}")
        return Response(status_code=_status_for(error))
    return Response(status_code=HTTPStatus.OK)


async def update_todo(request: Request) -> Response:
    """Replace the title and description of the todo named by the path id."""
    try:
        todo_id = _path_id(request)
        body = await _json_body(request, UpdateTodoRequest.from_json)
    except _Rejection as rejection:
        return rejection.response()
    print(f"Update TODO request: {body!r}")
    try:
        await run_in_threadpool(_service(request).update, _as_i32(todo_id), body.to_record())
    except ServiceError as error:
        print(f"Failed to do update: {error}")
        return Response(status_code=_status_for(error))
    return Response(status_code=HTTPStatus.OK)