"""HTTP surface for the task list.

Requires the 'api' extra: pip install tasklist[api]

Route prefix: /tasks

Endpoints:
    GET    /tasks          List the caller's active tasks
    GET    /tasks/{id}     Fetch one task
    POST   /tasks          Create a task
    PUT    /tasks/{id}     Partially update a task
    DELETE /tasks/{id}     Soft-delete a task

Every endpoint needs an ``Authorization: Bearer <token>`` header.  The
token's subject is the user id handed to :class:`TaskService`.  Handlers
are plain ``def`` functions, so FastAPI runs them on its worker thread
pool, concurrently with each other.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tasklist.exceptions import AuthenticationError, TaskNotFoundError
from tasklist.models.task import Task, TaskCreate, TaskUpdate
from tasklist.protocols.identity import TokenVerifier
from tasklist.service.tasks import TaskService

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)

router = APIRouter(prefix="/tasks", tags=["tasks"])


# =============================================================================
# Dependencies
# =============================================================================


def get_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> int:
    """Resolve the bearer token to a user id, or raise AuthenticationError."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    verifier: TokenVerifier = request.app.state.token_verifier
    user_id = verifier.verify(credentials.credentials)
    if user_id is None:
        raise AuthenticationError("Invalid bearer token")
    return user_id


CurrentUser = Annotated[int, Depends(get_current_user)]
Service = Annotated[TaskService, Depends(get_service)]


# =============================================================================
# Routes
# =============================================================================


@router.get("", response_model=list[Task], summary="List tasks")
def list_tasks(user_id: CurrentUser, service: Service) -> list[Task]:
    return service.list_tasks(user_id)


@router.get("/{task_id}", response_model=Task, summary="Get task")
def get_task(task_id: int, user_id: CurrentUser, service: Service) -> Task:
    return service.get_task(user_id, task_id)


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
def create_task(
    body: TaskCreate, user_id: CurrentUser, service: Service, response: Response
) -> Task:
    task = service.create_task(user_id, body)
    response.headers["Location"] = f"/tasks/{task.id}"
    return task


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Update task")
def update_task(task_id: int, body: TaskUpdate, user_id: CurrentUser, service: Service) -> Response:
    service.update_task(user_id, task_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete task")
def delete_task(task_id: int, user_id: CurrentUser, service: Service) -> Response:
    service.delete_task(user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Application factory
# =============================================================================


def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def _unauthorized(request: Request, exc: Exception) -> JSONResponse:
    logger.debug("Rejected request to %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_app(service: TaskService, verifier: TokenVerifier) -> FastAPI:
    """Build the ASGI app around an existing service and token verifier.

    The service (and therefore its cache) is shared by every request for
    the lifetime of the app.
    """
    app = FastAPI(title="tasklist")
    app.state.task_service = service
    app.state.token_verifier = verifier
    app.add_exception_handler(TaskNotFoundError, _not_found)
    app.add_exception_handler(AuthenticationError, _unauthorized)
    app.include_router(router)
    return app
