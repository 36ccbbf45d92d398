"""任务看板路由

GET    /api/tasks                   任务列表（最新在前），支持 status 筛选
POST   /api/tasks                   创建任务并打开
PATCH  /api/tasks/{task_id}/status  显式设置状态
POST   /api/tasks/{task_id}/toggle  勾选切换
POST   /api/tasks/{task_id}/open    打开任务（切换会话）
DELETE /api/tasks/{task_id}         删除任务
"""

from fastapi import APIRouter, Depends, Query
from helperkust.core.config import TASK_TITLE_MAX_LENGTH
from helperkust.core.models import Task, TaskStatus
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, Response

from ..deps import get_workspace
from ..services.workspace import Workspace

router = APIRouter()


class TaskCreateRequest(BaseModel):
    """创建任务请求体"""

    title: str = Field(min_length=1, max_length=TASK_TITLE_MAX_LENGTH)
    description: str | None = Field(default=None)


class TaskStatusRequest(BaseModel):
    """设置状态请求体"""

    status: TaskStatus


class TaskListResponse(BaseModel):
    """任务列表响应"""

    tasks: list[Task]
    active_task_id: str | None = None


def _task_not_found(task_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": {
                "code": "TASK_NOT_FOUND",
                "message": f"Task with id {task_id} does not exist",
            }
        },
    )


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(
    status: TaskStatus | None = Query(default=None, description="按状态筛选"),
    workspace: Workspace = Depends(get_workspace),
):
    return TaskListResponse(
        tasks=workspace.board.list_tasks(status),
        active_task_id=workspace.session.task_id,
    )


@router.post("/api/tasks", status_code=201, response_model=Task)
async def create_task(
    body: TaskCreateRequest,
    workspace: Workspace = Depends(get_workspace),
):
    """创建任务（插入表头）并立即打开"""
    try:
        return await workspace.add_task(body.title, body.description)
    except ValueError as e:
        return JSONResponse(
            status_code=422,
            content={"error": {"code": "INVALID_TITLE", "message": str(e)}},
        )


@router.patch("/api/tasks/{task_id}/status", response_model=Task)
async def set_task_status(
    task_id: str,
    body: TaskStatusRequest,
    workspace: Workspace = Depends(get_workspace),
):
    task = await workspace.set_task_status(task_id, body.status)
    return task if task is not None else _task_not_found(task_id)


@router.post("/api/tasks/{task_id}/toggle", response_model=Task)
async def toggle_task(
    task_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    """COMPLETED -> PENDING，其余 -> COMPLETED"""
    task = await workspace.toggle_task(task_id)
    return task if task is not None else _task_not_found(task_id)


@router.post("/api/tasks/{task_id}/open", response_model=Task)
async def open_task(
    task_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    task = workspace.open_task(task_id)
    return task if task is not None else _task_not_found(task_id)


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    if not await workspace.delete_task(task_id):
        return _task_not_found(task_id)
    return Response(status_code=204)
