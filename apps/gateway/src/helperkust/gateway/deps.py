"""依赖注入模块 -- 通过 FastAPI Depends 注入 Workspace

Workspace 通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request

from .services.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    """从 app.state 获取 Workspace 实例"""
    return request.app.state.workspace
