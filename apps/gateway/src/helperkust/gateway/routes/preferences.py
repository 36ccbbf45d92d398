"""偏好路由

GET /api/preferences  当前主题与语言
PUT /api/preferences  更新主题（持久化）和/或语言（仅内存）
"""

from fastapi import APIRouter, Depends
from helperkust.core.models import Language, Theme
from pydantic import BaseModel

from ..deps import get_workspace
from ..services.workspace import Workspace

router = APIRouter()


class PreferencesView(BaseModel):
    theme: Theme
    language: Language


class PreferencesUpdate(BaseModel):
    theme: Theme | None = None
    language: Language | None = None


@router.get("/api/preferences", response_model=PreferencesView)
async def get_preferences(workspace: Workspace = Depends(get_workspace)):
    return PreferencesView(theme=workspace.theme, language=workspace.language)


@router.put("/api/preferences", response_model=PreferencesView)
async def update_preferences(
    body: PreferencesUpdate,
    workspace: Workspace = Depends(get_workspace),
):
    if body.theme is not None:
        await workspace.set_theme(body.theme)
    if body.language is not None:
        workspace.set_language(body.language)
    return PreferencesView(theme=workspace.theme, language=workspace.language)
