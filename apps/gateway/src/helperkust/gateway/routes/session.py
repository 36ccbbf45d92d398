"""会话路由

GET  /api/session        当前会话视图
POST /api/session/mode   选择模式（锁定后为 no-op）
POST /api/session/turn   提交一轮（被拒绝时返回 status=REJECTED，不报错）
POST /api/session/reset  重置会话
PUT  /api/session/draft  更新输入草稿
"""

from fastapi import APIRouter, Depends
from helperkust.core.models import AssistanceMode, ChatMessage, SessionState
from helperkust.core.session import ChatSession, SessionDraft
from pydantic import BaseModel, Field

from ..deps import get_workspace
from ..services.turn_executor import TurnOutcome
from ..services.workspace import Workspace

router = APIRouter()


class SessionView(BaseModel):
    """会话视图"""

    session_id: str
    task_id: str | None
    state: SessionState
    mode: AssistanceMode | None
    mode_locked: bool
    pending: bool
    messages: list[ChatMessage]
    draft: SessionDraft

    @classmethod
    def from_session(cls, session: ChatSession) -> "SessionView":
        return cls(
            session_id=session.session_id,
            task_id=session.task_id,
            state=session.state,
            mode=session.mode,
            mode_locked=session.is_mode_locked,
            pending=session.pending,
            messages=session.messages,
            draft=session.draft,
        )


class ModeRequest(BaseModel):
    mode: AssistanceMode


class ModeResponse(BaseModel):
    accepted: bool
    session: SessionView


class TurnRequest(BaseModel):
    """提交一轮的请求体"""

    text: str = Field(default="", description="用户文本")
    image: str | None = Field(default=None, description="图片 data URL")
    mode: AssistanceMode | None = Field(
        default=None,
        description="会话尚未锁定模式时使用",
    )


class DraftRequest(BaseModel):
    text: str = Field(default="")
    image: str | None = Field(default=None)


@router.get("/api/session", response_model=SessionView)
async def get_session(workspace: Workspace = Depends(get_workspace)):
    return SessionView.from_session(workspace.session)


@router.post("/api/session/mode", response_model=ModeResponse)
async def select_mode(
    body: ModeRequest,
    workspace: Workspace = Depends(get_workspace),
):
    accepted = workspace.select_mode(body.mode)
    return ModeResponse(
        accepted=accepted,
        session=SessionView.from_session(workspace.session),
    )


@router.post("/api/session/turn", response_model=TurnOutcome)
async def submit_turn(
    body: TurnRequest,
    workspace: Workspace = Depends(get_workspace),
):
    """提交一轮并等待 model 回复（失败时回复为本地化错误提示）"""
    return await workspace.submit_turn(body.text, image=body.image, mode=body.mode)


@router.post("/api/session/reset", response_model=SessionView)
async def reset_session(workspace: Workspace = Depends(get_workspace)):
    workspace.reset_session()
    return SessionView.from_session(workspace.session)


@router.put("/api/session/draft", response_model=SessionView)
async def update_draft(
    body: DraftRequest,
    workspace: Workspace = Depends(get_workspace),
):
    workspace.session.update_draft(text=body.text, image=body.image)
    return SessionView.from_session(workspace.session)
