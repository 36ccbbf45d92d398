"""Workspace -- 任务看板 + 当前会话 + 偏好

把界面事件映射为状态流转：
- 看板变更写入内存 TaskBoard，并 best-effort 镜像到 SQLite
- 打开另一个任务时调用 session.switch_task()（同一任务重复打开不清空）
- 删除当前打开的任务时清空会话引用
- TurnExecutor 通过回调上报任务状态变更，由此处落到看板
"""

import structlog
from helperkust.core.board import TaskBoard
from helperkust.core.models import AssistanceMode, Language, Task, TaskStatus, Theme
from helperkust.core.session import ChatSession
from helperkust.core.store import StoreGroup
from helperkust.provider import ProviderConfig

from .turn_executor import Generator, TurnExecutor, TurnOutcome

log = structlog.get_logger()


class Workspace:
    """单用户工作区，同一时间只存在一个会话"""

    def __init__(
        self,
        board: TaskBoard,
        stores: StoreGroup,
        generator: Generator,
        provider_config: ProviderConfig,
        language: Language = Language.RU,
        theme: Theme = Theme.LIGHT,
    ) -> None:
        self._board = board
        self._stores = stores
        self._session = ChatSession()
        self._executor = TurnExecutor(
            generator,
            provider_config,
            on_status_change=self.handle_status_signal,
        )
        self.language = language
        self.theme = theme

    @property
    def board(self) -> TaskBoard:
        return self._board

    @property
    def session(self) -> ChatSession:
        return self._session

    @property
    def active_task(self) -> Task | None:
        if self._session.task_id is None:
            return None
        return self._board.get_task(self._session.task_id)

    # ============================================================
    # 任务看板
    # ============================================================

    async def add_task(self, title: str, description: str | None = None) -> Task:
        """创建任务（插入表头）并立即打开

        Raises:
            ValueError: 标题为空
        """
        task = self._board.add_task(title, description)
        await self._stores.save_task(task)
        log.info("task_created", task_id=task.task_id)
        self.open_task(task.task_id)
        return task

    def open_task(self, task_id: str) -> Task | None:
        """打开任务；切换到另一个任务时丢弃当前会话"""
        task = self._board.get_task(task_id)
        if task is None:
            return None
        if self._session.task_id != task_id:
            self._session.switch_task(task_id)
        return task

    async def set_task_status(self, task_id: str, status: TaskStatus) -> Task | None:
        task = self._board.set_status(task_id, status)
        if task is not None:
            await self._stores.save_task(task)
        return task

    async def toggle_task(self, task_id: str) -> Task | None:
        task = self._board.toggle_status(task_id)
        if task is not None:
            await self._stores.save_task(task)
        return task

    async def delete_task(self, task_id: str) -> bool:
        """删除任务；若为当前打开的任务则清空会话"""
        if not self._board.delete_task(task_id):
            return False
        await self._stores.delete_task(task_id)
        if self._session.task_id == task_id:
            self._session.switch_task(None)
        log.info("task_deleted", task_id=task_id)
        return True

    async def handle_status_signal(self, task_id: str, status: TaskStatus) -> None:
        """会话层上报的状态变更；IN_PROGRESS 只从 PENDING 推进"""
        task = self._board.get_task(task_id)
        if task is None:
            return
        if status == TaskStatus.IN_PROGRESS and task.status != TaskStatus.PENDING:
            return
        await self.set_task_status(task_id, status)

    # ============================================================
    # 会话
    # ============================================================

    def select_mode(self, mode: AssistanceMode) -> bool:
        return self._session.select_mode(mode)

    async def submit_turn(
        self,
        text: str,
        image: str | None = None,
        mode: AssistanceMode | None = None,
    ) -> TurnOutcome:
        return await self._executor.execute(
            self._session,
            text,
            image=image,
            mode=mode,
            language=self.language,
        )

    def reset_session(self) -> None:
        self._session.reset()

    # ============================================================
    # 偏好
    # ============================================================

    async def set_theme(self, theme: Theme) -> None:
        self.theme = theme
        await self._stores.save_theme(theme)

    def set_language(self, language: Language) -> None:
        self.language = language
